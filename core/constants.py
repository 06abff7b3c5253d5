"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → budgetapp/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    API_TITLE: str = "BudgetApp API"
    API_VERSION: str = "1.0.0"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 5000

    CURRENCY: str = "USD"
    TIMEZONE: str = "UTC"
    ACCOUNT_COLOR: str = "#4F46E5"
    CATEGORY_ICON: str = "📌"
    CATEGORY_COLOR: str = "#6B7280"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    JWT_ALGORITHM: str = "HS256"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "budgetapp_prod.db"
    DEV_DB: Path = DATA_DIR / "budgetapp_dev.db"


class Pagination:
    """페이지네이션 한도"""

    DEFAULT_PAGE: int = 1
    DEFAULT_LIMIT: int = 20
    MAX_LIMIT: int = 100


class ErrorCodes:
    """API 에러 코드 (클라이언트가 프로그램적으로 분기하는 값)"""

    # 인증
    INVALID_CREDENTIALS: str = "INVALID_CREDENTIALS"
    TOKEN_EXPIRED: str = "TOKEN_EXPIRED"
    TOKEN_INVALID: str = "TOKEN_INVALID"
    UNAUTHORIZED: str = "UNAUTHORIZED"

    # 검증
    VALIDATION_ERROR: str = "VALIDATION_ERROR"
    INVALID_INPUT: str = "INVALID_INPUT"

    # 리소스
    NOT_FOUND: str = "NOT_FOUND"
    ALREADY_EXISTS: str = "ALREADY_EXISTS"
    ROUTE_NOT_FOUND: str = "ROUTE_NOT_FOUND"

    # 서버
    INTERNAL_ERROR: str = "INTERNAL_ERROR"
    DATABASE_ERROR: str = "DATABASE_ERROR"


# 회원가입 시 생성되는 기본 카테고리 (name, type, icon, color)
DEFAULT_CATEGORIES: list[tuple[str, str, str, str]] = [
    # 지출
    ("Food & Dining", "expense", "🍔", "#FF6B6B"),
    ("Transport", "expense", "🚗", "#4ECDC4"),
    ("Shopping", "expense", "🛍️", "#45B7D1"),
    ("Entertainment", "expense", "🎬", "#96CEB4"),
    ("Bills & Utilities", "expense", "📱", "#FECA57"),
    ("Healthcare", "expense", "🏥", "#FF9FF3"),
    ("Education", "expense", "📚", "#54A0FF"),
    ("Rent", "expense", "🏠", "#48DBFB"),
    ("Insurance", "expense", "🛡️", "#0ABDE3"),
    ("Others", "expense", "📌", "#C7ECEE"),
    # 수입
    ("Salary", "income", "💰", "#6C5CE7"),
    ("Business", "income", "💼", "#A29BFE"),
    ("Investment", "income", "📈", "#74B9FF"),
    ("Freelance", "income", "💻", "#81ECEC"),
    ("Others", "income", "💵", "#55A3FF"),
]

# 예산 한도 기본값 (카테고리 → 월 한도). settings.yaml의 budget.limits로 덮어씀
DEFAULT_BUDGET_LIMITS: dict[str, str] = {
    "Housing": "2000",
    "Food & Dining": "1000",
    "Transportation": "600",
    "Shopping": "500",
    "Entertainment": "400",
}

# 예산 진행 상태 임계값 (%)
BUDGET_WARNING_PERCENT: int = 80
BUDGET_EXCEEDED_PERCENT: int = 100

# 지출 분류 차트 색상 (순서대로 할당)
EXPENSE_BREAKDOWN_COLORS: list[str] = [
    "#3b82f6", "#10b981", "#f59e0b", "#8b5cf6",
    "#ec4899", "#06b6d4", "#f97316", "#6b7280",
]
EXPENSE_BREAKDOWN_LIMIT: int = 8
TRANSACTION_STATS_CATEGORY_LIMIT: int = 10

# 다가오는 청구서로 간주하는 리마인더 카테고리
BILL_CATEGORIES: tuple[str, ...] = (
    "Bills & Utilities",
    "Rent",
    "Loan Payment",
    "Insurance",
)
UPCOMING_BILLS_DAYS: int = 30
UPCOMING_BILLS_LIMIT: int = 10
UPCOMING_LOAN_PAYMENTS_LIMIT: int = 5

# 계좌 상세 / 대시보드 최근 거래 수
RECENT_TRANSACTIONS_LIMIT: int = 10
# 계좌 통계 현금 흐름 집계 기간 (일)
CASH_FLOW_DAYS: int = 30

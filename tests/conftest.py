"""
pytest 공통 fixture 정의

설정 파일, 인메모리 DB, 샘플 엔티티
"""

import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import MEMORY_DB, SQLiteAdapter, init_schema
from core.config.loader import Settings, get_settings
from core.domain.entities import Account, Loan, User
from core.storage.account_store import AccountStore
from core.storage.user_store import UserStore

SETTINGS_CONTENT = """# 테스트용 settings.yaml
environment: development

auth:
  jwt_secret: "test_access_secret"
  jwt_refresh_secret: "test_refresh_secret"
  access_token_expire_minutes: 15
  refresh_token_expire_days: 30

web:
  cors_origins:
    - "http://localhost:5173"

budget:
  limits:
    "Food & Dining": 1000
    Shopping: 500
"""


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(SETTINGS_CONTENT, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_production(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (production 환경)"""
    content = SETTINGS_CONTENT.replace("environment: development", "environment: production")
    settings_path = temp_dir / "settings_prod.yaml"
    settings_path.write_text(content, encoding="utf-8")
    return settings_path


@pytest.fixture
def settings(temp_settings_file: Path) -> Settings:
    """테스트용 Settings (싱글턴 초기화 후 로드)"""
    Settings.reset()
    yield get_settings(temp_settings_file)
    Settings.reset()


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[SQLiteAdapter, None]:
    """스키마가 준비된 인메모리 DB"""
    adapter = SQLiteAdapter(MEMORY_DB)
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


@pytest_asyncio.fixture
async def user(db: SQLiteAdapter) -> User:
    """저장된 테스트 사용자"""
    user = User(
        email="jane@example.com",
        password_hash="not-a-real-hash",
        first_name="Jane",
        last_name="Doe",
    )
    async with db.transaction():
        await UserStore(db).insert(user)
    return user


@pytest_asyncio.fixture
async def account(db: SQLiteAdapter, user: User) -> Account:
    """기초 잔액 1000인 계좌"""
    account = Account(
        user_id=user.id,
        name="Main Checking",
        type="current",
        balance=Decimal("1000"),
    )
    async with db.transaction():
        await AccountStore(db).insert(account)
    return account


@pytest.fixture
def make_loan():
    """테스트용 대출 생성 함수 (원금 1200, 월 100, 1년)"""

    def _make(user_id: str = "user-1", **overrides) -> Loan:
        values = {
            "user_id": user_id,
            "loan_name": "Car Loan",
            "loan_type": "auto",
            "lender": "Bank",
            "principal_amount": Decimal("1200"),
            "current_balance": Decimal("1200"),
            "interest_rate": Decimal("5"),
            "monthly_payment": Decimal("100"),
            "start_date": date(2026, 1, 1),
            "end_date": date(2027, 1, 1),
            "next_payment_date": date(2026, 2, 1),
        }
        values.update(overrides)
        return Loan(**values)

    return _make

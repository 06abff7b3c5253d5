"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class AppEnvironment(str, Enum):
    """실행 환경 (운영 / 개발)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class TransactionType(str, Enum):
    """거래 유형

    금액은 항상 양수로 저장하고 부호는 유형으로 결정.
    """

    INCOME = "income"
    EXPENSE = "expense"


class AccountType(str, Enum):
    """계좌 유형"""

    SAVINGS = "savings"
    CURRENT = "current"
    CREDIT_CARD = "credit_card"
    CASH = "cash"
    DIGITAL_WALLET = "digital_wallet"


class LoanType(str, Enum):
    """대출 유형"""

    PERSONAL = "personal"
    MORTGAGE = "mortgage"
    AUTO = "auto"
    STUDENT = "student"
    BUSINESS = "business"
    OTHER = "other"


class LoanStatus(str, Enum):
    """대출 상태"""

    ACTIVE = "active"
    PAID_OFF = "paid_off"
    DEFAULTED = "defaulted"


class InvestmentType(str, Enum):
    """투자 유형"""

    STOCKS = "stocks"
    BONDS = "bonds"
    MUTUAL_FUNDS = "mutual_funds"
    ETF = "etf"
    CRYPTO = "crypto"
    REAL_ESTATE = "real_estate"
    OTHER = "other"


class ReminderFrequency(str, Enum):
    """리마인더 반복 주기"""

    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class BudgetStatus(str, Enum):
    """예산 진행 상태"""

    ON_TRACK = "on-track"
    WARNING = "warning"
    EXCEEDED = "exceeded"


class StatsPeriod(str, Enum):
    """거래 통계 기간"""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class SortOrder(str, Enum):
    """정렬 방향"""

    ASC = "asc"
    DESC = "desc"

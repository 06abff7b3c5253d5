"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
JSON 필드명은 camelCase (snake_case도 허용).
"""

import datetime
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from core.types import (
    AccountType,
    InvestmentType,
    LoanStatus,
    LoanType,
    ReminderFrequency,
    TransactionType,
)

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    """camelCase 별칭 기본 모델"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def changes(self) -> dict[str, Any]:
        """요청에 실제로 포함된 필드만 (부분 수정용)"""
        return self.model_dump(exclude_unset=True)


# =============================================================================
# 인증 / 사용자
# =============================================================================

class RegisterRequest(CamelModel):
    """회원 가입 요청"""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254, description="이메일")
    password: str = Field(..., min_length=6, description="비밀번호 (6자 이상)")
    first_name: str = Field(..., min_length=1, max_length=50, description="이름")
    last_name: str = Field(..., min_length=1, max_length=50, description="성")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "email": "jane@example.com",
                    "password": "secret123",
                    "firstName": "Jane",
                    "lastName": "Doe",
                }
            ]
        }
    )


class LoginRequest(CamelModel):
    """로그인 요청"""

    email: str = Field(..., min_length=1, description="이메일")
    password: str = Field(..., min_length=1, description="비밀번호")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RefreshTokenRequest(CamelModel):
    """토큰 갱신 요청"""

    refresh_token: str = Field(..., min_length=1, description="refresh 토큰")


class ProfileUpdateRequest(CamelModel):
    """프로필 수정 요청"""

    first_name: str | None = Field(default=None, min_length=1, max_length=50)
    last_name: str | None = Field(default=None, min_length=1, max_length=50)
    avatar: str | None = Field(default=None, description="아바타 URL")
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    timezone: str | None = Field(default=None, min_length=1)


class NotificationPreferences(CamelModel):
    """알림 설정"""

    email: bool | None = None
    in_app: bool | None = None
    reminders: bool | None = None


class PreferencesUpdateRequest(CamelModel):
    """환경설정 수정 요청"""

    dashboard_layout: Any = Field(default=None, description="대시보드 위젯 배치")
    notifications: NotificationPreferences | None = None


# =============================================================================
# 계좌
# =============================================================================

class AccountCreateRequest(CamelModel):
    """계좌 생성 요청

    balance는 기초 잔액 (생성 시에만 지정 가능)
    """

    name: str = Field(..., min_length=1, max_length=50, description="계좌 이름")
    type: AccountType = Field(..., description="계좌 유형")
    balance: Decimal = Field(default=Decimal("0"), description="기초 잔액")
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    color: str | None = Field(default=None, description="표시 색상")
    icon: str | None = None
    description: str | None = Field(default=None, max_length=200)
    is_active: bool = True


class AccountUpdateRequest(CamelModel):
    """계좌 수정 요청

    balance/userId가 포함되어도 무시된다.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=50)
    type: AccountType | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    color: str | None = None
    icon: str | None = None
    description: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None
    balance: Decimal | None = Field(default=None, description="무시됨")


# =============================================================================
# 거래
# =============================================================================

class RecurringDetails(CamelModel):
    """반복 거래 정보"""

    frequency: ReminderFrequency | None = None
    end_date: date | None = None
    parent_transaction_id: str | None = None


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    return [t.strip() for t in tags if t and t.strip()]


class TransactionCreateRequest(CamelModel):
    """거래 생성 요청"""

    account_id: str = Field(..., min_length=1, description="계좌 ID")
    type: TransactionType = Field(..., description="거래 유형 (income/expense)")
    amount: Decimal = Field(..., ge=0, description="금액 (양수)")
    category: str = Field(..., min_length=1, description="카테고리")
    description: str = Field(default="", max_length=500)
    date: datetime.date = Field(..., description="거래일 (YYYY-MM-DD)")
    tags: list[str] = Field(default_factory=list)
    is_recurring: bool = False
    recurring_details: RecurringDetails | None = None

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v) or []


class TransactionUpdateRequest(CamelModel):
    """거래 수정 요청 (부분 수정)"""

    account_id: str | None = Field(default=None, min_length=1)
    type: TransactionType | None = None
    amount: Decimal | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, max_length=500)
    date: datetime.date | None = None
    tags: list[str] | None = None
    is_recurring: bool | None = None
    recurring_details: RecurringDetails | None = None

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v)


# =============================================================================
# 카테고리 / 리마인더
# =============================================================================

class CategoryCreateRequest(CamelModel):
    """카테고리 생성 요청"""

    name: str = Field(..., min_length=1, max_length=50)
    type: TransactionType
    icon: str | None = None
    color: str | None = None


class CategoryUpdateRequest(CamelModel):
    """카테고리 수정 요청"""

    name: str | None = Field(default=None, min_length=1, max_length=50)
    type: TransactionType | None = None
    icon: str | None = None
    color: str | None = None
    is_active: bool | None = None


class ReminderCreateRequest(CamelModel):
    """리마인더 생성 요청"""

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    amount: Decimal | None = Field(default=None, ge=0)
    due_date: date
    frequency: ReminderFrequency = ReminderFrequency.ONCE
    category: str | None = None
    is_active: bool = True


class ReminderUpdateRequest(CamelModel):
    """리마인더 수정 요청"""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    amount: Decimal | None = Field(default=None, ge=0)
    due_date: date | None = None
    frequency: ReminderFrequency | None = None
    category: str | None = None
    is_active: bool | None = None
    completed_dates: list[date] | None = None


# =============================================================================
# 투자
# =============================================================================

class InvestmentCreateRequest(CamelModel):
    """투자 생성 요청"""

    name: str = Field(..., min_length=1)
    type: InvestmentType
    quantity: Decimal = Field(..., ge=0)
    purchase_price: Decimal = Field(..., ge=0)
    current_price: Decimal = Field(..., ge=0)
    purchase_date: date
    broker: str = Field(..., min_length=1)
    notes: str | None = None


class InvestmentUpdateRequest(CamelModel):
    """투자 수정 요청"""

    name: str | None = Field(default=None, min_length=1)
    type: InvestmentType | None = None
    quantity: Decimal | None = Field(default=None, ge=0)
    purchase_price: Decimal | None = Field(default=None, ge=0)
    current_price: Decimal | None = Field(default=None, ge=0)
    purchase_date: date | None = None
    broker: str | None = Field(default=None, min_length=1)
    notes: str | None = None


# =============================================================================
# 대출
# =============================================================================

class LoanCreateRequest(CamelModel):
    """대출 생성 요청

    currentBalance가 없으면 principalAmount로 시작.
    status를 주지 않으면 active로 시작.
    """

    loan_name: str = Field(..., min_length=1)
    loan_type: LoanType
    lender: str = Field(..., min_length=1)
    principal_amount: Decimal = Field(..., ge=0)
    current_balance: Decimal | None = Field(default=None, ge=0)
    interest_rate: Decimal = Field(..., ge=0, le=100)
    monthly_payment: Decimal = Field(..., ge=0)
    start_date: date
    end_date: date
    next_payment_date: date
    status: LoanStatus = LoanStatus.ACTIVE
    notes: str | None = None


class LoanUpdateRequest(CamelModel):
    """대출 직접 수정 요청 (상태/잔액 포함 모든 필드)"""

    loan_name: str | None = Field(default=None, min_length=1)
    loan_type: LoanType | None = None
    lender: str | None = Field(default=None, min_length=1)
    principal_amount: Decimal | None = Field(default=None, ge=0)
    current_balance: Decimal | None = Field(default=None, ge=0)
    interest_rate: Decimal | None = Field(default=None, ge=0, le=100)
    monthly_payment: Decimal | None = Field(default=None, ge=0)
    start_date: date | None = None
    end_date: date | None = None
    next_payment_date: date | None = None
    status: LoanStatus | None = None
    notes: str | None = None


class LoanPaymentRequest(CamelModel):
    """대출 상환 요청"""

    amount: Decimal = Field(..., gt=0, description="상환 금액 (0 초과)")

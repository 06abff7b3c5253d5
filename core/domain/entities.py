"""
도메인 엔티티

사용자 소유 문서(계좌, 거래, 대출, 투자, 카테고리, 리마인더)와 사용자.
모든 금액/수량은 Decimal, 날짜는 date, 감사 시각은 UTC datetime.
Enum 필드는 값(str)으로 보관 (str Enum과 직접 비교 가능).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from core.constants import Defaults
from core.types import LoanStatus
from core.utils.dates import now_utc


def new_id() -> str:
    """문서 ID 생성 (uuid4 hex)"""
    return uuid4().hex


def default_preferences() -> dict[str, Any]:
    """사용자 기본 환경설정"""
    return {
        "dashboard_layout": None,
        "notifications": {
            "email": True,
            "in_app": True,
            "reminders": True,
        },
    }


@dataclass
class User:
    """사용자"""

    email: str
    password_hash: str
    first_name: str
    last_name: str
    avatar: str | None = None
    currency: str = Defaults.CURRENCY
    timezone: str = Defaults.TIMEZONE
    preferences: dict[str, Any] = field(default_factory=default_preferences)
    is_active: bool = True
    last_login: datetime | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)


@dataclass
class Account:
    """계좌

    balance는 거래 생성/수정/삭제의 부수효과로만 변경된다.
    사용자가 직접 지정할 수 있는 것은 생성 시점의 기초 잔액뿐.
    """

    user_id: str
    name: str
    type: str
    balance: Decimal = Decimal("0")
    currency: str = Defaults.CURRENCY
    color: str = Defaults.ACCOUNT_COLOR
    icon: str | None = None
    description: str | None = None
    is_active: bool = True
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)


@dataclass
class Transaction:
    """거래 (수입/지출)

    amount는 항상 양수, 부호는 type으로 결정.
    """

    user_id: str
    account_id: str
    type: str
    amount: Decimal
    category: str
    date: date
    description: str = ""
    tags: list[str] = field(default_factory=list)
    is_recurring: bool = False
    recurring_details: dict[str, Any] | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)


@dataclass
class Category:
    """거래 카테고리"""

    user_id: str
    name: str
    type: str
    icon: str = Defaults.CATEGORY_ICON
    color: str = Defaults.CATEGORY_COLOR
    is_default: bool = False
    is_active: bool = True
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)


@dataclass
class Investment:
    """투자 보유분

    평가액/손익은 저장하지 않고 조회 시마다 계산.
    """

    user_id: str
    name: str
    type: str
    quantity: Decimal
    purchase_price: Decimal
    current_price: Decimal
    purchase_date: date
    broker: str
    notes: str | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def total_value(self) -> Decimal:
        """현재 평가액"""
        return self.quantity * self.current_price

    @property
    def invested_amount(self) -> Decimal:
        """매입 금액"""
        return self.quantity * self.purchase_price

    @property
    def gain_loss(self) -> Decimal:
        """평가 손익"""
        return self.total_value - self.invested_amount

    @property
    def gain_loss_percentage(self) -> float:
        """평가 손익률 (%)"""
        invested = self.invested_amount
        if invested <= 0:
            return 0.0
        return round(float(self.gain_loss / invested * 100), 2)


@dataclass
class Loan:
    """대출

    current_balance는 active 상태에서 상환으로만 감소.
    0이 되면 paid_off (상환 경로로는 되돌릴 수 없음).
    """

    user_id: str
    loan_name: str
    loan_type: str
    lender: str
    principal_amount: Decimal
    current_balance: Decimal
    interest_rate: Decimal
    monthly_payment: Decimal
    start_date: date
    end_date: date
    next_payment_date: date
    status: str = LoanStatus.ACTIVE.value
    notes: str | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)


@dataclass
class Reminder:
    """납부/일정 리마인더"""

    user_id: str
    title: str
    due_date: date
    frequency: str
    description: str | None = None
    amount: Decimal | None = None
    category: str | None = None
    is_active: bool = True
    last_notified: datetime | None = None
    completed_dates: list[date] = field(default_factory=list)
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)


def apply_changes(
    entity: Any,
    changes: dict[str, Any],
    nullable: frozenset[str] | set[str] = frozenset(),
) -> Any:
    """부분 수정 적용 (제자리 변경)

    None 값은 nullable에 속한 필드만 반영하고 나머지는 건너뛴다.
    """
    for key, value in changes.items():
        if value is None and key not in nullable:
            continue
        setattr(entity, key, value)
    return entity

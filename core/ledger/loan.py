"""
대출 원장

상환 적용과 상태 전이, 조회 시점 파생값 계산.

상환 규칙:
- active 대출만 상환 가능
- current_balance = max(0, current_balance - amount)
- 0이 되면 paid_off, 아니면 next_payment_date를 한 달 뒤로
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from core.domain.entities import Loan
from core.domain.state_machines import LoanStateMachine
from core.errors import ValidationError
from core.types import LoanStatus
from core.utils.dates import add_months, months_between, today_utc

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def record_payment(loan: Loan, amount: Decimal) -> Loan:
    """상환 적용 (loan을 제자리에서 변경)

    저장은 호출자가 쓰기 트랜잭션 안에서 수행.

    Args:
        loan: 대상 대출
        amount: 상환 금액 (> 0)

    Returns:
        변경된 loan

    Raises:
        ValidationError: active가 아닌 대출, 또는 0 이하 금액
    """
    machine = LoanStateMachine(loan.status)
    if not machine.accepts_payment:
        raise ValidationError("Cannot record payment for inactive loan")

    if amount <= 0:
        raise ValidationError("Payment amount must be greater than 0")

    before = loan.current_balance
    loan.current_balance = max(ZERO, before - amount)

    if loan.current_balance == 0:
        loan.status = machine.transition(LoanStatus.PAID_OFF)
    else:
        loan.next_payment_date = add_months(loan.next_payment_date, 1)

    logger.info(
        f"Loan payment: loan={loan.id} amount={amount} "
        f"balance {before} → {loan.current_balance} status={loan.status}"
    )
    return loan


@dataclass(frozen=True)
class LoanMetrics:
    """대출 파생값 (저장하지 않음)"""

    months_remaining: int
    total_interest: Decimal
    paid_amount: Decimal
    progress_percentage: float


def loan_metrics(loan: Loan, today: date | None = None) -> LoanMetrics:
    """조회 시점 파생값 계산

    total_interest는 월 상환액 × 전체 기간(월) - 원금 근사치.
    """
    if today is None:
        today = today_utc()

    term_months = months_between(loan.start_date, loan.end_date)
    paid = loan.principal_amount - loan.current_balance

    if loan.principal_amount > 0:
        progress = round(float(paid / loan.principal_amount * 100), 2)
    else:
        progress = 0.0

    return LoanMetrics(
        months_remaining=months_between(today, loan.end_date),
        total_interest=loan.monthly_payment * term_months - loan.principal_amount,
        paid_amount=paid,
        progress_percentage=progress,
    )

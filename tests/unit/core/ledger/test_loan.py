"""
대출 원장 테스트

상환 적용, 상태 전이, 파생값
"""

from datetime import date
from decimal import Decimal

import pytest

from core.errors import ValidationError
from core.ledger.loan import loan_metrics, record_payment
from core.types import LoanStatus


class TestRecordPayment:
    """record_payment 테스트"""

    def test_partial_payment(self, make_loan) -> None:
        loan = make_loan()

        record_payment(loan, Decimal("500"))

        assert loan.current_balance == Decimal("700")
        assert loan.status == LoanStatus.ACTIVE
        assert loan.next_payment_date == date(2026, 3, 1)

    def test_exact_payoff(self, make_loan) -> None:
        """잔액 0이면 paid_off, 납부일 유지"""
        loan = make_loan(current_balance=Decimal("700"))

        record_payment(loan, Decimal("700"))

        assert loan.current_balance == Decimal("0")
        assert loan.status == "paid_off"
        assert loan.next_payment_date == date(2026, 2, 1)

    def test_overpayment_clamped(self, make_loan) -> None:
        loan = make_loan(current_balance=Decimal("50"))

        record_payment(loan, Decimal("80"))

        assert loan.current_balance == Decimal("0")
        assert loan.status == "paid_off"

    def test_paid_off_rejects(self, make_loan) -> None:
        loan = make_loan(current_balance=Decimal("0"), status="paid_off")

        with pytest.raises(ValidationError, match="inactive loan"):
            record_payment(loan, Decimal("10"))

        assert loan.current_balance == Decimal("0")

    def test_defaulted_rejects(self, make_loan) -> None:
        with pytest.raises(ValidationError):
            record_payment(make_loan(status="defaulted"), Decimal("10"))

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_non_positive_amount(self, make_loan, amount: str) -> None:
        loan = make_loan()

        with pytest.raises(ValidationError, match="greater than 0"):
            record_payment(loan, Decimal(amount))

        assert loan.current_balance == Decimal("1200")

    def test_month_end_next_payment(self, make_loan) -> None:
        """1/31 다음 납부일은 2/28"""
        loan = make_loan(next_payment_date=date(2026, 1, 31))

        record_payment(loan, Decimal("100"))

        assert loan.next_payment_date == date(2026, 2, 28)


class TestLoanMetrics:
    """loan_metrics 테스트"""

    def test_values(self, make_loan) -> None:
        loan = make_loan(current_balance=Decimal("900"))

        metrics = loan_metrics(loan, today=date(2026, 4, 1))

        assert metrics.months_remaining == 9
        # 100 × 12개월 - 1200
        assert metrics.total_interest == Decimal("0")
        assert metrics.paid_amount == Decimal("300")
        assert metrics.progress_percentage == 25.0

    def test_total_interest(self, make_loan) -> None:
        loan = make_loan(monthly_payment=Decimal("110.50"))

        assert loan_metrics(loan, today=date(2026, 1, 1)).total_interest == Decimal("126.00")

    def test_past_end_is_negative(self, make_loan) -> None:
        metrics = loan_metrics(make_loan(), today=date(2027, 3, 1))

        assert metrics.months_remaining == -2

    def test_zero_principal(self, make_loan) -> None:
        loan = make_loan(principal_amount=Decimal("0"), current_balance=Decimal("0"))

        assert loan_metrics(loan, today=date(2026, 1, 1)).progress_percentage == 0.0

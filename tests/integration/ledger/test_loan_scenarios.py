"""
대출 상환 통합 테스트

1200 → 700 → 0 (paid_off) → 추가 상환 거부
"""

from datetime import date
from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.entities import User
from core.errors import NotFoundError, ValidationError
from core.storage.loan_store import LoanStore
from web.models.requests import LoanCreateRequest, LoanUpdateRequest
from web.services.loan_service import LoanService


def _loan_request(**overrides) -> LoanCreateRequest:
    values = {
        "loan_name": "Car Loan",
        "loan_type": "auto",
        "lender": "Bank",
        "principal_amount": Decimal("1200"),
        "interest_rate": Decimal("5"),
        "monthly_payment": Decimal("100"),
        "start_date": date(2026, 1, 1),
        "end_date": date(2027, 1, 1),
        "next_payment_date": date(2026, 2, 1),
    }
    values.update(overrides)
    return LoanCreateRequest(**values)


class TestLoanLifecycle:
    """상환 시나리오"""

    async def test_pay_down_to_paid_off(self, db: SQLiteAdapter, user: User) -> None:
        service = LoanService(db)
        loan = await service.create_loan(user.id, _loan_request())
        assert loan["currentBalance"] == "1200"

        after_first = await service.record_payment(user.id, loan["id"], Decimal("500"))
        assert after_first["currentBalance"] == "700"
        assert after_first["status"] == "active"
        assert after_first["nextPaymentDate"] == "2026-03-01"

        after_second = await service.record_payment(user.id, loan["id"], Decimal("700"))
        assert after_second["currentBalance"] == "0"
        assert after_second["status"] == "paid_off"

        with pytest.raises(ValidationError, match="inactive loan"):
            await service.record_payment(user.id, loan["id"], Decimal("1"))

        stored = await LoanStore(db).find_by_id(loan["id"])
        assert stored.current_balance == Decimal("0")
        assert stored.status == "paid_off"

    async def test_explicit_current_balance(self, db: SQLiteAdapter, user: User) -> None:
        loan = await LoanService(db).create_loan(
            user.id,
            _loan_request(current_balance=Decimal("800")),
        )

        assert loan["currentBalance"] == "800"

    async def test_direct_update_can_reactivate(self, db: SQLiteAdapter, user: User) -> None:
        """직접 수정은 상태 머신을 거치지 않음"""
        service = LoanService(db)
        loan = await service.create_loan(user.id, _loan_request())
        await service.record_payment(user.id, loan["id"], Decimal("1200"))

        updated = await service.update_loan(
            user.id,
            loan["id"],
            LoanUpdateRequest(status="active", current_balance=Decimal("50")),
        )

        assert updated["status"] == "active"
        after = await service.record_payment(user.id, loan["id"], Decimal("50"))
        assert after["status"] == "paid_off"

    async def test_other_users_loan(self, db: SQLiteAdapter, user: User) -> None:
        service = LoanService(db)
        loan = await service.create_loan(user.id, _loan_request())

        with pytest.raises(NotFoundError):
            await service.record_payment("intruder", loan["id"], Decimal("10"))

    async def test_detail_includes_metrics(self, db: SQLiteAdapter, user: User) -> None:
        service = LoanService(db)
        loan = await service.create_loan(user.id, _loan_request())
        await service.record_payment(user.id, loan["id"], Decimal("300"))

        detail = await service.get_loan(user.id, loan["id"])

        assert detail["paidAmount"] == "300"
        assert detail["progressPercentage"] == 25.0
        assert detail["totalInterest"] == "0"
        assert "monthsRemaining" in detail

    async def test_list_sort_and_summary(self, db: SQLiteAdapter, user: User) -> None:
        service = LoanService(db)
        await service.create_loan(user.id, _loan_request(loan_name="B", next_payment_date=date(2026, 2, 20)))
        await service.create_loan(user.id, _loan_request(loan_name="A", next_payment_date=date(2026, 2, 5)))

        listing = await service.list_loans(user.id)

        assert [loan["loanName"] for loan in listing["loans"]] == ["A", "B"]
        assert listing["summary"]["totalPrincipal"] == "2400"

        with pytest.raises(ValidationError, match="Invalid sort field"):
            await service.list_loans(user.id, sort_by="lender")

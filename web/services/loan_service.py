"""
대출 서비스

상환은 LoanStateMachine을 거치고, 직접 수정은 모든 필드를 그대로 반영한다.
"""

import logging
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.entities import Loan, apply_changes
from core.errors import NotFoundError, ValidationError
from core.ledger import reporting
from core.ledger.loan import record_payment
from core.storage.loan_store import LoanStore
from core.types import SortOrder
from core.utils.dates import today_utc
from web.models.requests import LoanCreateRequest, LoanUpdateRequest
from web.services.serializers import encode, loan_to_dict

logger = logging.getLogger(__name__)

# API 정렬 필드 → 컬럼
SORT_FIELDS: dict[str, str] = {
    "nextPaymentDate": "next_payment_date",
    "currentBalance": "current_balance",
    "monthlyPayment": "monthly_payment",
    "loanName": "loan_name",
}


class LoanService:
    """대출 서비스"""

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.loans = LoanStore(db)

    async def _get(self, user_id: str, loan_id: str) -> Loan:
        loan = await self.loans.find_by_id(loan_id, user_id=user_id)
        if loan is None:
            raise NotFoundError("Loan not found")
        return loan

    async def list_loans(
        self,
        user_id: str,
        type: str | None = None,
        status: str | None = None,
        sort_by: str = "nextPaymentDate",
        order: SortOrder = SortOrder.ASC,
    ) -> dict[str, Any]:
        """대출 목록 + 요약"""
        column = SORT_FIELDS.get(sort_by)
        if column is None:
            raise ValidationError(
                f"Invalid sort field: {sort_by}",
                details={"allowed": sorted(SORT_FIELDS)},
            )

        query: dict[str, Any] = {"user_id": user_id}
        if type:
            query["loan_type"] = type
        if status:
            query["status"] = status

        loans = await self.loans.find(query, sort=[(column, order)])
        return {
            "loans": [loan_to_dict(loan) for loan in loans],
            "summary": encode(reporting.loan_summary(loans)),
        }

    async def get_loan(self, user_id: str, loan_id: str) -> dict[str, Any]:
        """대출 상세 (남은 개월/총 이자/상환률 포함)"""
        loan = await self._get(user_id, loan_id)
        return loan_to_dict(loan, today_utc(), derived=True)

    async def create_loan(self, user_id: str, request: LoanCreateRequest) -> dict[str, Any]:
        """대출 생성 (current_balance 기본값 = 원금, status 기본값 = active)"""
        current_balance = request.current_balance
        if not current_balance:
            current_balance = request.principal_amount

        loan = Loan(
            user_id=user_id,
            loan_name=request.loan_name,
            loan_type=request.loan_type,
            lender=request.lender,
            principal_amount=request.principal_amount,
            current_balance=current_balance,
            interest_rate=request.interest_rate,
            monthly_payment=request.monthly_payment,
            start_date=request.start_date,
            end_date=request.end_date,
            next_payment_date=request.next_payment_date,
            status=request.status,
            notes=request.notes,
        )

        async with self.db.transaction():
            await self.loans.insert(loan)

        logger.info(f"Loan created: {loan.id} principal={loan.principal_amount} status={loan.status}")
        return loan_to_dict(loan)

    async def update_loan(
        self,
        user_id: str,
        loan_id: str,
        request: LoanUpdateRequest,
    ) -> dict[str, Any]:
        """대출 직접 수정 (status, current_balance 포함)"""
        async with self.db.transaction():
            loan = await self._get(user_id, loan_id)
            apply_changes(loan, request.changes(), nullable={"notes"})
            await self.loans.save(loan)

        logger.info(f"Loan updated: {loan_id} status={loan.status}")
        return loan_to_dict(loan)

    async def delete_loan(self, user_id: str, loan_id: str) -> None:
        async with self.db.transaction():
            deleted = await self.loans.delete_one({"id": loan_id, "user_id": user_id})
            if not deleted:
                raise NotFoundError("Loan not found")

        logger.info(f"Loan deleted: {loan_id}")

    async def record_payment(
        self,
        user_id: str,
        loan_id: str,
        amount: Decimal,
    ) -> dict[str, Any]:
        """상환 기록

        Raises:
            NotFoundError: 대출 없음
            ValidationError: active가 아닌 대출
        """
        async with self.db.transaction():
            loan = await self._get(user_id, loan_id)
            record_payment(loan, amount)
            await self.loans.save(loan)

        return loan_to_dict(loan)

    async def get_stats(self, user_id: str) -> dict[str, Any]:
        """유형별/전체 대출 통계 + 한 달 내 납부 예정"""
        loans = await self.loans.find({"user_id": user_id})
        return encode(reporting.loan_stats(loans, today_utc()))

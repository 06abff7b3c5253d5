"""
LoanStore - 대출 저장소
"""

from core.domain.entities import Loan
from core.storage.document_store import DocumentStore
from core.types import LoanStatus


class LoanStore(DocumentStore[Loan]):
    """대출 저장소"""

    TABLE = "loans"
    ENTITY = Loan

    DECIMAL_FIELDS = frozenset({
        "principal_amount",
        "current_balance",
        "interest_rate",
        "monthly_payment",
    })
    DATE_FIELDS = frozenset({"start_date", "end_date", "next_payment_date"})

    async def find_active(self, user_id: str) -> list[Loan]:
        """진행 중인 대출"""
        return await self.find({"user_id": user_id, "status": LoanStatus.ACTIVE.value})

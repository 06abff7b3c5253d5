"""
TransactionStore - 거래 저장소
"""

from datetime import date

from core.domain.entities import Transaction
from core.storage.document_store import DocumentStore


class TransactionStore(DocumentStore[Transaction]):
    """거래 저장소"""

    TABLE = "transactions"
    ENTITY = Transaction

    DECIMAL_FIELDS = frozenset({"amount"})
    DATE_FIELDS = frozenset({"date"})
    BOOL_FIELDS = frozenset({"is_recurring"})
    JSON_FIELDS = frozenset({"tags", "recurring_details"})

    async def count_for_account(self, user_id: str, account_id: str) -> int:
        """계좌를 참조하는 거래 수"""
        return await self.count_documents({"user_id": user_id, "account_id": account_id})

    async def find_between(
        self,
        user_id: str,
        start: date,
        end: date | None = None,
        type: str | None = None,
    ) -> list[Transaction]:
        """기간 내 거래 (start 이상, end 이하)"""
        filter: dict = {"user_id": user_id, "date__gte": start}
        if end is not None:
            filter["date__lte"] = end
        if type is not None:
            filter["type"] = type
        return await self.find(filter, sort=[("date", "desc")])

    async def find_recent(
        self,
        user_id: str,
        limit: int,
        account_id: str | None = None,
    ) -> list[Transaction]:
        """최근 거래 (날짜, 생성 시각 역순)"""
        filter: dict = {"user_id": user_id}
        if account_id is not None:
            filter["account_id"] = account_id
        return await self.find(
            filter,
            sort=[("date", "desc"), ("created_at", "desc")],
            limit=limit,
        )

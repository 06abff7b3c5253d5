"""
AccountStore - 계좌 저장소
"""

from core.domain.entities import Account
from core.storage.document_store import DocumentStore


class AccountStore(DocumentStore[Account]):
    """계좌 저장소

    balance는 BalanceMaintainer를 통해서만 저장된다.
    """

    TABLE = "accounts"
    ENTITY = Account

    DECIMAL_FIELDS = frozenset({"balance"})
    BOOL_FIELDS = frozenset({"is_active"})

    async def find_for_user(
        self,
        user_id: str,
        is_active: bool | None = None,
    ) -> list[Account]:
        """사용자 계좌 목록 (최근 생성 순)"""
        filter: dict = {"user_id": user_id}
        if is_active is not None:
            filter["is_active"] = is_active
        return await self.find(filter, sort=[("created_at", "desc")])

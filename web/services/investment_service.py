"""
투자 서비스

평가액/손익은 저장하지 않고 조회 시마다 계산.
"""

import logging
from typing import Any, Callable

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.entities import Investment, apply_changes
from core.errors import NotFoundError
from core.ledger import reporting
from core.storage.investment_store import InvestmentStore
from core.types import SortOrder
from web.models.requests import InvestmentCreateRequest, InvestmentUpdateRequest
from web.services.serializers import encode, investment_to_dict

logger = logging.getLogger(__name__)

# API 정렬 필드 → 정렬 키 (파생값 포함)
SORT_KEYS: dict[str, Callable[[Investment], Any]] = {
    "purchaseDate": lambda i: i.purchase_date,
    "name": lambda i: i.name.lower(),
    "currentValue": lambda i: i.total_value,
    "gainLoss": lambda i: i.gain_loss,
}


class InvestmentService:
    """투자 서비스"""

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.investments = InvestmentStore(db)

    async def _get(self, user_id: str, investment_id: str) -> Investment:
        investment = await self.investments.find_by_id(investment_id, user_id=user_id)
        if investment is None:
            raise NotFoundError("Investment not found")
        return investment

    async def list_investments(
        self,
        user_id: str,
        type: str | None = None,
        broker: str | None = None,
        sort_by: str = "purchaseDate",
        order: SortOrder = SortOrder.DESC,
    ) -> dict[str, Any]:
        """투자 목록 + 요약"""
        query: dict[str, Any] = {"user_id": user_id}
        if type:
            query["type"] = type
        if broker:
            query["broker"] = broker

        investments = await self.investments.find(query)
        investments.sort(
            key=SORT_KEYS.get(sort_by, SORT_KEYS["purchaseDate"]),
            reverse=SortOrder(order) == SortOrder.DESC,
        )

        return {
            "investments": [investment_to_dict(i) for i in investments],
            "summary": encode(reporting.investment_summary(investments)),
        }

    async def get_investment(self, user_id: str, investment_id: str) -> dict[str, Any]:
        return investment_to_dict(await self._get(user_id, investment_id))

    async def create_investment(
        self,
        user_id: str,
        request: InvestmentCreateRequest,
    ) -> dict[str, Any]:
        investment = Investment(
            user_id=user_id,
            name=request.name,
            type=request.type,
            quantity=request.quantity,
            purchase_price=request.purchase_price,
            current_price=request.current_price,
            purchase_date=request.purchase_date,
            broker=request.broker,
            notes=request.notes,
        )

        async with self.db.transaction():
            await self.investments.insert(investment)

        logger.info(f"Investment created: {investment.id}")
        return investment_to_dict(investment)

    async def update_investment(
        self,
        user_id: str,
        investment_id: str,
        request: InvestmentUpdateRequest,
    ) -> dict[str, Any]:
        async with self.db.transaction():
            investment = await self._get(user_id, investment_id)
            apply_changes(investment, request.changes(), nullable={"notes"})
            await self.investments.save(investment)

        return investment_to_dict(investment)

    async def delete_investment(self, user_id: str, investment_id: str) -> None:
        async with self.db.transaction():
            deleted = await self.investments.delete_one({"id": investment_id, "user_id": user_id})
            if not deleted:
                raise NotFoundError("Investment not found")

        logger.info(f"Investment deleted: {investment_id}")

    async def get_stats(self, user_id: str) -> dict[str, Any]:
        """유형별/전체 투자 통계"""
        investments = await self.investments.find({"user_id": user_id})
        return encode(reporting.investment_stats(investments))

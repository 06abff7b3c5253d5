"""
거래 서비스

거래 CRUD. 모든 쓰기는 계좌 잔액 변경과 같은 DB 트랜잭션 안에서 수행되어
둘 중 하나가 실패하면 함께 롤백된다.
"""

import csv
import io
import logging
import math
from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Pagination
from core.domain.entities import Account, Transaction, apply_changes
from core.errors import NotFoundError, ValidationError
from core.ledger import reporting
from core.ledger.balance import BalanceMaintainer
from core.storage.account_store import AccountStore
from core.storage.transaction_store import TransactionStore
from core.types import SortOrder, StatsPeriod
from core.utils.dates import today_utc
from web.models.requests import TransactionCreateRequest, TransactionUpdateRequest
from web.services.serializers import encode, transaction_to_dict

logger = logging.getLogger(__name__)

# API 정렬 필드 → 컬럼
SORT_FIELDS: dict[str, str] = {
    "date": "date",
    "amount": "amount",
    "category": "category",
    "type": "type",
    "description": "description",
    "createdAt": "created_at",
}

CSV_COLUMNS: list[str] = [
    "Date",
    "Type",
    "Amount",
    "Category",
    "Description",
    "Account",
    "Account Type",
    "Tags",
]

CENT = Decimal("0.01")


@dataclass(frozen=True)
class TransactionFilter:
    """거래 목록/내보내기 필터"""

    account_id: str | None = None
    category: str | None = None
    type: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None

    def to_query(self, user_id: str) -> dict[str, Any]:
        query: dict[str, Any] = {"user_id": user_id}
        if self.account_id:
            query["account_id"] = self.account_id
        if self.category:
            query["category"] = self.category
        if self.type:
            query["type"] = self.type
        if self.start_date:
            query["date__gte"] = self.start_date
        if self.end_date:
            query["date__lte"] = self.end_date
        if self.search:
            query["description__icontains"] = self.search
        return query


class TransactionService:
    """거래 서비스"""

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.accounts = AccountStore(db)
        self.transactions = TransactionStore(db)
        self.balances = BalanceMaintainer(db)

    async def _accounts_by_id(self, user_id: str) -> dict[str, Account]:
        return {a.id: a for a in await self.accounts.find({"user_id": user_id})}

    async def _get(self, user_id: str, transaction_id: str) -> Transaction:
        transaction = await self.transactions.find_by_id(transaction_id, user_id=user_id)
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    async def _with_account(self, transaction: Transaction) -> dict[str, Any]:
        account = await self.accounts.find_by_id(
            transaction.account_id,
            user_id=transaction.user_id,
        )
        return transaction_to_dict(transaction, account)

    # =========================================================================
    # 조회
    # =========================================================================

    async def list_transactions(
        self,
        user_id: str,
        filter: TransactionFilter,
        page: int = Pagination.DEFAULT_PAGE,
        limit: int = Pagination.DEFAULT_LIMIT,
        sort_by: str = "date",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> dict[str, Any]:
        """필터/정렬/페이지네이션 목록"""
        column = SORT_FIELDS.get(sort_by)
        if column is None:
            raise ValidationError(
                f"Invalid sort field: {sort_by}",
                details={"allowed": sorted(SORT_FIELDS)},
            )

        query = filter.to_query(user_id)
        sort = [(column, sort_order)]
        if column != "created_at":
            sort.append(("created_at", sort_order))

        total = await self.transactions.count_documents(query)
        items = await self.transactions.find(
            query,
            sort=sort,
            skip=(page - 1) * limit,
            limit=limit,
        )
        accounts = await self._accounts_by_id(user_id)

        return {
            "data": [transaction_to_dict(tx, accounts.get(tx.account_id)) for tx in items],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit) if limit else 0,
            },
        }

    async def get_transaction(self, user_id: str, transaction_id: str) -> dict[str, Any]:
        """거래 상세 (계좌 요약 포함)"""
        return await self._with_account(await self._get(user_id, transaction_id))

    async def recent_transactions(self, user_id: str, limit: int) -> list[dict[str, Any]]:
        """최근 거래 (대시보드용)"""
        items = await self.transactions.find_recent(user_id, limit)
        accounts = await self._accounts_by_id(user_id)
        return [transaction_to_dict(tx, accounts.get(tx.account_id)) for tx in items]

    async def get_stats(self, user_id: str, period: StatsPeriod) -> dict[str, Any]:
        """기간 통계 (오늘 기준 1주/1개월/1년)"""
        today = today_utc()
        start = reporting.stats_period_start(period, today)
        items = await self.transactions.find_between(user_id, start, today)
        return encode(reporting.transaction_stats(items))

    # =========================================================================
    # 쓰기
    # =========================================================================

    async def create_transaction(
        self,
        user_id: str,
        request: TransactionCreateRequest,
    ) -> dict[str, Any]:
        """거래 생성 + 잔액 반영

        Raises:
            NotFoundError: 계좌가 없거나 다른 사용자 소유
        """
        transaction = Transaction(
            user_id=user_id,
            account_id=request.account_id,
            type=request.type,
            amount=request.amount,
            category=request.category,
            date=request.date,
            description=request.description,
            tags=request.tags,
            is_recurring=request.is_recurring,
            recurring_details=(
                request.recurring_details.model_dump(mode="json", exclude_none=True)
                if request.recurring_details
                else None
            ),
        )

        async with self.db.transaction():
            account = await self.balances.apply_create(transaction)
            await self.transactions.insert(transaction)

        logger.info(
            f"Transaction created: {transaction.id} {transaction.type} {transaction.amount}"
        )
        return transaction_to_dict(transaction, account)

    async def update_transaction(
        self,
        user_id: str,
        transaction_id: str,
        request: TransactionUpdateRequest,
    ) -> dict[str, Any]:
        """거래 수정 + 잔액 보정 (이전 값 되돌림, 새 값 반영)

        Raises:
            NotFoundError: 거래 또는 관련 계좌 없음
        """
        changes = request.changes()
        if "recurring_details" in changes:
            changes["recurring_details"] = (
                request.recurring_details.model_dump(mode="json", exclude_none=True)
                if request.recurring_details
                else None
            )

        async with self.db.transaction():
            old = await self._get(user_id, transaction_id)
            new = apply_changes(
                replace(old, tags=list(old.tags)),
                changes,
                nullable={"recurring_details"},
            )
            await self.balances.apply_update(old, new)
            await self.transactions.save(new)

        logger.info(f"Transaction updated: {transaction_id}")
        return await self._with_account(new)

    async def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        """거래 삭제 + 잔액 되돌림

        계좌가 없으면 삭제도 실패한다.
        """
        async with self.db.transaction():
            transaction = await self._get(user_id, transaction_id)
            await self.balances.apply_delete(transaction)
            await self.transactions.delete_one({"id": transaction.id, "user_id": user_id})

        logger.info(f"Transaction deleted: {transaction_id}")

    # =========================================================================
    # 내보내기
    # =========================================================================

    async def export_csv(self, user_id: str, filter: TransactionFilter) -> str:
        """CSV 내보내기 (필터 적용, 페이지네이션 없음, 최신순)"""
        items = await self.transactions.find(
            filter.to_query(user_id),
            sort=[("date", SortOrder.DESC), ("created_at", SortOrder.DESC)],
        )
        accounts = await self._accounts_by_id(user_id)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)

        for tx in items:
            account = accounts.get(tx.account_id)
            writer.writerow([
                tx.date.isoformat(),
                tx.type,
                format(tx.amount.quantize(CENT, rounding=ROUND_HALF_UP), "f"),
                tx.category,
                tx.description,
                account.name if account else "",
                account.type if account else "",
                "; ".join(tx.tags),
            ])

        return buffer.getvalue()

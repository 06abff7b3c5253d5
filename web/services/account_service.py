"""
계좌 서비스

계좌 CRUD와 통계.
잔액 직접 수정은 무시하고, 거래 이력이 있는 계좌는 삭제할 수 없다.
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import CASH_FLOW_DAYS, RECENT_TRANSACTIONS_LIMIT, Defaults
from core.domain.entities import Account, apply_changes
from core.errors import NotFoundError
from core.ledger import reporting
from core.ledger.balance import BalanceMaintainer
from core.storage.account_store import AccountStore
from core.storage.transaction_store import TransactionStore
from core.utils.dates import days_ago, today_utc
from web.models.requests import AccountCreateRequest, AccountUpdateRequest
from web.services.serializers import account_to_dict, encode, transaction_to_dict

logger = logging.getLogger(__name__)


class AccountService:
    """계좌 서비스"""

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.accounts = AccountStore(db)
        self.transactions = TransactionStore(db)
        self.balances = BalanceMaintainer(db)

    async def _get(self, user_id: str, account_id: str) -> Account:
        account = await self.accounts.find_by_id(account_id, user_id=user_id)
        if account is None:
            raise NotFoundError("Account not found")
        return account

    async def list_accounts(
        self,
        user_id: str,
        is_active: bool | None = None,
    ) -> dict[str, Any]:
        """계좌 목록 + 요약"""
        accounts = await self.accounts.find_for_user(user_id, is_active=is_active)
        return {
            "data": [account_to_dict(a) for a in accounts],
            "summary": encode(reporting.account_summary(accounts)),
        }

    async def get_account(self, user_id: str, account_id: str) -> dict[str, Any]:
        """계좌 상세 (최근 거래 10건 포함)"""
        account = await self._get(user_id, account_id)
        recent = await self.transactions.find_recent(
            user_id,
            RECENT_TRANSACTIONS_LIMIT,
            account_id=account_id,
        )
        data = account_to_dict(account)
        data["recentTransactions"] = [transaction_to_dict(tx) for tx in recent]
        return data

    async def create_account(
        self,
        user_id: str,
        request: AccountCreateRequest,
    ) -> dict[str, Any]:
        """계좌 생성 (balance = 기초 잔액)"""
        account = Account(
            user_id=user_id,
            name=request.name,
            type=request.type,
            balance=request.balance,
            currency=request.currency or Defaults.CURRENCY,
            color=request.color or Defaults.ACCOUNT_COLOR,
            icon=request.icon,
            description=request.description,
            is_active=request.is_active,
        )

        async with self.db.transaction():
            await self.accounts.insert(account)

        logger.info(f"Account created: {account.id} opening balance={account.balance}")
        return account_to_dict(account)

    async def update_account(
        self,
        user_id: str,
        account_id: str,
        request: AccountUpdateRequest,
    ) -> dict[str, Any]:
        """계좌 수정 (balance/userId는 무시)"""
        changes = self.balances.block_direct_balance_edit(request.changes())

        async with self.db.transaction():
            account = await self._get(user_id, account_id)
            apply_changes(account, changes, nullable={"icon", "description"})
            await self.accounts.save(account)

        return account_to_dict(account)

    async def delete_account(self, user_id: str, account_id: str) -> None:
        """계좌 삭제

        Raises:
            ValidationError: 거래 이력이 남아 있음
            NotFoundError: 계좌 없음
        """
        async with self.db.transaction():
            await self.balances.block_delete_with_history(user_id, account_id)
            deleted = await self.accounts.delete_one({"id": account_id, "user_id": user_id})
            if not deleted:
                raise NotFoundError("Account not found")

        logger.info(f"Account deleted: {account_id}")

    async def get_stats(self, user_id: str) -> dict[str, Any]:
        """계좌 유형별 통계 + 최근 30일 현금 흐름"""
        accounts = await self.accounts.find_for_user(user_id, is_active=True)
        since = days_ago(today_utc(), CASH_FLOW_DAYS)
        recent = await self.transactions.find_between(user_id, since)
        return encode(reporting.account_stats(accounts, recent))

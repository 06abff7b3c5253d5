"""
계좌 잔액 유지

거래 생성/수정/삭제에 맞춰 Account.balance를 갱신한다.

불변식:
    balance == 기초 잔액 + Σ signed(tx)
    signed(tx) = +amount (income) / -amount (expense)

모든 메서드는 호출자의 쓰기 트랜잭션(SQLiteAdapter.transaction()) 안에서
거래 변경과 함께 실행되어야 한다. 여기서 예외가 나면 거래 변경도 롤백된다.
"""

import logging
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.entities import Account, Transaction
from core.errors import NotFoundError, ValidationError
from core.storage.account_store import AccountStore
from core.storage.transaction_store import TransactionStore
from core.types import TransactionType

logger = logging.getLogger(__name__)

# 계좌 수정 요청에서 무시하는 필드
PROTECTED_ACCOUNT_FIELDS: frozenset[str] = frozenset({"balance", "user_id"})


def signed_amount(type: str | TransactionType, amount: Decimal) -> Decimal:
    """거래가 잔액에 주는 영향 (income +, expense -)"""
    if TransactionType(type) == TransactionType.INCOME:
        return amount
    return -amount


class BalanceMaintainer:
    """계좌 잔액 유지기

    Args:
        db: SQLiteAdapter 인스턴스 (쓰기 연결)
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.accounts = AccountStore(db)
        self.transactions = TransactionStore(db)

    async def _load_account(self, user_id: str, account_id: str) -> Account:
        account = await self.accounts.find_by_id(account_id, user_id=user_id)
        if account is None:
            raise NotFoundError("Account not found")
        return account

    async def _apply_delta(self, account: Account, delta: Decimal, reason: str) -> Account:
        before = account.balance
        account.balance = before + delta
        await self.accounts.save(account)

        logger.info(
            f"Balance {reason}: account={account.id} {before} → {account.balance} ({delta:+})"
        )
        return account

    async def apply_create(self, transaction: Transaction) -> Account:
        """새 거래의 효과를 계좌에 반영

        Raises:
            NotFoundError: 계좌가 없거나 다른 사용자 소유
        """
        account = await self._load_account(transaction.user_id, transaction.account_id)
        delta = signed_amount(transaction.type, transaction.amount)
        return await self._apply_delta(account, delta, "create")

    async def apply_update(self, old: Transaction, new: Transaction) -> None:
        """거래 수정에 따른 잔액 보정

        금액/유형/계좌가 모두 그대로면 아무것도 쓰지 않는다.
        이전/새 계좌를 모두 확인한 뒤에만 쓰기 시작한다.
        같은 계좌면 순변화량 한 번만 반영.

        Raises:
            NotFoundError: 이전 또는 새 계좌가 없거나 다른 사용자 소유
        """
        if (
            old.amount == new.amount
            and old.type == new.type
            and old.account_id == new.account_id
        ):
            return

        old_account = await self._load_account(old.user_id, old.account_id)
        if new.account_id == old.account_id:
            new_account = old_account
        else:
            new_account = await self._load_account(new.user_id, new.account_id)

        reverse = -signed_amount(old.type, old.amount)
        forward = signed_amount(new.type, new.amount)

        if new_account is old_account:
            await self._apply_delta(old_account, reverse + forward, "update")
            return

        await self._apply_delta(old_account, reverse, "update(reverse)")
        await self._apply_delta(new_account, forward, "update(apply)")

    async def apply_delete(self, transaction: Transaction) -> Account:
        """삭제될 거래의 효과를 되돌림

        Raises:
            NotFoundError: 계좌가 없음 (삭제 자체가 실패해야 함)
        """
        account = await self._load_account(transaction.user_id, transaction.account_id)
        delta = -signed_amount(transaction.type, transaction.amount)
        return await self._apply_delta(account, delta, "delete")

    @staticmethod
    def block_direct_balance_edit(payload: dict[str, Any]) -> dict[str, Any]:
        """계좌 수정 payload에서 balance/user_id 제거"""
        dropped = PROTECTED_ACCOUNT_FIELDS & payload.keys()
        if dropped:
            logger.debug(f"Ignored protected account fields: {sorted(dropped)}")
        return {k: v for k, v in payload.items() if k not in PROTECTED_ACCOUNT_FIELDS}

    async def block_delete_with_history(self, user_id: str, account_id: str) -> None:
        """거래 이력이 있는 계좌 삭제 거부

        Raises:
            ValidationError: 계좌를 참조하는 거래가 있음
        """
        count = await self.transactions.count_for_account(user_id, account_id)
        if count > 0:
            raise ValidationError(
                "Cannot delete account with existing transactions. "
                "Please delete or move transactions first.",
                details={"transaction_count": count},
            )

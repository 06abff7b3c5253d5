"""
대시보드 서비스

순자산, 이번 달 수입/지출, 지출 분류, 예산 진행, 다가오는 청구서.
매 요청마다 다시 계산 (캐시 없음).
"""

from datetime import timedelta
from decimal import Decimal
from typing import Any, Mapping

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import BILL_CATEGORIES, UPCOMING_BILLS_DAYS
from core.ledger import reporting
from core.storage.account_store import AccountStore
from core.storage.investment_store import InvestmentStore
from core.storage.loan_store import LoanStore
from core.storage.reminder_store import ReminderStore
from core.storage.transaction_store import TransactionStore
from core.utils.dates import month_bounds, today_utc
from web.services.serializers import encode
from web.services.transaction_service import TransactionService


class DashboardService:
    """대시보드 서비스

    Args:
        db: SQLiteAdapter (읽기 연결)
        budget_limits: 카테고리별 월 예산 한도
    """

    def __init__(self, db: SQLiteAdapter, budget_limits: Mapping[str, Decimal]):
        self.db = db
        self.budget_limits = budget_limits
        self.accounts = AccountStore(db)
        self.transactions = TransactionStore(db)
        self.investments = InvestmentStore(db)
        self.loans = LoanStore(db)
        self.reminders = ReminderStore(db)

    async def _month_transactions(self, user_id: str):
        start, end = month_bounds(today_utc())
        return await self.transactions.find_between(user_id, start, end)

    async def get_overview(self, user_id: str) -> dict[str, Any]:
        """개요 (총 잔액, 월 수입/지출, 저축률, 순자산, 부채, 투자 평가액)"""
        accounts = await self.accounts.find_for_user(user_id, is_active=True)
        month = await self._month_transactions(user_id)
        investments = await self.investments.find({"user_id": user_id})
        loans = await self.loans.find_active(user_id)

        return encode(reporting.dashboard_overview(accounts, month, investments, loans))

    async def get_recent_transactions(self, user_id: str, limit: int) -> list[dict[str, Any]]:
        return await TransactionService(self.db).recent_transactions(user_id, limit)

    async def get_expense_breakdown(self, user_id: str) -> list[dict[str, Any]]:
        """이번 달 지출 상위 카테고리"""
        month = await self._month_transactions(user_id)
        return encode(reporting.expense_breakdown(month))

    async def get_budget_progress(self, user_id: str) -> list[dict[str, Any]]:
        """이번 달 예산 대비 지출"""
        month = await self._month_transactions(user_id)
        return encode(reporting.budget_progress(month, self.budget_limits))

    async def get_upcoming_bills(self, user_id: str) -> list[dict[str, Any]]:
        """30일 안에 만기인 청구서"""
        today = today_utc()
        reminders = await self.reminders.find_due_between(
            user_id,
            today,
            today + timedelta(days=UPCOMING_BILLS_DAYS),
            categories=BILL_CATEGORIES,
        )
        return encode(reporting.upcoming_bills(reminders, today))

"""
ReminderStore - 리마인더 저장소
"""

from datetime import date

from core.domain.entities import Reminder
from core.storage.document_store import DocumentStore


class ReminderStore(DocumentStore[Reminder]):
    """리마인더 저장소"""

    TABLE = "reminders"
    ENTITY = Reminder

    DECIMAL_FIELDS = frozenset({"amount"})
    DATE_FIELDS = frozenset({"due_date"})
    DATETIME_FIELDS = frozenset({"last_notified", "created_at", "updated_at"})
    BOOL_FIELDS = frozenset({"is_active"})
    DATE_LIST_FIELDS = frozenset({"completed_dates"})

    async def find_due_between(
        self,
        user_id: str,
        start: date,
        end: date,
        categories: list[str] | tuple[str, ...] | None = None,
    ) -> list[Reminder]:
        """기간 내 만기인 활성 리마인더 (만기일 순)"""
        filter: dict = {
            "user_id": user_id,
            "is_active": True,
            "due_date__gte": start,
            "due_date__lte": end,
        }
        if categories is not None:
            filter["category__in"] = list(categories)
        return await self.find(filter, sort=[("due_date", "asc")])

"""
리마인더 서비스
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.entities import Reminder, apply_changes
from core.errors import NotFoundError
from core.storage.reminder_store import ReminderStore
from web.models.requests import ReminderCreateRequest, ReminderUpdateRequest
from web.services.serializers import reminder_to_dict

logger = logging.getLogger(__name__)


class ReminderService:
    """리마인더 서비스"""

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.reminders = ReminderStore(db)

    async def _get(self, user_id: str, reminder_id: str) -> Reminder:
        reminder = await self.reminders.find_by_id(reminder_id, user_id=user_id)
        if reminder is None:
            raise NotFoundError("Reminder not found")
        return reminder

    async def list_reminders(
        self,
        user_id: str,
        is_active: bool | None = None,
    ) -> list[dict[str, Any]]:
        """리마인더 목록 (만기일 순)"""
        query: dict[str, Any] = {"user_id": user_id}
        if is_active is not None:
            query["is_active"] = is_active
        reminders = await self.reminders.find(query, sort=[("due_date", "asc")])
        return [reminder_to_dict(r) for r in reminders]

    async def get_reminder(self, user_id: str, reminder_id: str) -> dict[str, Any]:
        return reminder_to_dict(await self._get(user_id, reminder_id))

    async def create_reminder(
        self,
        user_id: str,
        request: ReminderCreateRequest,
    ) -> dict[str, Any]:
        reminder = Reminder(
            user_id=user_id,
            title=request.title,
            description=request.description,
            amount=request.amount,
            due_date=request.due_date,
            frequency=request.frequency,
            category=request.category,
            is_active=request.is_active,
        )

        async with self.db.transaction():
            await self.reminders.insert(reminder)

        return reminder_to_dict(reminder)

    async def update_reminder(
        self,
        user_id: str,
        reminder_id: str,
        request: ReminderUpdateRequest,
    ) -> dict[str, Any]:
        async with self.db.transaction():
            reminder = await self._get(user_id, reminder_id)
            apply_changes(
                reminder,
                request.changes(),
                nullable={"description", "amount", "category"},
            )
            await self.reminders.save(reminder)

        return reminder_to_dict(reminder)

    async def delete_reminder(self, user_id: str, reminder_id: str) -> None:
        async with self.db.transaction():
            deleted = await self.reminders.delete_one({"id": reminder_id, "user_id": user_id})
            if not deleted:
                raise NotFoundError("Reminder not found")

        logger.info(f"Reminder deleted: {reminder_id}")

"""
사용자 서비스

프로필/환경설정 조회 및 수정
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.entities import User, apply_changes, default_preferences
from core.errors import NotFoundError
from core.storage.user_store import UserStore
from web.models.requests import PreferencesUpdateRequest, ProfileUpdateRequest
from web.services.serializers import user_to_dict

logger = logging.getLogger(__name__)


class UserService:
    """사용자 서비스"""

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.users = UserStore(db)

    async def _get(self, user_id: str) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None or not user.is_active:
            raise NotFoundError("User not found")
        return user

    async def get_profile(self, user_id: str) -> dict[str, Any]:
        """프로필 조회"""
        return user_to_dict(await self._get(user_id))

    async def update_profile(
        self,
        user_id: str,
        request: ProfileUpdateRequest,
    ) -> dict[str, Any]:
        """프로필 수정 (요청에 포함된 필드만)"""
        async with self.db.transaction():
            user = await self._get(user_id)
            apply_changes(user, request.changes(), nullable={"avatar"})
            await self.users.save(user)

        return user_to_dict(user)

    async def update_preferences(
        self,
        user_id: str,
        request: PreferencesUpdateRequest,
    ) -> dict[str, Any]:
        """환경설정 수정 (알림 설정은 항목별 병합)"""
        changes = request.changes()

        async with self.db.transaction():
            user = await self._get(user_id)
            preferences = {**default_preferences(), **(user.preferences or {})}

            if "dashboard_layout" in changes:
                preferences["dashboard_layout"] = changes["dashboard_layout"]

            notifications = changes.get("notifications") or {}
            merged = dict(preferences.get("notifications") or {})
            for key, value in notifications.items():
                if value is not None:
                    merged[key] = value
            preferences["notifications"] = merged

            user.preferences = preferences
            await self.users.save(user)

        logger.info(f"Preferences updated: {user_id}")
        return user_to_dict(user)

"""
카테고리 서비스

카테고리 이름은 사용자별 (이름, 유형) 단위로 유일.
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.domain.entities import Category, apply_changes
from core.errors import AlreadyExistsError, NotFoundError
from core.storage.category_store import CategoryStore
from web.models.requests import CategoryCreateRequest, CategoryUpdateRequest
from web.services.serializers import category_to_dict

logger = logging.getLogger(__name__)


class CategoryService:
    """카테고리 서비스"""

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.categories = CategoryStore(db)

    async def _get(self, user_id: str, category_id: str) -> Category:
        category = await self.categories.find_by_id(category_id, user_id=user_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def list_categories(
        self,
        user_id: str,
        type: str | None = None,
    ) -> list[dict[str, Any]]:
        """카테고리 목록 (유형, 이름 순)"""
        query: dict[str, Any] = {"user_id": user_id}
        if type:
            query["type"] = type
        categories = await self.categories.find(query, sort=[("type", "asc"), ("name", "asc")])
        return [category_to_dict(c) for c in categories]

    async def get_category(self, user_id: str, category_id: str) -> dict[str, Any]:
        return category_to_dict(await self._get(user_id, category_id))

    async def create_category(
        self,
        user_id: str,
        request: CategoryCreateRequest,
    ) -> dict[str, Any]:
        """카테고리 생성

        Raises:
            AlreadyExistsError: 같은 이름/유형 존재
        """
        category = Category(
            user_id=user_id,
            name=request.name.strip(),
            type=request.type,
            icon=request.icon or Defaults.CATEGORY_ICON,
            color=request.color or Defaults.CATEGORY_COLOR,
        )

        async with self.db.transaction():
            if await self.categories.name_taken(user_id, category.name, category.type):
                raise AlreadyExistsError("Category already exists")
            await self.categories.insert(category)

        return category_to_dict(category)

    async def update_category(
        self,
        user_id: str,
        category_id: str,
        request: CategoryUpdateRequest,
    ) -> dict[str, Any]:
        """카테고리 수정

        Raises:
            AlreadyExistsError: 변경 후 이름/유형이 다른 카테고리와 겹침
        """
        changes = request.changes()
        if changes.get("name"):
            changes["name"] = changes["name"].strip()

        async with self.db.transaction():
            category = await self._get(user_id, category_id)
            apply_changes(category, changes)

            if await self.categories.name_taken(
                user_id,
                category.name,
                category.type,
                exclude_id=category.id,
            ):
                raise AlreadyExistsError("Category already exists")

            await self.categories.save(category)

        return category_to_dict(category)

    async def delete_category(self, user_id: str, category_id: str) -> None:
        async with self.db.transaction():
            deleted = await self.categories.delete_one({"id": category_id, "user_id": user_id})
            if not deleted:
                raise NotFoundError("Category not found")

        logger.info(f"Category deleted: {category_id}")

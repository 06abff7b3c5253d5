"""
CategoryStore - 카테고리 저장소
"""

from core.constants import DEFAULT_CATEGORIES
from core.domain.entities import Category
from core.storage.document_store import DocumentStore


class CategoryStore(DocumentStore[Category]):
    """카테고리 저장소

    이름은 (user, type) 단위로 유일.
    """

    TABLE = "categories"
    ENTITY = Category

    BOOL_FIELDS = frozenset({"is_default", "is_active"})

    async def name_taken(
        self,
        user_id: str,
        name: str,
        type: str,
        exclude_id: str | None = None,
    ) -> bool:
        """같은 이름/유형 카테고리 존재 여부"""
        filter: dict = {"user_id": user_id, "name": name, "type": type}
        if exclude_id is not None:
            filter["id__ne"] = exclude_id
        return await self.count_documents(filter) > 0

    async def insert_defaults(self, user_id: str) -> list[Category]:
        """기본 카테고리 세트 생성 (가입 시)"""
        created: list[Category] = []
        for name, type, icon, color in DEFAULT_CATEGORIES:
            category = Category(
                user_id=user_id,
                name=name,
                type=type,
                icon=icon,
                color=color,
                is_default=True,
            )
            created.append(await self.insert(category))
        return created

"""
UserStore - 사용자 저장소
"""

from core.domain.entities import User
from core.storage.document_store import DocumentStore


class UserStore(DocumentStore[User]):
    """사용자 저장소

    email은 소문자로 정규화해서 저장/조회한다.
    """

    TABLE = "users"
    ENTITY = User

    DATETIME_FIELDS = frozenset({"last_login", "created_at", "updated_at"})
    BOOL_FIELDS = frozenset({"is_active"})
    JSON_FIELDS = frozenset({"preferences"})

    async def find_by_email(self, email: str) -> User | None:
        """이메일로 조회"""
        return await self.find_one({"email": email.strip().lower()})

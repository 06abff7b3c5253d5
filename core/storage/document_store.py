"""
DocumentStore - 사용자 소유 문서 저장소 기본 클래스

엔티티 dataclass 하나 = 테이블 하나.
컬럼 이름은 dataclass 필드 이름과 같다.

필터 문법 (dict):
- {"user_id": uid}            : 일치
- {"date__gte": d}            : 이상 (gte, gt, lte, lt, ne)
- {"type__in": ["a", "b"]}    : 목록 포함
- {"description__icontains": "coffee"} : 대소문자 무시 부분 일치

저장소는 직접 커밋하지 않는다.
쓰기는 호출자가 SQLiteAdapter.transaction() 안에서 수행해야 한다.
"""

import json
import logging
from dataclasses import fields
from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar, Generic, Iterable, TypeVar

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.types import SortOrder
from core.utils.dates import now_utc

logger = logging.getLogger(__name__)

T = TypeVar("T")

SortSpec = Iterable[tuple[str, SortOrder | str]]

_OPERATORS: dict[str, str] = {
    "gte": ">=",
    "gt": ">",
    "lte": "<=",
    "lt": "<",
    "ne": "!=",
}


class DocumentStore(Generic[T]):
    """문서 저장소 기본 클래스

    서브클래스는 TABLE, ENTITY와 필드 타입 집합을 선언한다.

    Args:
        db: SQLiteAdapter 인스턴스

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        store = AccountStore(db)
        account = await store.find_by_id(account_id, user_id=user_id)

        async with db.transaction():
            account.balance += Decimal("10")
            await store.save(account)
    ```
    """

    TABLE: ClassVar[str]
    ENTITY: ClassVar[type]

    DECIMAL_FIELDS: ClassVar[frozenset[str]] = frozenset()
    DATE_FIELDS: ClassVar[frozenset[str]] = frozenset()
    DATETIME_FIELDS: ClassVar[frozenset[str]] = frozenset({"created_at", "updated_at"})
    BOOL_FIELDS: ClassVar[frozenset[str]] = frozenset()
    JSON_FIELDS: ClassVar[frozenset[str]] = frozenset()
    DATE_LIST_FIELDS: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self._columns: tuple[str, ...] = tuple(f.name for f in fields(self.ENTITY))

    @property
    def columns(self) -> tuple[str, ...]:
        """테이블 컬럼 목록"""
        return self._columns

    # =========================================================================
    # 직렬화
    # =========================================================================

    def _encode(self, name: str, value: Any) -> Any:
        """Python 값 → SQLite 값"""
        if value is None:
            return None
        if name in self.DECIMAL_FIELDS:
            return format(Decimal(value), "f")
        if name in self.DATE_FIELDS:
            return value.isoformat()
        if name in self.DATETIME_FIELDS:
            return value.isoformat()
        if name in self.BOOL_FIELDS:
            return 1 if value else 0
        if name in self.DATE_LIST_FIELDS:
            return json.dumps([d.isoformat() for d in value])
        if name in self.JSON_FIELDS:
            return json.dumps(value, ensure_ascii=False)
        return value

    def _decode(self, name: str, value: Any) -> Any:
        """SQLite 값 → Python 값"""
        if value is None:
            return None
        if name in self.DECIMAL_FIELDS:
            return Decimal(value)
        if name in self.DATE_FIELDS:
            return date.fromisoformat(value)
        if name in self.DATETIME_FIELDS:
            return datetime.fromisoformat(value)
        if name in self.BOOL_FIELDS:
            return bool(value)
        if name in self.DATE_LIST_FIELDS:
            return [date.fromisoformat(d) for d in json.loads(value)]
        if name in self.JSON_FIELDS:
            return json.loads(value)
        return value

    def _to_row(self, entity: T) -> tuple[Any, ...]:
        return tuple(self._encode(c, getattr(entity, c)) for c in self._columns)

    def _from_row(self, row: tuple[Any, ...]) -> T:
        values = {c: self._decode(c, v) for c, v in zip(self._columns, row)}
        return self.ENTITY(**values)

    # =========================================================================
    # 필터/정렬 → SQL
    # =========================================================================

    def _check_column(self, name: str) -> None:
        if name not in self._columns:
            raise ValueError(f"Unknown field for {self.TABLE}: {name}")

    def _build_where(self, filter: dict[str, Any] | None) -> tuple[str, list[Any]]:
        if not filter:
            return "", []

        clauses: list[str] = []
        params: list[Any] = []

        for key, value in filter.items():
            name, _, op = key.partition("__")
            self._check_column(name)

            if not op:
                if value is None:
                    clauses.append(f"{name} IS NULL")
                else:
                    clauses.append(f"{name} = ?")
                    params.append(self._encode(name, value))
            elif op in _OPERATORS:
                clauses.append(f"{name} {_OPERATORS[op]} ?")
                params.append(self._encode(name, value))
            elif op == "in":
                values = list(value)
                if not values:
                    clauses.append("0")
                    continue
                placeholders = ", ".join("?" for _ in values)
                clauses.append(f"{name} IN ({placeholders})")
                params.extend(self._encode(name, v) for v in values)
            elif op == "icontains":
                clauses.append(f"LOWER({name}) LIKE ? ESCAPE '\\'")
                escaped = (
                    str(value).lower()
                    .replace("\\", "\\\\")
                    .replace("%", "\\%")
                    .replace("_", "\\_")
                )
                params.append(f"%{escaped}%")
            else:
                raise ValueError(f"Unknown filter operator: {op}")

        return " WHERE " + " AND ".join(clauses), params

    def _build_order(self, sort: SortSpec | None) -> str:
        if not sort:
            return ""

        parts: list[str] = []
        for name, order in sort:
            self._check_column(name)
            direction = "DESC" if SortOrder(order) == SortOrder.DESC else "ASC"
            # TEXT 저장 금액은 숫자로 정렬
            column = f"CAST({name} AS REAL)" if name in self.DECIMAL_FIELDS else name
            parts.append(f"{column} {direction}")
        return " ORDER BY " + ", ".join(parts)

    # =========================================================================
    # 조회
    # =========================================================================

    async def find_by_id(self, id: str, user_id: str | None = None) -> T | None:
        """ID로 조회 (user_id 지정 시 소유권까지 확인)"""
        filter: dict[str, Any] = {"id": id}
        if user_id is not None:
            filter["user_id"] = user_id
        return await self.find_one(filter)

    async def find_one(self, filter: dict[str, Any]) -> T | None:
        """조건에 맞는 첫 문서"""
        docs = await self.find(filter, limit=1)
        return docs[0] if docs else None

    async def find(
        self,
        filter: dict[str, Any] | None = None,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[T]:
        """조건 조회

        Args:
            filter: 필터 dict
            sort: [(필드, asc|desc), ...]
            skip: 건너뛸 개수
            limit: 최대 개수 (None이면 전체)

        Returns:
            엔티티 목록
        """
        where, params = self._build_where(filter)
        sql = f"SELECT {', '.join(self._columns)} FROM {self.TABLE}{where}{self._build_order(sort)}"

        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params.extend([limit, skip])
        elif skip:
            sql += " LIMIT -1 OFFSET ?"
            params.append(skip)

        rows = await self.db.fetchall(sql, tuple(params))
        return [self._from_row(row) for row in rows]

    async def count_documents(self, filter: dict[str, Any] | None = None) -> int:
        """조건에 맞는 문서 수"""
        where, params = self._build_where(filter)
        row = await self.db.fetchone(
            f"SELECT COUNT(*) FROM {self.TABLE}{where}",
            tuple(params),
        )
        return row[0] if row else 0

    # =========================================================================
    # 쓰기 (트랜잭션 안에서 호출)
    # =========================================================================

    async def insert(self, entity: T) -> T:
        """문서 추가"""
        placeholders = ", ".join("?" for _ in self._columns)
        await self.db.execute(
            f"INSERT INTO {self.TABLE} ({', '.join(self._columns)}) VALUES ({placeholders})",
            self._to_row(entity),
        )
        logger.debug(f"{self.TABLE} inserted: {getattr(entity, 'id', None)}")
        return entity

    async def save(self, entity: T) -> T:
        """문서 전체 저장 (updated_at 갱신)"""
        entity.updated_at = now_utc()
        assignments = ", ".join(f"{c} = ?" for c in self._columns if c != "id")
        values = [
            self._encode(c, getattr(entity, c))
            for c in self._columns
            if c != "id"
        ]
        values.append(entity.id)

        cursor = await self.db.execute(
            f"UPDATE {self.TABLE} SET {assignments} WHERE id = ?",
            tuple(values),
        )
        if cursor.rowcount == 0:
            raise LookupError(f"{self.TABLE} document not found: {entity.id}")
        return entity

    async def delete_one(self, filter: dict[str, Any]) -> int:
        """조건에 맞는 문서 하나 삭제

        Returns:
            삭제된 문서 수 (0 또는 1)
        """
        where, params = self._build_where(filter)
        if not where:
            raise ValueError("delete_one requires a filter")

        cursor = await self.db.execute(
            f"DELETE FROM {self.TABLE} WHERE rowid IN "
            f"(SELECT rowid FROM {self.TABLE}{where} LIMIT 1)",
            tuple(params),
        )
        return cursor.rowcount

"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
요청마다 연결을 열고, 읽기 연결과 쓰기 연결을 분리.

쓰기는 transaction() 안에서 BEGIN IMMEDIATE로 시작하므로
동시에 들어온 쓰기 요청은 DB 수준에서 직렬화된다.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.constants import Paths
from core.types import AppEnvironment

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def get_db_path(environment: AppEnvironment | str) -> Path:
    """환경에 따른 DB 경로 반환

    Args:
        environment: 실행 환경 (PRODUCTION/DEVELOPMENT)

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if isinstance(environment, str):
        environment = AppEnvironment(environment.lower())

    if environment == AppEnvironment.PRODUCTION:
        return Paths.PROD_DB
    return Paths.DEV_DB


async def create_connection(
    db_path: Path | str,
    readonly: bool = False,
) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로 (":memory:"이면 인메모리)
        readonly: 읽기 전용 여부

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    if db_path_str == MEMORY_DB:
        conn = await aiosqlite.connect(MEMORY_DB)
    else:
        # 디렉토리가 없으면 생성
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        if readonly:
            conn = await aiosqlite.connect(f"file:{db_path_str}?mode=ro", uri=True)
        else:
            conn = await aiosqlite.connect(db_path_str)

    # WAL 모드 설정
    await conn.execute("PRAGMA journal_mode=WAL")

    # 동시 접근 설정
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    # 외래 키 제약 활성화
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str, "readonly": readonly},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부 (조회 요청용)

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        async with db.transaction():
            await db.execute("UPDATE accounts SET ...")
    ```
    """

    def __init__(self, db_path: Path | str, readonly: bool = False):
        self.db_path = db_path if str(db_path) == MEMORY_DB else Path(db_path)
        self.readonly = readonly
        self._conn: aiosqlite.Connection | None = None

    @property
    def in_transaction(self) -> bool:
        """진행 중인 트랜잭션 여부"""
        return self._conn is not None and self._conn.in_transaction

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path, self.readonly)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.debug("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """쓰기 트랜잭션 컨텍스트 매니저

        BEGIN IMMEDIATE로 쓰기 잠금을 먼저 잡는다.
        성공 시 자동 커밋, 예외 시 자동 롤백.
        이미 트랜잭션 안이면 바깥 트랜잭션에 합류 (커밋은 바깥에서).

        사용 예시:
        ```python
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if self._conn.in_transaction:
            yield self._conn
            return

        await self._conn.execute("BEGIN IMMEDIATE")
        try:
            yield self._conn
            await self._conn.commit()
        except BaseException:
            await self._conn.rollback()
            raise

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    금액/수량은 정확한 Decimal 보존을 위해 TEXT로 저장.
    날짜는 ISO 문자열 (YYYY-MM-DD)이므로 문자열 비교로 범위 조회 가능.

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    # users
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id               TEXT PRIMARY KEY,
            email            TEXT NOT NULL UNIQUE,
            password_hash    TEXT NOT NULL,
            first_name       TEXT NOT NULL,
            last_name        TEXT NOT NULL,
            avatar           TEXT,
            currency         TEXT NOT NULL DEFAULT 'USD',
            timezone         TEXT NOT NULL DEFAULT 'UTC',
            preferences      TEXT NOT NULL DEFAULT '{}',
            is_active        INTEGER NOT NULL DEFAULT 1,
            last_login       TEXT,

            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL
        )
    """)

    # accounts
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS accounts (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            name             TEXT NOT NULL,
            type             TEXT NOT NULL,
            balance          TEXT NOT NULL DEFAULT '0',
            currency         TEXT NOT NULL DEFAULT 'USD',
            color            TEXT NOT NULL,
            icon             TEXT,
            description      TEXT,
            is_active        INTEGER NOT NULL DEFAULT 1,

            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL
        )
    """)

    # transactions (계좌 삭제는 거래가 남아 있으면 거부)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id                 TEXT PRIMARY KEY,
            user_id            TEXT NOT NULL,
            account_id         TEXT NOT NULL REFERENCES accounts(id) ON DELETE RESTRICT,
            type               TEXT NOT NULL,
            amount             TEXT NOT NULL,
            category           TEXT NOT NULL,
            description        TEXT NOT NULL DEFAULT '',
            date               TEXT NOT NULL,
            tags               TEXT NOT NULL DEFAULT '[]',
            is_recurring       INTEGER NOT NULL DEFAULT 0,
            recurring_details  TEXT,

            created_at         TEXT NOT NULL,
            updated_at         TEXT NOT NULL
        )
    """)

    # categories
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS categories (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            name             TEXT NOT NULL,
            type             TEXT NOT NULL,
            icon             TEXT NOT NULL,
            color            TEXT NOT NULL,
            is_default       INTEGER NOT NULL DEFAULT 0,
            is_active        INTEGER NOT NULL DEFAULT 1,

            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL,

            UNIQUE(user_id, name, type)
        )
    """)

    # investments
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS investments (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            name             TEXT NOT NULL,
            type             TEXT NOT NULL,
            quantity         TEXT NOT NULL,
            purchase_price   TEXT NOT NULL,
            current_price    TEXT NOT NULL,
            purchase_date    TEXT NOT NULL,
            broker           TEXT NOT NULL,
            notes            TEXT,

            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL
        )
    """)

    # loans
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS loans (
            id                 TEXT PRIMARY KEY,
            user_id            TEXT NOT NULL,
            loan_name          TEXT NOT NULL,
            loan_type          TEXT NOT NULL,
            lender             TEXT NOT NULL,
            principal_amount   TEXT NOT NULL,
            current_balance    TEXT NOT NULL,
            interest_rate      TEXT NOT NULL,
            monthly_payment    TEXT NOT NULL,
            start_date         TEXT NOT NULL,
            end_date           TEXT NOT NULL,
            next_payment_date  TEXT NOT NULL,
            status             TEXT NOT NULL DEFAULT 'active',
            notes              TEXT,

            created_at         TEXT NOT NULL,
            updated_at         TEXT NOT NULL
        )
    """)

    # reminders
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS reminders (
            id               TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            title            TEXT NOT NULL,
            description      TEXT,
            amount           TEXT,
            due_date         TEXT NOT NULL,
            frequency        TEXT NOT NULL,
            category         TEXT,
            is_active        INTEGER NOT NULL DEFAULT 1,
            last_notified    TEXT,
            completed_dates  TEXT NOT NULL DEFAULT '[]',

            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL
        )
    """)

    # 인덱스 생성
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_accounts_user
        ON accounts(user_id, is_active)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_user_date
        ON transactions(user_id, date DESC)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_account
        ON transactions(user_id, account_id)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_type_date
        ON transactions(user_id, type, date DESC)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_loans_user_status
        ON loans(user_id, status)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_investments_user_type
        ON investments(user_id, type)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_reminders_user_due
        ON reminders(user_id, due_date, is_active)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")

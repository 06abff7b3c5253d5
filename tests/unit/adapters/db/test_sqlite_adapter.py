"""
SQLite 어댑터 테스트

SQLiteAdapter 및 관련 함수 테스트.
"""

from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import (
    MEMORY_DB,
    SQLiteAdapter,
    create_connection,
    get_db_path,
    init_schema,
)
from core.constants import Paths
from core.types import AppEnvironment

TABLES = ["users", "accounts", "transactions", "categories", "investments", "loans", "reminders"]


async def table_names(adapter: SQLiteAdapter) -> set[str]:
    rows = await adapter.fetchall("SELECT name FROM sqlite_master WHERE type='table'")
    return {row[0] for row in rows}


class TestGetDbPath:
    """get_db_path 테스트"""

    def test_production(self) -> None:
        path = get_db_path(AppEnvironment.PRODUCTION)

        assert path == Paths.PROD_DB
        assert isinstance(path, Path)

    def test_development(self) -> None:
        assert get_db_path(AppEnvironment.DEVELOPMENT) == Paths.DEV_DB

    def test_string_environment(self) -> None:
        """문자열 환경 (대소문자 무시)"""
        assert get_db_path("Production") == Paths.PROD_DB


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_wal_and_foreign_keys(self, tmp_path: Path) -> None:
        """WAL 모드와 외래 키 활성화"""
        conn = await create_connection(tmp_path / "test.db")

        cursor = await conn.execute("PRAGMA journal_mode")
        assert (await cursor.fetchone())[0].upper() == "WAL"

        cursor = await conn.execute("PRAGMA foreign_keys")
        assert (await cursor.fetchone())[0] == 1

        await conn.close()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """부모 디렉토리 생성"""
        db_path = tmp_path / "subdir" / "test.db"

        conn = await create_connection(db_path)

        assert db_path.parent.exists()

        await conn.close()

    @pytest.mark.asyncio
    async def test_readonly_rejects_writes(self, tmp_path: Path) -> None:
        """읽기 전용 연결은 쓰기 불가"""
        db_path = tmp_path / "ro.db"
        async with SQLiteAdapter(db_path) as adapter:
            await adapter.execute("CREATE TABLE t (id INTEGER)")
            await adapter.commit()

        conn = await create_connection(db_path, readonly=True)
        with pytest.raises(aiosqlite.OperationalError):
            await conn.execute("INSERT INTO t (id) VALUES (1)")
        await conn.close()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest_asyncio.fixture
    async def adapter(self, tmp_path: Path) -> SQLiteAdapter:
        """어댑터 픽스처"""
        adapter = SQLiteAdapter(tmp_path / "test.db")
        await adapter.connect()
        yield adapter
        await adapter.close()

    @pytest.mark.asyncio
    async def test_connect_and_close(self, tmp_path: Path) -> None:
        """연결 및 종료"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        await adapter.connect()
        row = await adapter.fetchone("SELECT 1")
        assert row[0] == 1

        await adapter.close()
        with pytest.raises(RuntimeError, match="Not connected"):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_not_connected(self, tmp_path: Path) -> None:
        adapter = SQLiteAdapter(tmp_path / "test.db")

        with pytest.raises(RuntimeError, match="Not connected"):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_fetchall(self, adapter: SQLiteAdapter) -> None:
        """전체 조회"""
        await adapter.execute("CREATE TABLE items (value TEXT)")
        for value in ("C", "A", "B"):
            await adapter.execute("INSERT INTO items (value) VALUES (?)", (value,))
        await adapter.commit()

        rows = await adapter.fetchall("SELECT value FROM items ORDER BY value")

        assert [r[0] for r in rows] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_transaction_commit(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 커밋"""
        await adapter.execute("CREATE TABLE tx_test (id INTEGER)")
        await adapter.commit()

        async with adapter.transaction():
            assert adapter.in_transaction is True
            await adapter.execute("INSERT INTO tx_test (id) VALUES (1)")
            await adapter.execute("INSERT INTO tx_test (id) VALUES (2)")

        assert adapter.in_transaction is False
        rows = await adapter.fetchall("SELECT id FROM tx_test")
        assert len(rows) == 2

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, adapter: SQLiteAdapter) -> None:
        """예외 시 롤백"""
        await adapter.execute("CREATE TABLE tx_test2 (id INTEGER)")
        await adapter.commit()

        with pytest.raises(ValueError):
            async with adapter.transaction():
                await adapter.execute("INSERT INTO tx_test2 (id) VALUES (1)")
                raise ValueError("의도적 에러")

        rows = await adapter.fetchall("SELECT id FROM tx_test2")
        assert len(rows) == 0

    @pytest.mark.asyncio
    async def test_nested_transaction_joins_outer(self, adapter: SQLiteAdapter) -> None:
        """안쪽 transaction()은 바깥 트랜잭션에 합류"""
        await adapter.execute("CREATE TABLE nested (id INTEGER)")
        await adapter.commit()

        with pytest.raises(ValueError):
            async with adapter.transaction():
                async with adapter.transaction():
                    await adapter.execute("INSERT INTO nested (id) VALUES (1)")
                raise ValueError("바깥에서 실패")

        rows = await adapter.fetchall("SELECT id FROM nested")
        assert rows == []

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        """컨텍스트 매니저"""
        async with SQLiteAdapter(tmp_path / "ctx_test.db") as adapter:
            await adapter.execute("CREATE TABLE ctx (id INTEGER)")

        with pytest.raises(RuntimeError, match="Not connected"):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_memory_db(self) -> None:
        async with SQLiteAdapter(MEMORY_DB) as adapter:
            assert adapter.db_path == MEMORY_DB
            row = await adapter.fetchone("SELECT 1 + 1")
            assert row[0] == 2


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_creates_tables(self, tmp_path: Path) -> None:
        async with SQLiteAdapter(tmp_path / "schema_test.db") as adapter:
            await init_schema(adapter)

            assert set(TABLES) <= await table_names(adapter)

    @pytest.mark.asyncio
    async def test_idempotent(self, tmp_path: Path) -> None:
        """여러 번 실행 가능"""
        async with SQLiteAdapter(tmp_path / "idempotent_test.db") as adapter:
            await init_schema(adapter)
            await init_schema(adapter)

            assert "transactions" in await table_names(adapter)

    @pytest.mark.asyncio
    async def test_amounts_stored_as_text(self, tmp_path: Path) -> None:
        """금액 컬럼은 TEXT (Decimal 보존)"""
        async with SQLiteAdapter(tmp_path / "types.db") as adapter:
            await init_schema(adapter)

            rows = await adapter.fetchall("PRAGMA table_info(transactions)")
            columns = {row[1]: row[2] for row in rows}

            assert columns["amount"] == "TEXT"
            assert columns["date"] == "TEXT"

    @pytest.mark.asyncio
    async def test_transaction_requires_account(self, tmp_path: Path) -> None:
        """없는 계좌를 참조하는 거래는 거부"""
        async with SQLiteAdapter(tmp_path / "fk.db") as adapter:
            await init_schema(adapter)

            with pytest.raises(aiosqlite.IntegrityError):
                await adapter.execute(
                    """
                    INSERT INTO transactions (
                        id, user_id, account_id, type, amount, category,
                        date, created_at, updated_at
                    ) VALUES ('t1', 'u1', 'missing', 'expense', '1', 'x',
                              '2026-01-01', '2026-01-01', '2026-01-01')
                    """
                )

    @pytest.mark.asyncio
    async def test_category_unique_per_type(self, tmp_path: Path) -> None:
        async with SQLiteAdapter(tmp_path / "unique.db") as adapter:
            await init_schema(adapter)
            insert = """
                INSERT INTO categories (
                    id, user_id, name, type, icon, color, created_at, updated_at
                ) VALUES (?, 'u1', 'Others', ?, 'i', 'c', 'now', 'now')
            """
            await adapter.execute(insert, ("c1", "expense"))
            await adapter.execute(insert, ("c2", "income"))

            with pytest.raises(aiosqlite.IntegrityError):
                await adapter.execute(insert, ("c3", "expense"))

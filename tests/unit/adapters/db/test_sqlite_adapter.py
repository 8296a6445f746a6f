"""
SQLite 어댑터 테스트

SQLiteAdapter 연결, 트랜잭션, 스키마 초기화 테스트.
"""

from pathlib import Path

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter, create_connection, init_schema

EXPECTED_TABLES = [
    "users",
    "categories",
    "income_sources",
    "accounts",
    "transactions",
    "exchange_operations",
    "budgets",
    "financial_goals",
    "investments",
    "assets",
    "liabilities",
]


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_pragmas(self, tmp_path: Path) -> None:
        """WAL 모드 + 외래 키 활성화"""
        conn = await create_connection(tmp_path / "nested" / "test.db")
        try:
            cursor = await conn.execute("PRAGMA journal_mode")
            assert (await cursor.fetchone())[0].lower() == "wal"

            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1
        finally:
            await conn.close()

        assert (tmp_path / "nested").is_dir()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest.mark.asyncio
    async def test_not_connected(self, tmp_path: Path) -> None:
        adapter = SQLiteAdapter(tmp_path / "test.db")

        assert adapter.is_connected is False
        with pytest.raises(RuntimeError):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        async with SQLiteAdapter(tmp_path / "test.db") as adapter:
            assert adapter.is_connected
            assert await adapter.fetchone("SELECT 1") == (1,)
        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_transaction_commit(self, tmp_path: Path) -> None:
        async with SQLiteAdapter(tmp_path / "test.db") as adapter:
            await adapter.execute("CREATE TABLE t (v INTEGER)")

            async with adapter.transaction(immediate=True):
                assert adapter.in_transaction
                await adapter.execute("INSERT INTO t (v) VALUES (1)")

            assert adapter.in_transaction is False
            assert await adapter.fetchall("SELECT v FROM t") == [(1,)]

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, tmp_path: Path) -> None:
        async with SQLiteAdapter(tmp_path / "test.db") as adapter:
            await adapter.execute("CREATE TABLE t (v INTEGER)")

            with pytest.raises(ValueError):
                async with adapter.transaction(immediate=True):
                    await adapter.execute("INSERT INTO t (v) VALUES (1)")
                    raise ValueError("boom")

            assert await adapter.fetchall("SELECT v FROM t") == []


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_creates_tables(self, tmp_path: Path) -> None:
        async with SQLiteAdapter(tmp_path / "test.db") as adapter:
            await init_schema(adapter)

            rows = await adapter.fetchall("SELECT name FROM sqlite_master WHERE type = 'table'")
            tables = {row[0] for row in rows}
            assert set(EXPECTED_TABLES) <= tables

    @pytest.mark.asyncio
    async def test_idempotent(self, tmp_path: Path) -> None:
        async with SQLiteAdapter(tmp_path / "test.db") as adapter:
            await init_schema(adapter)
            await init_schema(adapter)

            columns = {row[1] for row in await adapter.fetchall("PRAGMA table_info(accounts)")}
            assert {"balance", "currency", "is_emergency_fund"} <= columns

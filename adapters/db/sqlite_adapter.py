"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
요청마다 독립 연결을 열어 동시 요청이 같은 DB에 접근 가능하도록 설정.

주의: SQLite alias로 time, count 사용 금지 (예약어)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.ledger.schema import init_ledger_schema

logger = logging.getLogger(__name__)


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로 (":memory:" 허용)

    Returns:
        aiosqlite 연결 객체
    """
    # pathlib.Path를 문자열로 변환
    db_path_str = str(db_path)

    if db_path_str != ":memory:":
        # 디렉토리가 없으면 생성
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path_str)

    # WAL 모드 설정
    await conn.execute("PRAGMA journal_mode=WAL")

    # 동시 접근 설정
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    # 외래 키 제약 활성화 (CASCADE / SET NULL 정책 의존)
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로

    사용 예시:
    ```python
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()

    async with adapter.transaction(immediate=True):
        await adapter.execute("UPDATE accounts SET ...")

    await adapter.close()
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    @property
    def in_transaction(self) -> bool:
        """트랜잭션 진행 중 여부"""
        return self._conn is not None and self._conn.in_transaction

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

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

    async def executemany(
        self,
        sql: str,
        parameters: list[tuple[Any, ...]],
    ) -> aiosqlite.Cursor:
        """SQL 다중 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        return await self._conn.executemany(sql, parameters)

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
        return await cursor.fetchall()

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self, immediate: bool = False) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.

        Args:
            immediate: True면 BEGIN IMMEDIATE로 시작하여 쓰기 락을 즉시 획득.
                같은 DB에 대한 동시 잔고 변경 단위가 직렬화됨.

        사용 예시:
        ```python
        async with adapter.transaction(immediate=True) as conn:
            await conn.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if immediate and not self._conn.in_transaction:
            await self._conn.execute("BEGIN IMMEDIATE")

        try:
            yield self._conn
            await self._conn.commit()
        except Exception:
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

    Args:
        adapter: 연결된 SQLiteAdapter

    앱 시작 시(lifespan) 호출. IF NOT EXISTS로 반복 호출 안전.
    """
    # users
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id                   INTEGER PRIMARY KEY AUTOINCREMENT,
            name                 TEXT NOT NULL,
            email                TEXT NOT NULL UNIQUE,
            password_hash        TEXT NOT NULL,
            reset_token          TEXT,
            reset_token_expires  INTEGER,
            created_at           TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # categories
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS categories (
            id          INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id     INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name        TEXT NOT NULL,
            type        TEXT NOT NULL CHECK (type IN ('income', 'expense')),
            color       TEXT,
            created_at  TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # income_sources
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS income_sources (
            id           INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id      INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name         TEXT NOT NULL,
            description  TEXT,
            created_at   TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # accounts / transactions / exchange_operations
    await init_ledger_schema(adapter)

    # budgets (중복 키는 UPSERT로 처리)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS budgets (
            id            INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id       INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            category_id   INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
            month         INTEGER NOT NULL CHECK (month BETWEEN 1 AND 12),
            year          INTEGER NOT NULL,
            limit_amount  TEXT NOT NULL,
            currency      TEXT NOT NULL DEFAULT 'BRL',
            created_at    TEXT NOT NULL DEFAULT (datetime('now')),

            UNIQUE(user_id, category_id, month, year, currency)
        )
    """)

    # financial_goals
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS financial_goals (
            id              INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id         INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            account_id      INTEGER REFERENCES accounts(id) ON DELETE SET NULL,
            name            TEXT NOT NULL,
            target_amount   TEXT NOT NULL,
            current_amount  TEXT NOT NULL DEFAULT '0.00',
            currency        TEXT NOT NULL DEFAULT 'BRL',
            deadline        TEXT,
            category        TEXT,
            status          TEXT NOT NULL DEFAULT 'in_progress',
            created_at      TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # investments
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS investments (
            id             INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id        INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name           TEXT NOT NULL,
            type           TEXT NOT NULL,
            amount         TEXT NOT NULL,
            current_value  TEXT NOT NULL,
            currency       TEXT NOT NULL,
            purchase_date  TEXT NOT NULL,
            broker         TEXT,
            notes          TEXT,
            created_at     TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # assets
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS assets (
            id             INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id        INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name           TEXT NOT NULL,
            type           TEXT,
            value          TEXT NOT NULL,
            currency       TEXT NOT NULL,
            purchase_date  TEXT,
            description    TEXT,
            created_at     TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # liabilities
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS liabilities (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id          INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name             TEXT NOT NULL,
            type             TEXT,
            amount           TEXT NOT NULL,
            interest_rate    TEXT,
            due_date         TEXT,
            monthly_payment  TEXT,
            currency         TEXT NOT NULL,
            description      TEXT,
            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # 인덱스 생성
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_categories_user
        ON categories(user_id)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_budgets_user_period
        ON budgets(user_id, year, month)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_investments_user
        ON investments(user_id)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")

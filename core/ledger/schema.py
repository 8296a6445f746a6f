"""
Ledger 스키마 초기화

API 시작 시 자동으로 계좌/거래/환전 테이블 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.

잔고(balance)는 TEXT Decimal 문자열로 저장 ('123.45').
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """Ledger 스키마 초기화

    이미 존재하는 경우 안전하게 건너뜀 (IF NOT EXISTS).
    커밋은 호출자(init_schema)가 수행.

    Args:
        db: SQLiteAdapter 인스턴스
    """
    await _create_ledger_tables(db)
    await _create_ledger_indexes(db)
    logger.info("Ledger 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """Ledger 테이블 생성"""

    # accounts 테이블
    await db.execute("""
        CREATE TABLE IF NOT EXISTS accounts (
            id                 INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id            INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name               TEXT NOT NULL,
            type               TEXT NOT NULL DEFAULT 'checking',
            currency           TEXT NOT NULL CHECK (length(currency) = 3),
            balance            TEXT NOT NULL DEFAULT '0.00',
            is_emergency_fund  INTEGER NOT NULL DEFAULT 0,
            created_at         TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # transactions 테이블 (계좌 삭제 시 CASCADE, 카테고리/수입원 삭제 시 SET NULL)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id                INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id           INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            account_id        INTEGER NOT NULL REFERENCES accounts(id) ON DELETE CASCADE,
            category_id       INTEGER REFERENCES categories(id) ON DELETE SET NULL,
            income_source_id  INTEGER REFERENCES income_sources(id) ON DELETE SET NULL,
            type              TEXT NOT NULL CHECK (type IN ('income', 'expense')),
            amount            TEXT NOT NULL,
            description       TEXT,
            date              TEXT NOT NULL,
            created_at        TEXT NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
        )
    """)

    # exchange_operations 테이블
    await db.execute("""
        CREATE TABLE IF NOT EXISTS exchange_operations (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id          INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            from_account_id  INTEGER NOT NULL REFERENCES accounts(id) ON DELETE CASCADE,
            to_account_id    INTEGER NOT NULL REFERENCES accounts(id) ON DELETE CASCADE,
            from_amount      TEXT NOT NULL,
            to_amount        TEXT NOT NULL,
            from_currency    TEXT NOT NULL,
            to_currency      TEXT NOT NULL,
            exchange_rate    TEXT NOT NULL,
            date             TEXT NOT NULL,
            created_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
        )
    """)


async def _create_ledger_indexes(db: "SQLiteAdapter") -> None:
    """Ledger 인덱스 생성"""

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_accounts_user
        ON accounts(user_id)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_accounts_emergency_fund
        ON accounts(user_id, is_emergency_fund)
        WHERE is_emergency_fund = 1
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_user_date
        ON transactions(user_id, date)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_transactions_account
        ON transactions(account_id)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_exchange_operations_user_date
        ON exchange_operations(user_id, date)
    """)

"""
Ledger 저장소

계좌/거래/환전 레코드 저장 및 조회.
모든 쿼리는 user_id로 범위를 제한 (타 사용자 레코드는 "없음"과 동일).

커밋하지 않음: 트랜잭션 경계는 호출자(LedgerLifecycle, 서비스)가 관리.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.constants import Defaults
from core.errors import NotFoundError
from core.ledger.types import (
    ExchangeData,
    ExchangeRecord,
    TransactionData,
    TransactionRecord,
)
from core.types import TransactionKind
from core.utils.money import quantize_money, to_decimal

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


# 계좌 수정 허용 필드 (balance는 Ledger 경로로만 변경)
ACCOUNT_MUTABLE_FIELDS = ("name", "type", "currency", "is_emergency_fund")

# 소유권 확인 대상 테이블
OWNED_TABLES = frozenset({"accounts", "categories", "income_sources"})

_ACCOUNT_COLUMNS = "id, user_id, name, type, currency, balance, is_emergency_fund, created_at"

_TRANSACTION_COLUMNS = (
    "id, user_id, account_id, category_id, income_source_id, "
    "type, amount, description, date, created_at"
)

_EXCHANGE_COLUMNS = (
    "id, user_id, from_account_id, to_account_id, from_amount, to_amount, "
    "from_currency, to_currency, exchange_rate, date, created_at"
)


def _account_from_row(row: tuple[Any, ...]) -> dict[str, Any]:
    return {
        "id": row[0],
        "user_id": row[1],
        "name": row[2],
        "type": row[3],
        "currency": row[4],
        "balance": Decimal(row[5]),
        "is_emergency_fund": bool(row[6]),
        "created_at": row[7],
    }


def _transaction_from_row(row: tuple[Any, ...]) -> TransactionRecord:
    return TransactionRecord(
        id=row[0],
        user_id=row[1],
        data=TransactionData(
            account_id=row[2],
            category_id=row[3],
            income_source_id=row[4],
            type=TransactionKind(row[5]),
            amount=Decimal(row[6]),
            description=row[7],
            date=row[8],
        ),
        created_at=row[9],
    )


def _exchange_from_row(row: tuple[Any, ...]) -> ExchangeRecord:
    return ExchangeRecord(
        id=row[0],
        user_id=row[1],
        data=ExchangeData(
            from_account_id=row[2],
            to_account_id=row[3],
            from_amount=Decimal(row[4]),
            to_amount=Decimal(row[5]),
            from_currency=row[6],
            to_currency=row[7],
            exchange_rate=Decimal(row[8]),
            date=row[9],
        ),
        created_at=row[10],
    )


class LedgerStore:
    """Ledger 저장소

    계좌 잔고는 거래/환전 이력의 누적 결과로 저장되는 값.
    잔고 변경은 BalanceMutator를 통해서만 수행.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # -------------------------------------------------------------------------
    # 소유권
    # -------------------------------------------------------------------------

    async def is_owned(self, table: str, record_id: int, user_id: int) -> bool:
        """레코드가 해당 사용자 소유인지 확인

        Args:
            table: accounts / categories / income_sources
            record_id: 레코드 ID
            user_id: 사용자 ID
        """
        if table not in OWNED_TABLES:
            raise ValueError(f"Unsupported table: {table}")

        row = await self.db.fetchone(
            f"SELECT 1 FROM {table} WHERE id = ? AND user_id = ?",
            (record_id, user_id),
        )
        return row is not None

    # -------------------------------------------------------------------------
    # 계좌
    # -------------------------------------------------------------------------

    async def create_account(
        self,
        user_id: int,
        name: str,
        currency: str,
        account_type: str = Defaults.ACCOUNT_TYPE,
        balance: Decimal | None = None,
        is_emergency_fund: bool = False,
    ) -> dict[str, Any]:
        """계좌 생성

        balance는 개설 잔고 (이후 변경은 거래/환전으로만).
        """
        opening = quantize_money(balance if balance is not None else 0)

        cursor = await self.db.execute(
            """
            INSERT INTO accounts (user_id, name, type, currency, balance, is_emergency_fund)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (user_id, name, account_type, currency, str(opening), int(is_emergency_fund)),
        )

        account = await self.get_account(cursor.lastrowid, user_id)
        assert account is not None
        return account

    async def get_accounts_by_user(self, user_id: int) -> list[dict[str, Any]]:
        """사용자 계좌 목록 (생성 순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM accounts
            WHERE user_id = ?
            ORDER BY created_at, id
            """,
            (user_id,),
        )
        return [_account_from_row(row) for row in rows]

    async def get_account(self, account_id: int, user_id: int) -> dict[str, Any] | None:
        """계좌 단건 조회 (타 사용자 계좌는 None)"""
        row = await self.db.fetchone(
            f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM accounts
            WHERE id = ? AND user_id = ?
            """,
            (account_id, user_id),
        )
        return _account_from_row(row) if row else None

    async def update_account(
        self,
        account_id: int,
        user_id: int,
        fields: dict[str, Any],
    ) -> dict[str, Any]:
        """계좌 속성 수정

        Args:
            account_id: 계좌 ID
            user_id: 사용자 ID
            fields: 수정할 필드 (name, type, currency, is_emergency_fund)

        Returns:
            수정된 계좌

        Raises:
            NotFoundError: 계좌가 없거나 다른 사용자 소유
            ValueError: 수정 불가 필드 포함
        """
        invalid = set(fields) - set(ACCOUNT_MUTABLE_FIELDS)
        if invalid:
            raise ValueError(f"Account fields not updatable: {sorted(invalid)}")

        if fields:
            assignments = ", ".join(f"{name} = ?" for name in fields)
            values = [
                int(value) if name == "is_emergency_fund" else value
                for name, value in fields.items()
            ]
            cursor = await self.db.execute(
                f"UPDATE accounts SET {assignments} WHERE id = ? AND user_id = ?",
                (*values, account_id, user_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Account")

        account = await self.get_account(account_id, user_id)
        if account is None:
            raise NotFoundError("Account")
        return account

    async def delete_account(self, account_id: int, user_id: int) -> bool:
        """계좌 삭제

        연결된 거래/환전은 FK(ON DELETE CASCADE)로 함께 삭제.
        """
        cursor = await self.db.execute(
            "DELETE FROM accounts WHERE id = ? AND user_id = ?",
            (account_id, user_id),
        )
        return cursor.rowcount > 0

    async def get_balance(self, account_id: int, user_id: int) -> Decimal | None:
        """계좌 잔고 조회 (없으면 None)"""
        row = await self.db.fetchone(
            "SELECT balance FROM accounts WHERE id = ? AND user_id = ?",
            (account_id, user_id),
        )
        return Decimal(row[0]) if row else None

    async def set_balance(self, account_id: int, user_id: int, balance: Decimal) -> bool:
        """계좌 잔고 기록 (BalanceMutator 전용)"""
        cursor = await self.db.execute(
            "UPDATE accounts SET balance = ? WHERE id = ? AND user_id = ?",
            (str(quantize_money(balance)), account_id, user_id),
        )
        return cursor.rowcount > 0

    # -------------------------------------------------------------------------
    # 거래
    # -------------------------------------------------------------------------

    async def get_transaction(self, transaction_id: int, user_id: int) -> TransactionRecord | None:
        """거래 단건 조회"""
        row = await self.db.fetchone(
            f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM transactions
            WHERE id = ? AND user_id = ?
            """,
            (transaction_id, user_id),
        )
        return _transaction_from_row(row) if row else None

    async def list_transactions(
        self,
        user_id: int,
        account_id: int | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[TransactionRecord]:
        """거래 목록 (최신 날짜 순)"""
        sql = f"SELECT {_TRANSACTION_COLUMNS} FROM transactions WHERE user_id = ?"
        params: list[Any] = [user_id]

        if account_id is not None:
            sql += " AND account_id = ?"
            params.append(account_id)

        sql += " ORDER BY date DESC, created_at DESC, id DESC"

        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params.extend([limit, offset])

        rows = await self.db.fetchall(sql, tuple(params))
        return [_transaction_from_row(row) for row in rows]

    async def insert_transaction(self, user_id: int, data: TransactionData) -> TransactionRecord:
        """거래 레코드 삽입 (잔고 변경 없음)"""
        cursor = await self.db.execute(
            """
            INSERT INTO transactions (
                user_id, account_id, category_id, income_source_id,
                type, amount, description, date
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                user_id,
                data.account_id,
                data.category_id,
                data.income_source_id,
                data.type.value,
                str(quantize_money(data.amount)),
                data.description,
                data.date,
            ),
        )

        record = await self.get_transaction(cursor.lastrowid, user_id)
        assert record is not None
        return record

    async def update_transaction_record(
        self,
        transaction_id: int,
        user_id: int,
        data: TransactionData,
    ) -> TransactionRecord:
        """거래 레코드 수정 (잔고 변경 없음)

        Raises:
            NotFoundError: 거래가 없거나 다른 사용자 소유
        """
        cursor = await self.db.execute(
            """
            UPDATE transactions SET
                account_id = ?, category_id = ?, income_source_id = ?,
                type = ?, amount = ?, description = ?, date = ?
            WHERE id = ? AND user_id = ?
            """,
            (
                data.account_id,
                data.category_id,
                data.income_source_id,
                data.type.value,
                str(quantize_money(data.amount)),
                data.description,
                data.date,
                transaction_id,
                user_id,
            ),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Transaction")

        record = await self.get_transaction(transaction_id, user_id)
        assert record is not None
        return record

    async def delete_transaction_record(self, transaction_id: int, user_id: int) -> None:
        """거래 레코드 삭제 (잔고 변경 없음)

        Raises:
            NotFoundError: 거래가 없거나 다른 사용자 소유
        """
        cursor = await self.db.execute(
            "DELETE FROM transactions WHERE id = ? AND user_id = ?",
            (transaction_id, user_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Transaction")

    # -------------------------------------------------------------------------
    # 환전
    # -------------------------------------------------------------------------

    async def get_exchange(self, exchange_id: int, user_id: int) -> ExchangeRecord | None:
        """환전 단건 조회"""
        row = await self.db.fetchone(
            f"""
            SELECT {_EXCHANGE_COLUMNS}
            FROM exchange_operations
            WHERE id = ? AND user_id = ?
            """,
            (exchange_id, user_id),
        )
        return _exchange_from_row(row) if row else None

    async def list_exchanges(self, user_id: int) -> list[ExchangeRecord]:
        """환전 목록 (최신 날짜 순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_EXCHANGE_COLUMNS}
            FROM exchange_operations
            WHERE user_id = ?
            ORDER BY date DESC, created_at DESC, id DESC
            """,
            (user_id,),
        )
        return [_exchange_from_row(row) for row in rows]

    async def insert_exchange(self, user_id: int, data: ExchangeData) -> ExchangeRecord:
        """환전 레코드 삽입 (잔고 변경 없음)"""
        cursor = await self.db.execute(
            """
            INSERT INTO exchange_operations (
                user_id, from_account_id, to_account_id, from_amount, to_amount,
                from_currency, to_currency, exchange_rate, date
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                user_id,
                data.from_account_id,
                data.to_account_id,
                str(quantize_money(data.from_amount)),
                str(quantize_money(data.to_amount)),
                data.from_currency,
                data.to_currency,
                str(data.exchange_rate),
                data.date,
            ),
        )

        record = await self.get_exchange(cursor.lastrowid, user_id)
        assert record is not None
        return record

    async def update_exchange_record(
        self,
        exchange_id: int,
        user_id: int,
        data: ExchangeData,
    ) -> ExchangeRecord:
        """환전 레코드 수정 (잔고 변경 없음)

        Raises:
            NotFoundError: 환전이 없거나 다른 사용자 소유
        """
        cursor = await self.db.execute(
            """
            UPDATE exchange_operations SET
                from_account_id = ?, to_account_id = ?, from_amount = ?, to_amount = ?,
                from_currency = ?, to_currency = ?, exchange_rate = ?, date = ?
            WHERE id = ? AND user_id = ?
            """,
            (
                data.from_account_id,
                data.to_account_id,
                str(quantize_money(data.from_amount)),
                str(quantize_money(data.to_amount)),
                data.from_currency,
                data.to_currency,
                str(data.exchange_rate),
                data.date,
                exchange_id,
                user_id,
            ),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Exchange operation")

        record = await self.get_exchange(exchange_id, user_id)
        assert record is not None
        return record

    async def delete_exchange_record(self, exchange_id: int, user_id: int) -> None:
        """환전 레코드 삭제 (잔고 변경 없음)

        Raises:
            NotFoundError: 환전이 없거나 다른 사용자 소유
        """
        cursor = await self.db.execute(
            "DELETE FROM exchange_operations WHERE id = ? AND user_id = ?",
            (exchange_id, user_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Exchange operation")

    # -------------------------------------------------------------------------
    # 검증용 집계
    # -------------------------------------------------------------------------

    async def compute_ledger_effect(self, account_id: int, user_id: int) -> Decimal:
        """이력 기준 계좌 순효과 (거래 + 환전 델타 합)

        저장된 balance와 비교하여 정합성 검증에 사용.
        """
        total = Decimal("0")

        rows = await self.db.fetchall(
            "SELECT type, amount FROM transactions WHERE account_id = ? AND user_id = ?",
            (account_id, user_id),
        )
        for kind, amount in rows:
            value = to_decimal(amount)
            total += value if kind == TransactionKind.INCOME.value else -value

        rows = await self.db.fetchall(
            """
            SELECT from_account_id, to_account_id, from_amount, to_amount
            FROM exchange_operations
            WHERE user_id = ? AND (from_account_id = ? OR to_account_id = ?)
            """,
            (user_id, account_id, account_id),
        )
        for from_id, to_id, from_amount, to_amount in rows:
            if from_id == account_id:
                total -= to_decimal(from_amount)
            if to_id == account_id:
                total += to_decimal(to_amount)

        return total

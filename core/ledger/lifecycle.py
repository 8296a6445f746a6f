"""
거래 수명주기 관리

거래/환전의 생성/수정/삭제를 하나의 원자 단위로 실행.

원자 단위 (apply_ledger_delta):
    FETCH → REVERSE → MUTATE → REAPPLY
    - FETCH: 기존 레코드 조회 (user_id 범위). 없으면 NotFoundError
    - REVERSE: 기존 레코드 효과 역적용
    - MUTATE: 레코드 삽입/수정/삭제
    - REAPPLY: 새 레코드 효과 적용

모든 단계는 BEGIN IMMEDIATE 트랜잭션 하나에서 실행.
어느 단계에서든 예외 발생 시 전체 롤백.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING, Awaitable, Callable, TypeVar

from core.errors import NotFoundError, StoreError
from core.ledger.mutator import BalanceMutator
from core.ledger.store import LedgerStore
from core.ledger.types import (
    ExchangeData,
    ExchangeRecord,
    LedgerEffect,
    LedgerStep,
    TransactionData,
    TransactionRecord,
)
from core.types import LedgerOperation

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=LedgerEffect)


class LedgerLifecycle:
    """거래 수명주기 관리자

    Args:
        db: SQLite 어댑터 (요청 단위 연결)

    사용 예시:
    ```python
    lifecycle = LedgerLifecycle(db)
    record = await lifecycle.create_transaction(user_id, data)
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.store = LedgerStore(db)
        self.mutator = BalanceMutator(self.store)

    async def apply_ledger_delta(
        self,
        user_id: int,
        operation: LedgerOperation,
        entity: str,
        mutate: Callable[[], Awaitable[R | None]],
        fetch: Callable[[], Awaitable[R | None]] | None = None,
        validate: Callable[[], Awaitable[None]] | None = None,
    ) -> tuple[R | None, R | None]:
        """역적용 → 변경 → 재적용 원자 단위

        Args:
            user_id: 사용자 ID
            operation: CREATE / UPDATE / DELETE
            entity: 레코드 이름 (NotFound 메시지용)
            mutate: 레코드 변경 함수 (삭제 시 None 반환)
            fetch: 기존 레코드 조회 함수 (UPDATE/DELETE 필수)
            validate: 참조 소유권 검증 함수 (MUTATE 전에 실행)

        Returns:
            (기존 레코드, 새 레코드)

        Raises:
            NotFoundError: 레코드/계좌가 없거나 다른 사용자 소유
            StoreError: DB 오류 (롤백 완료 후)
        """
        if operation != LedgerOperation.CREATE and fetch is None:
            raise ValueError(f"{operation.value} requires fetch")

        step = LedgerStep.FETCH
        old: R | None = None
        new: R | None = None

        try:
            async with self.db.transaction(immediate=True):
                if fetch is not None:
                    old = await fetch()
                    if old is None:
                        raise NotFoundError(entity)

                    step = LedgerStep.REVERSE
                    await self.mutator.reverse(old, user_id)

                if validate is not None:
                    await validate()

                step = LedgerStep.MUTATE
                new = await mutate()

                if new is not None:
                    step = LedgerStep.REAPPLY
                    await self.mutator.apply(new, user_id)

                step = LedgerStep.DONE

        except sqlite3.Error as e:
            logger.error(
                f"Ledger 원자 단위 실패 (롤백): {entity} {operation.value} at {step.value}: {e}",
                extra={"user_id": user_id, "step": step.value},
            )
            raise StoreError(f"Failed to {operation.value.lower()} {entity.lower()}") from e

        except NotFoundError:
            logger.info(
                f"Ledger 원자 단위 중단 (NotFound): {entity} {operation.value} at {step.value}",
                extra={"user_id": user_id, "step": step.value},
            )
            raise

        return old, new

    # -------------------------------------------------------------------------
    # 거래
    # -------------------------------------------------------------------------

    async def _validate_transaction_refs(self, user_id: int, data: TransactionData) -> None:
        """계좌/카테고리/수입원 소유권 확인"""
        if not await self.store.is_owned("accounts", data.account_id, user_id):
            raise NotFoundError("Account")
        if data.category_id is not None and not await self.store.is_owned(
            "categories", data.category_id, user_id
        ):
            raise NotFoundError("Category")
        if data.income_source_id is not None and not await self.store.is_owned(
            "income_sources", data.income_source_id, user_id
        ):
            raise NotFoundError("Income source")

    async def create_transaction(self, user_id: int, data: TransactionData) -> TransactionRecord:
        """거래 생성 (삽입 + 잔고 적용)"""
        _, record = await self.apply_ledger_delta(
            user_id,
            LedgerOperation.CREATE,
            "Transaction",
            validate=lambda: self._validate_transaction_refs(user_id, data),
            mutate=lambda: self.store.insert_transaction(user_id, data),
        )
        assert record is not None

        logger.info(
            f"거래 생성: id={record.id} {data.type.value} {data.amount} account={data.account_id}",
            extra={"user_id": user_id, "transaction_id": record.id},
        )
        return record

    async def update_transaction(
        self,
        transaction_id: int,
        user_id: int,
        data: TransactionData,
    ) -> TransactionRecord:
        """거래 수정 (기존 효과 역적용 → 수정 → 새 효과 적용)

        계좌 변경 시 효과가 새 계좌로 이동, 유형 변경 시 부호 반전.
        """
        old, record = await self.apply_ledger_delta(
            user_id,
            LedgerOperation.UPDATE,
            "Transaction",
            fetch=lambda: self.store.get_transaction(transaction_id, user_id),
            validate=lambda: self._validate_transaction_refs(user_id, data),
            mutate=lambda: self.store.update_transaction_record(transaction_id, user_id, data),
        )
        assert old is not None and record is not None

        logger.info(
            f"거래 수정: id={transaction_id} "
            f"{old.data.type.value} {old.data.amount}@{old.data.account_id} → "
            f"{data.type.value} {data.amount}@{data.account_id}",
            extra={"user_id": user_id, "transaction_id": transaction_id},
        )
        return record

    async def delete_transaction(self, transaction_id: int, user_id: int) -> TransactionRecord:
        """거래 삭제 (효과 역적용 + 삭제)

        Returns:
            삭제된 거래
        """

        async def _delete() -> None:
            await self.store.delete_transaction_record(transaction_id, user_id)
            return None

        old, _ = await self.apply_ledger_delta(
            user_id,
            LedgerOperation.DELETE,
            "Transaction",
            fetch=lambda: self.store.get_transaction(transaction_id, user_id),
            mutate=_delete,
        )
        assert old is not None

        logger.info(
            f"거래 삭제: id={transaction_id}",
            extra={"user_id": user_id, "transaction_id": transaction_id},
        )
        return old

    # -------------------------------------------------------------------------
    # 환전
    # -------------------------------------------------------------------------

    async def _validate_exchange_refs(self, user_id: int, data: ExchangeData) -> None:
        """출금/입금 계좌 소유권 확인"""
        for account_id in (data.from_account_id, data.to_account_id):
            if not await self.store.is_owned("accounts", account_id, user_id):
                raise NotFoundError("Account")

    async def create_exchange(self, user_id: int, data: ExchangeData) -> ExchangeRecord:
        """환전 생성"""
        _, record = await self.apply_ledger_delta(
            user_id,
            LedgerOperation.CREATE,
            "Exchange operation",
            validate=lambda: self._validate_exchange_refs(user_id, data),
            mutate=lambda: self.store.insert_exchange(user_id, data),
        )
        assert record is not None

        logger.info(
            f"환전 생성: id={record.id} "
            f"{data.from_amount} {data.from_currency} → {data.to_amount} {data.to_currency}",
            extra={"user_id": user_id, "exchange_id": record.id},
        )
        return record

    async def update_exchange(
        self,
        exchange_id: int,
        user_id: int,
        data: ExchangeData,
    ) -> ExchangeRecord:
        """환전 수정"""
        _, record = await self.apply_ledger_delta(
            user_id,
            LedgerOperation.UPDATE,
            "Exchange operation",
            fetch=lambda: self.store.get_exchange(exchange_id, user_id),
            validate=lambda: self._validate_exchange_refs(user_id, data),
            mutate=lambda: self.store.update_exchange_record(exchange_id, user_id, data),
        )
        assert record is not None

        logger.info(
            f"환전 수정: id={exchange_id}",
            extra={"user_id": user_id, "exchange_id": exchange_id},
        )
        return record

    async def delete_exchange(self, exchange_id: int, user_id: int) -> ExchangeRecord:
        """환전 삭제

        Returns:
            삭제된 환전
        """

        async def _delete() -> None:
            await self.store.delete_exchange_record(exchange_id, user_id)
            return None

        old, _ = await self.apply_ledger_delta(
            user_id,
            LedgerOperation.DELETE,
            "Exchange operation",
            fetch=lambda: self.store.get_exchange(exchange_id, user_id),
            mutate=_delete,
        )
        assert old is not None

        logger.info(
            f"환전 삭제: id={exchange_id}",
            extra={"user_id": user_id, "exchange_id": exchange_id},
        )
        return old

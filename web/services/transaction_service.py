"""
거래 서비스

거래 생성/수정/삭제는 LedgerLifecycle 원자 단위로 실행 (잔고 자동 반영).
"""

from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.lifecycle import LedgerLifecycle
from core.ledger.types import TransactionData
from web.models.requests import TransactionRequest


def to_transaction_data(request: TransactionRequest) -> TransactionData:
    """요청 → 거래 입력값"""
    return TransactionData(
        account_id=request.account_id,
        type=request.type,
        amount=request.amount,
        date=request.date.isoformat(),
        description=request.description,
        category_id=request.category_id,
        income_source_id=request.income_source_id,
    )


class TransactionService:
    """거래 서비스

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.lifecycle = LedgerLifecycle(db)

    async def list_transactions(
        self,
        user_id: int,
        account_id: int | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """거래 목록 (최신 순)"""
        records = await self.lifecycle.store.list_transactions(
            user_id,
            account_id=account_id,
            limit=limit,
            offset=offset,
        )
        return [record.to_dict() for record in records]

    async def create_transaction(self, user_id: int, request: TransactionRequest) -> dict[str, Any]:
        record = await self.lifecycle.create_transaction(user_id, to_transaction_data(request))
        return record.to_dict()

    async def update_transaction(
        self,
        transaction_id: int,
        user_id: int,
        request: TransactionRequest,
    ) -> dict[str, Any]:
        record = await self.lifecycle.update_transaction(
            transaction_id, user_id, to_transaction_data(request)
        )
        return record.to_dict()

    async def delete_transaction(self, transaction_id: int, user_id: int) -> None:
        await self.lifecycle.delete_transaction(transaction_id, user_id)

"""
환전 서비스

출금 계좌 -fromAmount, 입금 계좌 +toAmount를 하나의 원자 단위로 반영.
"""

from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.errors import NotFoundError
from core.ledger.lifecycle import LedgerLifecycle
from core.ledger.types import ExchangeData
from core.utils.money import quantize_rate
from web.models.requests import ExchangeRequest


def derive_exchange_rate(from_amount: Decimal, to_amount: Decimal) -> Decimal:
    """환율 기본값 (toAmount / fromAmount, fromAmount 0이면 0)"""
    if from_amount == 0:
        return quantize_rate(0)
    return quantize_rate(to_amount / from_amount)


class ExchangeService:
    """환전 서비스

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.lifecycle = LedgerLifecycle(db)

    async def _account_currency(self, account_id: int, user_id: int) -> str:
        account = await self.lifecycle.store.get_account(account_id, user_id)
        if account is None:
            raise NotFoundError("Account")
        return account["currency"]

    async def to_exchange_data(self, user_id: int, request: ExchangeRequest) -> ExchangeData:
        """요청 → 환전 입력값

        통화 생략 시 계좌 통화, 환율 생략 시 금액 비율.
        """
        from_currency = request.from_currency or await self._account_currency(
            request.from_account_id, user_id
        )
        to_currency = request.to_currency or await self._account_currency(
            request.to_account_id, user_id
        )

        if request.exchange_rate is not None:
            rate = quantize_rate(request.exchange_rate)
        else:
            rate = derive_exchange_rate(request.from_amount, request.to_amount)

        return ExchangeData(
            from_account_id=request.from_account_id,
            to_account_id=request.to_account_id,
            from_amount=request.from_amount,
            to_amount=request.to_amount,
            from_currency=from_currency,
            to_currency=to_currency,
            exchange_rate=rate,
            date=request.date.isoformat(),
        )

    async def list_exchanges(self, user_id: int) -> list[dict[str, Any]]:
        """환전 목록 (최신 순)"""
        records = await self.lifecycle.store.list_exchanges(user_id)
        return [record.to_dict() for record in records]

    async def create_exchange(self, user_id: int, request: ExchangeRequest) -> dict[str, Any]:
        data = await self.to_exchange_data(user_id, request)
        record = await self.lifecycle.create_exchange(user_id, data)
        return record.to_dict()

    async def update_exchange(
        self,
        exchange_id: int,
        user_id: int,
        request: ExchangeRequest,
    ) -> dict[str, Any]:
        data = await self.to_exchange_data(user_id, request)
        record = await self.lifecycle.update_exchange(exchange_id, user_id, data)
        return record.to_dict()

    async def delete_exchange(self, exchange_id: int, user_id: int) -> None:
        await self.lifecycle.delete_exchange(exchange_id, user_id)

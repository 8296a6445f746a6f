"""
잔고 변경기

계좌 잔고의 유일한 변경 경로.
Decimal로 읽고-계산하고-기록 (부동소수 누적 오차 방지).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from core.errors import NotFoundError
from core.ledger.types import BalanceDelta, LedgerEffect

if TYPE_CHECKING:
    from core.ledger.store import LedgerStore

logger = logging.getLogger(__name__)


class BalanceMutator:
    """계좌 잔고 변경기

    음수 잔고 허용 (초과 지출 차단 없음).
    트랜잭션 경계는 호출자가 관리.

    Args:
        store: Ledger 저장소
    """

    def __init__(self, store: LedgerStore):
        self.store = store

    async def adjust_balance(self, account_id: int, user_id: int, delta: Decimal) -> Decimal:
        """잔고에 delta 가산

        Args:
            account_id: 계좌 ID
            user_id: 사용자 ID
            delta: 부호 있는 변화량

        Returns:
            변경 후 잔고

        Raises:
            NotFoundError: 계좌가 없거나 다른 사용자 소유
        """
        current = await self.store.get_balance(account_id, user_id)
        if current is None:
            raise NotFoundError("Account")

        if delta == 0:
            return current

        new_balance = current + delta
        if not await self.store.set_balance(account_id, user_id, new_balance):
            raise NotFoundError("Account")

        logger.debug(
            f"잔고 변경: account={account_id} {current} → {new_balance}",
            extra={"account_id": account_id, "delta": str(delta)},
        )
        return new_balance

    async def apply_deltas(self, deltas: list[BalanceDelta], user_id: int) -> None:
        """델타 목록 순차 적용"""
        for delta in deltas:
            await self.adjust_balance(delta.account_id, user_id, delta.amount)

    async def apply(self, effect: LedgerEffect, user_id: int) -> None:
        """레코드 효과 적용"""
        await self.apply_deltas(effect.deltas(), user_id)

    async def reverse(self, effect: LedgerEffect, user_id: int) -> None:
        """레코드 효과 역적용"""
        await self.apply_deltas([d.inverse() for d in effect.deltas()], user_id)

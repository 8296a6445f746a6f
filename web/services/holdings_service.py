"""
보유 자산 서비스

재무 목표 / 투자 / 자산 / 부채 CRUD.
계좌 잔고에는 영향 없음 (대시보드 집계 입력).
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.errors import NotFoundError
from core.ledger.store import LedgerStore
from core.storage.base import OwnedRecordStore
from core.storage.holdings_store import AssetStore, GoalStore, InvestmentStore, LiabilityStore

logger = logging.getLogger(__name__)


def category_to_type(values: dict[str, Any]) -> dict[str, Any]:
    """API의 category → assets/liabilities 테이블의 type 컬럼"""
    if "category" in values:
        values["type"] = values.pop("category")
    return values


class HoldingsService:
    """보유 자산 서비스

    Args:
        db: SQLite 어댑터
        base_currency: 목표 통화 기본값
    """

    def __init__(self, db: SQLiteAdapter, base_currency: str = Defaults.BASE_CURRENCY):
        self.db = db
        self.base_currency = base_currency
        self.goals = GoalStore(db)
        self.investments = InvestmentStore(db)
        self.assets = AssetStore(db)
        self.liabilities = LiabilityStore(db)
        self.ledger = LedgerStore(db)

    async def _create(self, store: OwnedRecordStore, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        async with self.db.transaction():
            record = await store.create(user_id, values)

        logger.info(
            f"{store.entity} 생성: id={record['id']}",
            extra={"user_id": user_id},
        )
        return record

    async def _update(
        self,
        store: OwnedRecordStore,
        record_id: int,
        user_id: int,
        values: dict[str, Any],
    ) -> dict[str, Any]:
        async with self.db.transaction():
            return await store.update(record_id, user_id, values)

    async def _delete(self, store: OwnedRecordStore, record_id: int, user_id: int) -> None:
        async with self.db.transaction():
            await store.delete(record_id, user_id)

    async def _check_account(self, account_id: int | None, user_id: int) -> None:
        if account_id is not None and not await self.ledger.is_owned("accounts", account_id, user_id):
            raise NotFoundError("Account")

    # -------------------------------------------------------------------------
    # 재무 목표
    # -------------------------------------------------------------------------

    async def list_goals(self, user_id: int) -> list[dict[str, Any]]:
        return await self.goals.list_by_user(user_id)

    async def create_goal(self, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        """목표 생성 (통화 기본 BRL, 상태 in_progress, 현재 금액 0)"""
        await self._check_account(values.get("account_id"), user_id)
        values.setdefault("currency", self.base_currency)
        return await self._create(self.goals, user_id, values)

    async def update_goal(self, goal_id: int, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        await self._check_account(values.get("account_id"), user_id)
        return await self._update(self.goals, goal_id, user_id, values)

    async def delete_goal(self, goal_id: int, user_id: int) -> None:
        await self._delete(self.goals, goal_id, user_id)

    # -------------------------------------------------------------------------
    # 투자
    # -------------------------------------------------------------------------

    async def list_investments(self, user_id: int) -> list[dict[str, Any]]:
        return await self.investments.list_by_user(user_id)

    async def create_investment(self, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        """투자 생성 (현재 가치 생략 시 원금)"""
        values.setdefault("current_value", values["amount"])
        return await self._create(self.investments, user_id, values)

    async def update_investment(
        self,
        investment_id: int,
        user_id: int,
        values: dict[str, Any],
    ) -> dict[str, Any]:
        return await self._update(self.investments, investment_id, user_id, values)

    async def delete_investment(self, investment_id: int, user_id: int) -> None:
        await self._delete(self.investments, investment_id, user_id)

    # -------------------------------------------------------------------------
    # 자산 / 부채
    # -------------------------------------------------------------------------

    async def list_assets(self, user_id: int) -> list[dict[str, Any]]:
        return await self.assets.list_by_user(user_id)

    async def create_asset(self, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        return await self._create(self.assets, user_id, category_to_type(values))

    async def update_asset(self, asset_id: int, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        return await self._update(self.assets, asset_id, user_id, category_to_type(values))

    async def delete_asset(self, asset_id: int, user_id: int) -> None:
        await self._delete(self.assets, asset_id, user_id)

    async def list_liabilities(self, user_id: int) -> list[dict[str, Any]]:
        return await self.liabilities.list_by_user(user_id)

    async def create_liability(self, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        return await self._create(self.liabilities, user_id, category_to_type(values))

    async def update_liability(
        self,
        liability_id: int,
        user_id: int,
        values: dict[str, Any],
    ) -> dict[str, Any]:
        return await self._update(self.liabilities, liability_id, user_id, category_to_type(values))

    async def delete_liability(self, liability_id: int, user_id: int) -> None:
        await self._delete(self.liabilities, liability_id, user_id)

"""
카테고리 / 수입원 서비스

삭제 시 참조 거래는 남고 참조만 null (잔고 변화 없음).
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.base import OwnedRecordStore
from core.storage.catalog_store import CategoryStore, IncomeSourceStore

logger = logging.getLogger(__name__)


class CatalogService:
    """사용자 소유 단순 레코드 CRUD

    Args:
        db: SQLite 어댑터
        store: 대상 저장소
    """

    def __init__(self, db: SQLiteAdapter, store: OwnedRecordStore):
        self.db = db
        self.store = store

    @classmethod
    def categories(cls, db: SQLiteAdapter) -> "CatalogService":
        return cls(db, CategoryStore(db))

    @classmethod
    def income_sources(cls, db: SQLiteAdapter) -> "CatalogService":
        return cls(db, IncomeSourceStore(db))

    async def list_by_user(self, user_id: int) -> list[dict[str, Any]]:
        return await self.store.list_by_user(user_id)

    async def create(self, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        async with self.db.transaction():
            return await self.store.create(user_id, values)

    async def update(self, record_id: int, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        async with self.db.transaction():
            return await self.store.update(record_id, user_id, values)

    async def delete(self, record_id: int, user_id: int) -> None:
        async with self.db.transaction():
            await self.store.delete(record_id, user_id)

        logger.info(
            f"{self.store.entity} 삭제: id={record_id}",
            extra={"user_id": user_id},
        )

"""
카테고리 / 수입원 저장소

삭제 시 참조 거래의 category_id / income_source_id는 FK(ON DELETE SET NULL)로 null 처리.
잔고에는 영향 없음.
"""

from typing import Any

from core.constants import DEFAULT_CATEGORIES, DEFAULT_INCOME_SOURCES
from core.storage.base import OwnedRecordStore


class CategoryStore(OwnedRecordStore):
    """카테고리 저장소

    카테고리 삭제 시 해당 카테고리 예산도 FK(CASCADE)로 삭제.
    """

    table = "categories"
    entity = "Category"
    columns = ("name", "type", "color")
    order_by = "type, name, id"

    async def seed_defaults(self, user_id: int) -> None:
        """기본 카테고리 생성 (회원가입 시)"""
        await self.db.executemany(
            "INSERT INTO categories (user_id, name, type, color) VALUES (?, ?, ?, ?)",
            [(user_id, name, kind, color) for name, kind, color in DEFAULT_CATEGORIES],
        )


class IncomeSourceStore(OwnedRecordStore):
    """수입원 저장소"""

    table = "income_sources"
    entity = "Income source"
    columns = ("name", "description")
    order_by = "name, id"

    async def seed_defaults(self, user_id: int) -> None:
        """기본 수입원 생성 (회원가입 시)"""
        rows: list[tuple[Any, ...]] = [
            (user_id, name, description) for name, description in DEFAULT_INCOME_SOURCES
        ]
        await self.db.executemany(
            "INSERT INTO income_sources (user_id, name, description) VALUES (?, ?, ?)",
            rows,
        )

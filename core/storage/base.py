"""
사용자 범위 레코드 저장소 기본 클래스

테이블별 저장소는 table / columns / money_columns만 정의.
모든 쿼리는 user_id로 범위 제한.
커밋하지 않음 (호출자가 transaction() 관리).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar

from core.errors import NotFoundError
from core.utils.money import quantize_money

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class OwnedRecordStore:
    """사용자 소유 레코드 CRUD

    Attributes:
        table: 테이블 이름
        entity: NotFound 메시지용 이름
        columns: 사용자 입력 컬럼 (id, user_id, created_at 제외)
        money_columns: Decimal 변환 대상 컬럼
        order_by: 목록 정렬
    """

    table: ClassVar[str]
    entity: ClassVar[str]
    columns: ClassVar[tuple[str, ...]]
    money_columns: ClassVar[frozenset[str]] = frozenset()
    order_by: ClassVar[str] = "created_at, id"

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    @property
    def _select_columns(self) -> str:
        return ", ".join(("id", "user_id", *self.columns, "created_at"))

    def _from_row(self, row: tuple[Any, ...]) -> dict[str, Any]:
        names = ("id", "user_id", *self.columns, "created_at")
        record = dict(zip(names, row))
        for name in self.money_columns:
            if record.get(name) is not None:
                record[name] = Decimal(record[name])
        return record

    def _to_db(self, name: str, value: Any) -> Any:
        if name in self.money_columns and value is not None:
            return str(quantize_money(value))
        if isinstance(value, bool):
            return int(value)
        return value

    def _filter(self, values: dict[str, Any]) -> dict[str, Any]:
        invalid = set(values) - set(self.columns)
        if invalid:
            raise ValueError(f"Unknown {self.table} columns: {sorted(invalid)}")
        return values

    async def list_by_user(self, user_id: int) -> list[dict[str, Any]]:
        """사용자 레코드 목록"""
        rows = await self.db.fetchall(
            f"""
            SELECT {self._select_columns}
            FROM {self.table}
            WHERE user_id = ?
            ORDER BY {self.order_by}
            """,
            (user_id,),
        )
        return [self._from_row(row) for row in rows]

    async def get(self, record_id: int, user_id: int) -> dict[str, Any] | None:
        """단건 조회 (타 사용자 소유는 None)"""
        row = await self.db.fetchone(
            f"""
            SELECT {self._select_columns}
            FROM {self.table}
            WHERE id = ? AND user_id = ?
            """,
            (record_id, user_id),
        )
        return self._from_row(row) if row else None

    async def create(self, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        """레코드 생성

        values에 없는 컬럼은 DB 기본값 사용.
        """
        values = self._filter(values)
        names = ["user_id", *values]
        params = [user_id, *(self._to_db(k, v) for k, v in values.items())]
        placeholders = ", ".join("?" for _ in names)

        cursor = await self.db.execute(
            f"INSERT INTO {self.table} ({', '.join(names)}) VALUES ({placeholders})",
            tuple(params),
        )

        record = await self.get(cursor.lastrowid, user_id)
        assert record is not None
        return record

    async def update(self, record_id: int, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
        """레코드 수정 (전달된 컬럼만)

        Raises:
            NotFoundError: 레코드가 없거나 다른 사용자 소유
        """
        values = self._filter(values)

        if values:
            assignments = ", ".join(f"{name} = ?" for name in values)
            cursor = await self.db.execute(
                f"UPDATE {self.table} SET {assignments} WHERE id = ? AND user_id = ?",
                (*(self._to_db(k, v) for k, v in values.items()), record_id, user_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(self.entity)

        record = await self.get(record_id, user_id)
        if record is None:
            raise NotFoundError(self.entity)
        return record

    async def delete(self, record_id: int, user_id: int) -> None:
        """레코드 삭제

        Raises:
            NotFoundError: 레코드가 없거나 다른 사용자 소유
        """
        cursor = await self.db.execute(
            f"DELETE FROM {self.table} WHERE id = ? AND user_id = ?",
            (record_id, user_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(self.entity)

        logger.debug(f"{self.table} 삭제: id={record_id}", extra={"user_id": user_id})

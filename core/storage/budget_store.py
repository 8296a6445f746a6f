"""
예산 저장소

(user_id, category_id, month, year, currency) 조합은 유일.
중복 생성은 UPSERT로 한도(limit_amount)만 갱신.
"""

import logging
from decimal import Decimal
from typing import Any

from core.errors import NotFoundError
from core.storage.base import OwnedRecordStore
from core.utils.money import quantize_money

logger = logging.getLogger(__name__)


class BudgetStore(OwnedRecordStore):
    """예산 저장소

    사용 예시:
    ```python
    store = BudgetStore(db)
    budget = await store.upsert(user_id, category_id=3, month=1, year=2026,
                                limit_amount=Decimal("500"), currency="BRL")
    ```
    """

    table = "budgets"
    entity = "Budget"
    columns = ("category_id", "month", "year", "limit_amount", "currency")
    money_columns = frozenset({"limit_amount"})
    order_by = "year DESC, month DESC, id"

    async def upsert(
        self,
        user_id: int,
        category_id: int,
        month: int,
        year: int,
        limit_amount: Decimal,
        currency: str,
    ) -> dict[str, Any]:
        """예산 생성 또는 한도 갱신

        Returns:
            저장된 예산
        """
        await self.db.execute(
            """
            INSERT INTO budgets (user_id, category_id, month, year, limit_amount, currency)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(user_id, category_id, month, year, currency) DO UPDATE SET
                limit_amount = excluded.limit_amount
            """,
            (user_id, category_id, month, year, str(quantize_money(limit_amount)), currency),
        )

        row = await self.db.fetchone(
            f"""
            SELECT {self._select_columns}
            FROM budgets
            WHERE user_id = ? AND category_id = ? AND month = ? AND year = ? AND currency = ?
            """,
            (user_id, category_id, month, year, currency),
        )
        if row is None:
            raise NotFoundError(self.entity)

        budget = self._from_row(row)
        logger.info(
            f"예산 저장: category={category_id} {year}-{month:02d} "
            f"{budget['limit_amount']} {currency}",
            extra={"user_id": user_id, "budget_id": budget["id"]},
        )
        return budget

    async def list_for_period(
        self,
        user_id: int,
        month: int | None = None,
        year: int | None = None,
    ) -> list[dict[str, Any]]:
        """예산 목록 (월/연도 필터 선택)"""
        sql = f"SELECT {self._select_columns} FROM budgets WHERE user_id = ?"
        params: list[Any] = [user_id]

        if month is not None:
            sql += " AND month = ?"
            params.append(month)
        if year is not None:
            sql += " AND year = ?"
            params.append(year)

        sql += f" ORDER BY {self.order_by}"

        rows = await self.db.fetchall(sql, tuple(params))
        return [self._from_row(row) for row in rows]

"""
예산 서비스

(카테고리, 월, 연도, 통화)별 지출 한도.
같은 키로 다시 생성하면 한도만 갱신 (UPSERT).
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.errors import NotFoundError, ValidationError
from core.storage.budget_store import BudgetStore
from core.storage.catalog_store import CategoryStore
from core.types import BudgetEntityType
from core.utils.timezone import today_utc
from web.models.requests import BudgetCreateRequest

logger = logging.getLogger(__name__)


def resolve_period(
    month: int | str | None,
    year: int | None,
    today: date,
) -> tuple[int, int]:
    """예산 기간 해석

    month는 정수 또는 "YYYY-MM" 문자열. 누락 시 기준일의 월/연도.

    Raises:
        ValidationError: 형식 오류, 월 1-12 또는 연도 범위 밖 (0 포함)

    Example:
        >>> resolve_period("2026-02", None, date(2025, 7, 1))
        (2, 2026)
    """
    if isinstance(month, str):
        text = month.strip()
        try:
            if "-" in text:
                year_text, month_text = text.split("-", 1)
                year, month = int(year_text), int(month_text)
            else:
                month = int(text) if text else None
        except ValueError as e:
            raise ValidationError(f"Mês inválido: {text}") from e

    if month is not None and not 1 <= month <= 12:
        raise ValidationError(f"Mês inválido: {month}")
    if year is not None and not Defaults.MIN_YEAR <= year <= Defaults.MAX_YEAR:
        raise ValidationError(f"Ano inválido: {year}")

    resolved_month = today.month if month is None else month
    resolved_year = today.year if year is None else year
    return resolved_month, resolved_year


def resolve_category_id(request: BudgetCreateRequest) -> int:
    """categoryId 또는 entityId/entityType(category)에서 카테고리 ID 결정

    Raises:
        ValidationError: 카테고리 미지정 또는 지원하지 않는 대상 유형
    """
    if request.category_id is not None:
        return request.category_id

    if request.entity_id is not None:
        if request.entity_type == BudgetEntityType.CATEGORY:
            return request.entity_id
        raise ValidationError("Orçamento suporta apenas categorias")

    raise ValidationError("categoryId é obrigatório")


class BudgetService:
    """예산 서비스

    Args:
        db: SQLite 어댑터
        base_currency: 통화 생략 시 기본값
    """

    def __init__(self, db: SQLiteAdapter, base_currency: str = Defaults.BASE_CURRENCY):
        self.db = db
        self.base_currency = base_currency
        self.store = BudgetStore(db)
        self.categories = CategoryStore(db)

    async def list_budgets(
        self,
        user_id: int,
        month: int | None = None,
        year: int | None = None,
    ) -> list[dict[str, Any]]:
        return await self.store.list_for_period(user_id, month=month, year=year)

    async def create_budget(
        self,
        user_id: int,
        request: BudgetCreateRequest,
        today: date | None = None,
    ) -> dict[str, Any]:
        """예산 생성 또는 한도 갱신

        Raises:
            ValidationError: 카테고리/한도 누락, 기간 형식 오류
            NotFoundError: 카테고리가 없거나 다른 사용자 소유
        """
        category_id = resolve_category_id(request)

        limit_amount: Decimal | None = request.limit_amount
        if limit_amount is None:
            limit_amount = request.amount
        if limit_amount is None:
            raise ValidationError("limitAmount é obrigatório")

        month, year = resolve_period(request.month, request.year, today or today_utc())

        async with self.db.transaction():
            if await self.categories.get(category_id, user_id) is None:
                raise NotFoundError("Category")

            return await self.store.upsert(
                user_id,
                category_id=category_id,
                month=month,
                year=year,
                limit_amount=limit_amount,
                currency=request.currency or self.base_currency,
            )

    async def update_budget(
        self,
        budget_id: int,
        user_id: int,
        limit_amount: Decimal,
    ) -> dict[str, Any]:
        """한도 수정"""
        async with self.db.transaction():
            return await self.store.update(budget_id, user_id, {"limit_amount": limit_amount})

    async def delete_budget(self, budget_id: int, user_id: int) -> None:
        async with self.db.transaction():
            await self.store.delete(budget_id, user_id)

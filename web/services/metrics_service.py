"""
집계 서비스

대시보드 지표와 리포트 (읽기 전용)
"""

from datetime import date
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.metrics.aggregator import MetricsAggregator
from core.types import TransactionKind
from core.utils.timezone import today_utc


class MetricsService:
    """집계 서비스

    Args:
        db: SQLite 어댑터
        base_currency: 빈 대시보드 기본 통화
    """

    def __init__(self, db: SQLiteAdapter, base_currency: str = Defaults.BASE_CURRENCY):
        self.db = db
        self.aggregator = MetricsAggregator(db, base_currency=base_currency)

    async def get_dashboard(self, user_id: int, today: date | None = None) -> dict[str, dict[str, Any]]:
        """통화별 대시보드

        Returns:
            {통화: 지표 dict}
        """
        metrics = await self.aggregator.dashboard(user_id, today=today)
        return {currency: m.to_dict() for currency, m in metrics.items()}

    async def get_category_breakdown(
        self,
        user_id: int,
        month: int | None = None,
        year: int | None = None,
        kind: TransactionKind = TransactionKind.EXPENSE,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """카테고리별 합계 (기본: 이번 달 지출)"""
        today = today or today_utc()
        return await self.aggregator.category_breakdown(
            user_id,
            month=today.month if month is None else month,
            year=today.year if year is None else year,
            kind=kind,
        )

    async def get_monthly_trend(
        self,
        user_id: int,
        months: int = Defaults.TREND_MONTHS,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """최근 N개월 수입/지출 추이"""
        return await self.aggregator.monthly_trend(user_id, months=months, today=today)

    async def get_investment_allocation(self, user_id: int) -> list[dict[str, Any]]:
        """투자 유형별 배분"""
        return await self.aggregator.investment_allocation(user_id)

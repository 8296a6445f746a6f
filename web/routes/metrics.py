"""
집계 라우트

- GET /api/metrics/dashboard: 통화별 대시보드 지표
- GET /api/reports/category-breakdown: 월간 카테고리별 합계
- GET /api/reports/monthly-trend: 최근 N개월 추이
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.constants import Defaults
from core.types import TransactionKind
from web.dependencies import get_app_settings, get_current_user_id, get_db
from web.models.responses import CategoryBreakdownItem, CurrencyMetricsResponse, MonthlyTrendItem
from web.services.metrics_service import MetricsService

router = APIRouter(prefix="/api", tags=["Metrics"])


@router.get("/metrics/dashboard", response_model=dict[str, CurrencyMetricsResponse])
async def get_dashboard(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, CurrencyMetricsResponse]:
    """통화별 대시보드

    통화 간 환산 없음. 데이터가 없으면 기본 통화 버킷 하나 (모두 0).
    """
    service = MetricsService(db, base_currency=settings.base_currency)
    metrics = await service.get_dashboard(user_id)
    return {
        currency: CurrencyMetricsResponse.model_validate(values)
        for currency, values in metrics.items()
    }


@router.get("/reports/category-breakdown", response_model=list[CategoryBreakdownItem])
async def get_category_breakdown(
    month: int | None = Query(default=None, ge=1, le=12, description="월 (기본: 이번 달)"),
    year: int | None = Query(
        default=None, ge=Defaults.MIN_YEAR, le=Defaults.MAX_YEAR, description="연도 (기본: 올해)"
    ),
    kind: TransactionKind = Query(default=TransactionKind.EXPENSE, alias="type", description="income / expense"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[CategoryBreakdownItem]:
    """카테고리별 합계 (통화별로 분리)"""
    rows = await MetricsService(db).get_category_breakdown(user_id, month=month, year=year, kind=kind)
    return [CategoryBreakdownItem.model_validate(r) for r in rows]


@router.get("/reports/monthly-trend", response_model=list[MonthlyTrendItem])
async def get_monthly_trend(
    months: int = Query(default=Defaults.TREND_MONTHS, ge=1, le=120, description="조회 개월 수"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[MonthlyTrendItem]:
    """최근 N개월 수입/지출 추이"""
    rows = await MetricsService(db).get_monthly_trend(user_id, months=months)
    return [MonthlyTrendItem.model_validate(r) for r in rows]

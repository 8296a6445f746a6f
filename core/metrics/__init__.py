"""
집계 모듈

통화별 대시보드 지표와 리포트 (읽기 전용)
"""

from core.metrics.aggregator import (
    CurrencyMetrics,
    DashboardInputs,
    MetricsAggregator,
    MonthlyFlow,
    compute_dashboard,
)

__all__ = [
    "MetricsAggregator",
    "CurrencyMetrics",
    "DashboardInputs",
    "MonthlyFlow",
    "compute_dashboard",
]

"""
유틸리티 패키지

날짜 계산, 금액 변환 등 공통 유틸리티
"""

from core.utils.money import (
    format_fixed,
    quantize_money,
    quantize_rate,
    safe_ratio,
    to_decimal,
)
from core.utils.timezone import (
    month_bounds,
    now_utc,
    shift_month,
    to_timestamp_ms,
    today_utc,
    trend_window_start,
)

__all__ = [
    "format_fixed",
    "quantize_money",
    "quantize_rate",
    "safe_ratio",
    "to_decimal",
    "month_bounds",
    "now_utc",
    "shift_month",
    "to_timestamp_ms",
    "today_utc",
    "trend_window_start",
]

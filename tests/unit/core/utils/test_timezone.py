"""
core/utils/timezone.py 테스트

UTC 변환 및 월 단위 날짜 계산
"""

from datetime import date, datetime, timezone

from core.utils.timezone import (
    month_bounds,
    now_utc,
    shift_month,
    to_timestamp_ms,
    trend_window_start,
)


class TestUtcHelpers:
    """UTC 헬퍼 테스트"""

    def test_now_utc_has_tzinfo(self) -> None:
        assert now_utc().tzinfo == timezone.utc

    def test_timestamp_ms(self) -> None:
        dt = datetime(2026, 1, 15, 12, 30, tzinfo=timezone.utc)
        assert to_timestamp_ms(dt) == 1768480200000

    def test_naive_datetime_is_utc(self) -> None:
        naive = datetime(2026, 1, 1)
        aware = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert to_timestamp_ms(naive) == to_timestamp_ms(aware)


class TestShiftMonth:
    """shift_month 테스트"""

    def test_previous_year(self) -> None:
        assert shift_month(2026, 1, -1) == (2025, 12)

    def test_next_year(self) -> None:
        assert shift_month(2025, 12, 1) == (2026, 1)

    def test_large_delta(self) -> None:
        assert shift_month(2026, 3, -14) == (2025, 1)


class TestMonthBounds:
    """month_bounds 테스트"""

    def test_regular_month(self) -> None:
        assert month_bounds(2026, 2) == ("2026-02-01", "2026-03-01")

    def test_december(self) -> None:
        assert month_bounds(2025, 12) == ("2025-12-01", "2026-01-01")


class TestTrendWindowStart:
    """trend_window_start 테스트"""

    def test_six_months_includes_current(self) -> None:
        assert trend_window_start(date(2026, 3, 15), 6) == date(2025, 10, 1)

    def test_single_month(self) -> None:
        assert trend_window_start(date(2026, 3, 15), 1) == date(2026, 3, 1)

    def test_non_positive_months_treated_as_one(self) -> None:
        assert trend_window_start(date(2026, 3, 15), 0) == date(2026, 3, 1)

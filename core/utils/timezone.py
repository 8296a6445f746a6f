"""
시간/날짜 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수
월 단위 집계(대시보드, 리포트)용 날짜 계산 포함
"""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """오늘 날짜 (UTC 기준)"""
    return now_utc().date()


def to_timestamp_ms(dt: datetime) -> int:
    """datetime을 밀리초 타임스탬프로 변환

    Args:
        dt: datetime 객체 (naive면 UTC로 간주)

    Returns:
        Unix 타임스탬프 (밀리초)
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """(year, month)를 delta개월 이동

    Example:
        >>> shift_month(2026, 1, -1)
        (2025, 12)
    """
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int) -> tuple[str, str]:
    """해당 월의 [시작일, 다음 달 시작일) ISO 문자열

    date 컬럼이 'YYYY-MM-DD' TEXT이므로 문자열 비교로 범위 필터링.
    """
    next_year, next_month = shift_month(year, month, 1)
    start = date(year, month, 1).isoformat()
    end = date(next_year, next_month, 1).isoformat()
    return start, end


def trend_window_start(today: date, months: int) -> date:
    """최근 N개월 추이 조회 시작일

    이번 달을 포함해 N개 달력월: (months - 1)개월 전 1일부터.

    Example:
        >>> trend_window_start(date(2026, 3, 15), 6)
        datetime.date(2025, 10, 1)
    """
    year, month = shift_month(today.year, today.month, -(max(months, 1) - 1))
    return date(year, month, 1)

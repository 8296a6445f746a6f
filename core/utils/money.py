"""
금액 유틸리티

금액은 Decimal로만 다룸 (float 금지).
DB에는 TEXT로 저장 ('123.45'), 조회 시 Decimal 복원.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from core.constants import Money


def to_decimal(value: Any) -> Decimal:
    """임의 값을 Decimal로 변환

    None/빈 문자열은 0으로 간주.

    Raises:
        ValueError: 숫자로 해석할 수 없는 경우
    """
    if value is None or value == "":
        return Money.ZERO
    if isinstance(value, Decimal):
        return value
    try:
        # float는 str 경유 (이진 오차 방지)
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal value: {value!r}") from e


def _quantize(value: Any, step: Decimal) -> Decimal:
    decimal_value = to_decimal(value)
    try:
        return decimal_value.quantize(step, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        # 자릿수가 Decimal 컨텍스트 정밀도(28) 초과
        raise ValueError(f"Decimal value out of range: {value!r}") from e


def quantize_money(value: Any) -> Decimal:
    """소수점 2자리 반올림 (DECIMAL(15, 2))

    Raises:
        ValueError: 숫자가 아니거나 자릿수 초과
    """
    return _quantize(value, Money.CENT)


def quantize_rate(value: Any) -> Decimal:
    """소수점 6자리 반올림 (환율 DECIMAL(10, 6))"""
    return _quantize(value, Money.RATE_STEP)


def format_fixed(value: Decimal, places: int) -> str:
    """고정 소수점 문자열 (소수점 자릿수 고정)

    Example:
        >>> format_fixed(Decimal("2.345"), 1)
        '2.3'
    """
    step = Decimal(1).scaleb(-places)
    return str(value.quantize(step, rounding=ROUND_HALF_UP))


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    """백분율 계산 (분모 0이면 0)"""
    if denominator == 0:
        return Money.ZERO
    return numerator / denominator * Money.HUNDRED

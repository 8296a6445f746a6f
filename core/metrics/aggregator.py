"""
다중 통화 집계 엔진

통화별 순자산, 저축률, 부채비율, 비상금 커버리지 계산.
통화 간 환산은 하지 않음 (통화별 버킷 유지).

구성:
- 순수 함수: 행 목록 → 통화별 지표 (DB 무관, 단위 테스트 대상)
- MetricsAggregator: 사용자 범위 행 조회 후 순수 함수 호출 (읽기 전용)

금액 합산은 Decimal로 Python에서 수행 (SQLite SUM은 float 변환).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable

from core.constants import Defaults, Money
from core.types import TransactionKind
from core.utils.money import format_fixed, quantize_money, safe_ratio, to_decimal
from core.utils.timezone import month_bounds, today_utc, trend_window_start

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


# =============================================================================
# 순수 계산
# =============================================================================


def sum_by_currency(rows: Iterable[tuple[str, Any]]) -> dict[str, Decimal]:
    """(currency, amount) 행을 통화별 합계로 집계"""
    totals: dict[str, Decimal] = defaultdict(lambda: Money.ZERO)
    for currency, amount in rows:
        totals[currency] += to_decimal(amount)
    return dict(totals)


@dataclass
class MonthlyFlow:
    """월간 수입/지출"""

    income: Decimal = Money.ZERO
    expenses: Decimal = Money.ZERO

    @property
    def balance(self) -> Decimal:
        return self.income - self.expenses

    @property
    def savings_rate(self) -> Decimal:
        """저축률 (%) - 수입 0이면 0"""
        return safe_ratio(self.balance, self.income)


def monthly_flows(rows: Iterable[tuple[str, str, Any]]) -> dict[str, MonthlyFlow]:
    """(currency, type, amount) 거래 행을 통화별 월간 흐름으로 집계

    currency는 거래 계좌의 통화.
    """
    flows: dict[str, MonthlyFlow] = {}
    for currency, kind, amount in rows:
        flow = flows.setdefault(currency, MonthlyFlow())
        if kind == TransactionKind.INCOME.value:
            flow.income += to_decimal(amount)
        elif kind == TransactionKind.EXPENSE.value:
            flow.expenses += to_decimal(amount)
    return flows


@dataclass
class CurrencyMetrics:
    """통화 버킷 하나의 대시보드 지표"""

    currency: str
    total_assets: Decimal = Money.ZERO
    total_liabilities: Decimal = Money.ZERO
    monthly: MonthlyFlow = field(default_factory=MonthlyFlow)
    emergency_fund_value: Decimal = Money.ZERO

    @property
    def net_worth(self) -> Decimal:
        return self.total_assets - self.total_liabilities

    @property
    def debt_ratio(self) -> Decimal:
        """부채비율 (%) - 총자산 0이면 0"""
        return safe_ratio(self.total_liabilities, self.total_assets)

    @property
    def emergency_fund_months(self) -> Decimal:
        """비상금으로 버틸 수 있는 개월 수 - 월 지출 0이면 0"""
        if self.monthly.expenses == 0:
            return Money.ZERO
        return self.emergency_fund_value / self.monthly.expenses

    def to_dict(self) -> dict[str, Any]:
        """응답 직렬화 (금액/비율은 문자열)"""
        return {
            "total_assets": str(quantize_money(self.total_assets)),
            "total_liabilities": str(quantize_money(self.total_liabilities)),
            "net_worth": str(quantize_money(self.net_worth)),
            "debt_ratio": format_fixed(self.debt_ratio, 2),
            "monthly": {
                "income": str(quantize_money(self.monthly.income)),
                "expenses": str(quantize_money(self.monthly.expenses)),
                "balance": str(quantize_money(self.monthly.balance)),
                "savings_rate": format_fixed(self.monthly.savings_rate, 2),
            },
            "emergency_fund_months": format_fixed(self.emergency_fund_months, 1),
            "emergency_fund_value": str(quantize_money(self.emergency_fund_value)),
        }


@dataclass
class DashboardInputs:
    """대시보드 계산 입력 (통화별 합계)"""

    accounts: dict[str, Decimal] = field(default_factory=dict)
    investments: dict[str, Decimal] = field(default_factory=dict)
    assets: dict[str, Decimal] = field(default_factory=dict)
    liabilities: dict[str, Decimal] = field(default_factory=dict)
    emergency_fund: dict[str, Decimal] = field(default_factory=dict)
    monthly: dict[str, MonthlyFlow] = field(default_factory=dict)


def compute_dashboard(
    inputs: DashboardInputs,
    base_currency: str = Defaults.BASE_CURRENCY,
) -> dict[str, CurrencyMetrics]:
    """통화별 대시보드 지표 계산

    버킷 대상: 계좌/투자/자산/부채에 등장한 모든 통화.
    데이터가 전혀 없으면 base_currency 버킷 하나 (모두 0).

    Args:
        inputs: 통화별 합계
        base_currency: 빈 상태 기본 통화

    Returns:
        {통화: CurrencyMetrics} (통화 코드 순)
    """
    currencies = (
        set(inputs.accounts)
        | set(inputs.investments)
        | set(inputs.assets)
        | set(inputs.liabilities)
    )
    if not currencies:
        currencies = {base_currency}

    result: dict[str, CurrencyMetrics] = {}
    for currency in sorted(currencies):
        total_assets = (
            inputs.accounts.get(currency, Money.ZERO)
            + inputs.investments.get(currency, Money.ZERO)
            + inputs.assets.get(currency, Money.ZERO)
        )
        result[currency] = CurrencyMetrics(
            currency=currency,
            total_assets=total_assets,
            total_liabilities=inputs.liabilities.get(currency, Money.ZERO),
            monthly=inputs.monthly.get(currency, MonthlyFlow()),
            emergency_fund_value=inputs.emergency_fund.get(currency, Money.ZERO),
        )
    return result


def group_totals(
    rows: Iterable[tuple[Any, ...]],
    key_names: tuple[str, ...],
) -> list[dict[str, Any]]:
    """행 마지막 값(금액)을 앞쪽 키 기준으로 합산

    Args:
        rows: (key1, key2, ..., amount) 행
        key_names: 키 이름

    Returns:
        [{key1, key2, ..., total}] (삽입 순서 유지)
    """
    totals: dict[tuple[Any, ...], Decimal] = {}
    for row in rows:
        key, amount = tuple(row[:-1]), row[-1]
        totals[key] = totals.get(key, Money.ZERO) + to_decimal(amount)

    return [
        {**dict(zip(key_names, key)), "total": quantize_money(total)}
        for key, total in totals.items()
    ]


def category_breakdown(rows: Iterable[tuple[Any, ...]]) -> list[dict[str, Any]]:
    """(name, color, currency, amount) 행 → 카테고리별 합계 (큰 순)

    미분류 거래는 name/color가 None.
    """
    grouped = group_totals(rows, ("name", "color", "currency"))
    return sorted(grouped, key=lambda item: item["total"], reverse=True)


def monthly_trend(rows: Iterable[tuple[str, str, str, Any]]) -> list[dict[str, Any]]:
    """(date, type, currency, amount) 행 → 연/월/유형/통화별 합계 (시간 순)"""
    keyed = (
        (int(tx_date[:4]), int(tx_date[5:7]), kind, currency, amount)
        for tx_date, kind, currency, amount in rows
    )
    grouped = group_totals(keyed, ("year", "month", "type", "currency"))
    return sorted(grouped, key=lambda item: (item["year"], item["month"], item["type"], item["currency"]))


def investment_allocation(rows: Iterable[tuple[str, str, Any]]) -> list[dict[str, Any]]:
    """(type, currency, current_value) 행 → 유형/통화별 합계 (큰 순)"""
    grouped = group_totals(rows, ("type", "currency"))
    return sorted(grouped, key=lambda item: item["total"], reverse=True)


# =============================================================================
# 조회
# =============================================================================


class MetricsAggregator:
    """대시보드/리포트 집계기

    쓰기 없음. 요청마다 재계산 (같은 데이터면 같은 결과).

    Args:
        db: SQLite 어댑터
        base_currency: 빈 상태 기본 통화
    """

    def __init__(self, db: SQLiteAdapter, base_currency: str = Defaults.BASE_CURRENCY):
        self.db = db
        self.base_currency = base_currency

    async def _currency_amounts(self, sql: str, user_id: int) -> dict[str, Decimal]:
        rows = await self.db.fetchall(sql, (user_id,))
        return sum_by_currency(rows)

    async def load_dashboard_inputs(self, user_id: int, today: date) -> DashboardInputs:
        """대시보드 입력 조회"""
        start, end = month_bounds(today.year, today.month)

        monthly_rows = await self.db.fetchall(
            """
            SELECT a.currency, t.type, t.amount
            FROM transactions t
            JOIN accounts a ON a.id = t.account_id
            WHERE t.user_id = ? AND t.date >= ? AND t.date < ?
            """,
            (user_id, start, end),
        )

        return DashboardInputs(
            accounts=await self._currency_amounts(
                "SELECT currency, balance FROM accounts WHERE user_id = ?", user_id
            ),
            investments=await self._currency_amounts(
                "SELECT currency, current_value FROM investments WHERE user_id = ?", user_id
            ),
            assets=await self._currency_amounts(
                "SELECT currency, value FROM assets WHERE user_id = ?", user_id
            ),
            liabilities=await self._currency_amounts(
                "SELECT currency, amount FROM liabilities WHERE user_id = ?", user_id
            ),
            emergency_fund=await self._currency_amounts(
                "SELECT currency, balance FROM accounts WHERE user_id = ? AND is_emergency_fund = 1",
                user_id,
            ),
            monthly=monthly_flows(monthly_rows),
        )

    async def dashboard(self, user_id: int, today: date | None = None) -> dict[str, CurrencyMetrics]:
        """통화별 대시보드

        Args:
            user_id: 사용자 ID
            today: 기준일 (None이면 오늘, UTC)
        """
        today = today or today_utc()
        inputs = await self.load_dashboard_inputs(user_id, today)
        metrics = compute_dashboard(inputs, self.base_currency)

        logger.debug(
            f"대시보드 계산: {len(metrics)}개 통화",
            extra={"user_id": user_id, "currencies": list(metrics)},
        )
        return metrics

    async def category_breakdown(
        self,
        user_id: int,
        month: int,
        year: int,
        kind: TransactionKind = TransactionKind.EXPENSE,
    ) -> list[dict[str, Any]]:
        """월간 카테고리별 합계"""
        start, end = month_bounds(year, month)
        rows = await self.db.fetchall(
            """
            SELECT c.name, c.color, a.currency, t.amount
            FROM transactions t
            LEFT JOIN categories c ON c.id = t.category_id
            JOIN accounts a ON a.id = t.account_id
            WHERE t.user_id = ? AND t.type = ? AND t.date >= ? AND t.date < ?
            """,
            (user_id, kind.value, start, end),
        )
        return category_breakdown(rows)

    async def monthly_trend(
        self,
        user_id: int,
        months: int = Defaults.TREND_MONTHS,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """최근 N개월 추이"""
        today = today or today_utc()
        start = trend_window_start(today, months)
        rows = await self.db.fetchall(
            """
            SELECT t.date, t.type, a.currency, t.amount
            FROM transactions t
            JOIN accounts a ON a.id = t.account_id
            WHERE t.user_id = ? AND t.date >= ?
            """,
            (user_id, start.isoformat()),
        )
        return monthly_trend(rows)

    async def investment_allocation(self, user_id: int) -> list[dict[str, Any]]:
        """투자 유형별 배분"""
        rows = await self.db.fetchall(
            "SELECT type, currency, current_value FROM investments WHERE user_id = ?",
            (user_id,),
        )
        return investment_allocation(rows)

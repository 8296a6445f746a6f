"""
core/metrics/aggregator.py 순수 함수 테스트

통화별 버킷 집계 및 0 나누기 방지
"""

from decimal import Decimal

from core.metrics.aggregator import (
    CurrencyMetrics,
    DashboardInputs,
    MonthlyFlow,
    category_breakdown,
    compute_dashboard,
    investment_allocation,
    monthly_flows,
    monthly_trend,
    sum_by_currency,
)


class TestSumByCurrency:
    """sum_by_currency 테스트"""

    def test_groups_text_amounts(self) -> None:
        rows = [("BRL", "10.10"), ("USD", "5.00"), ("BRL", "0.20")]
        assert sum_by_currency(rows) == {"BRL": Decimal("10.30"), "USD": Decimal("5.00")}

    def test_empty(self) -> None:
        assert sum_by_currency([]) == {}


class TestMonthlyFlow:
    """MonthlyFlow 테스트"""

    def test_savings_rate(self) -> None:
        flow = MonthlyFlow(income=Decimal("5000"), expenses=Decimal("3500"))
        assert flow.balance == Decimal("1500")
        assert flow.savings_rate == Decimal("30")

    def test_zero_income(self) -> None:
        flow = MonthlyFlow(expenses=Decimal("100"))
        assert flow.balance == Decimal("-100")
        assert flow.savings_rate == Decimal("0")

    def test_monthly_flows_per_currency(self) -> None:
        rows = [
            ("BRL", "income", "5000.00"),
            ("BRL", "expense", "1200.00"),
            ("USD", "expense", "30.00"),
        ]

        flows = monthly_flows(rows)

        assert flows["BRL"].income == Decimal("5000.00")
        assert flows["BRL"].expenses == Decimal("1200.00")
        assert flows["USD"].income == Decimal("0")
        assert flows["USD"].expenses == Decimal("30.00")


class TestCurrencyMetrics:
    """CurrencyMetrics 테스트"""

    def test_ratios(self) -> None:
        metrics = CurrencyMetrics(
            currency="BRL",
            total_assets=Decimal("20000"),
            total_liabilities=Decimal("5000"),
            monthly=MonthlyFlow(income=Decimal("6000"), expenses=Decimal("4000")),
            emergency_fund_value=Decimal("10000"),
        )

        assert metrics.net_worth == Decimal("15000")
        assert metrics.debt_ratio == Decimal("25")
        assert metrics.emergency_fund_months == Decimal("2.5")

    def test_division_guards(self) -> None:
        """총자산 0, 월 지출 0이면 비율 0"""
        metrics = CurrencyMetrics(
            currency="BRL",
            total_liabilities=Decimal("100"),
            emergency_fund_value=Decimal("500"),
        )

        assert metrics.debt_ratio == Decimal("0")
        assert metrics.emergency_fund_months == Decimal("0")

    def test_to_dict_formatting(self) -> None:
        metrics = CurrencyMetrics(
            currency="BRL",
            total_assets=Decimal("3000"),
            total_liabilities=Decimal("1000"),
            monthly=MonthlyFlow(income=Decimal("3000"), expenses=Decimal("900")),
            emergency_fund_value=Decimal("1000"),
        )

        result = metrics.to_dict()

        assert result["total_assets"] == "3000.00"
        assert result["net_worth"] == "2000.00"
        assert result["debt_ratio"] == "33.33"
        assert result["monthly"]["savings_rate"] == "70.00"
        assert result["monthly"]["balance"] == "2100.00"
        assert result["emergency_fund_months"] == "1.1"
        assert result["emergency_fund_value"] == "1000.00"


class TestComputeDashboard:
    """compute_dashboard 테스트"""

    def test_empty_returns_base_bucket(self) -> None:
        result = compute_dashboard(DashboardInputs(), base_currency="BRL")

        assert list(result) == ["BRL"]
        assert result["BRL"].total_assets == Decimal("0")
        assert result["BRL"].to_dict()["debt_ratio"] == "0.00"

    def test_currencies_not_mixed(self) -> None:
        """통화 간 합산 없음"""
        inputs = DashboardInputs(
            accounts={"BRL": Decimal("1000"), "USD": Decimal("200")},
            investments={"USD": Decimal("300")},
            assets={"EUR": Decimal("50")},
            liabilities={"BRL": Decimal("400")},
            emergency_fund={"BRL": Decimal("600")},
            monthly={"BRL": MonthlyFlow(income=Decimal("100"), expenses=Decimal("300"))},
        )

        result = compute_dashboard(inputs)

        assert list(result) == ["BRL", "EUR", "USD"]
        assert result["BRL"].total_assets == Decimal("1000")
        assert result["BRL"].net_worth == Decimal("600")
        assert result["BRL"].emergency_fund_months == Decimal("2")
        assert result["USD"].total_assets == Decimal("500")
        assert result["USD"].total_liabilities == Decimal("0")
        assert result["EUR"].monthly.income == Decimal("0")

    def test_monthly_only_currency_has_no_bucket(self) -> None:
        """거래만 있는 통화는 계좌 통화와 같으므로 별도 버킷 없음"""
        inputs = DashboardInputs(
            accounts={"BRL": Decimal("10")},
            monthly={"BRL": MonthlyFlow(income=Decimal("10"))},
        )
        assert list(compute_dashboard(inputs)) == ["BRL"]


class TestReports:
    """리포트 집계 테스트"""

    def test_category_breakdown_sorted_desc(self) -> None:
        rows = [
            ("Alimentação", "#ef4444", "BRL", "100.00"),
            ("Transporte", "#f59e0b", "BRL", "250.00"),
            ("Alimentação", "#ef4444", "BRL", "200.00"),
            ("Alimentação", "#ef4444", "USD", "10.00"),
            (None, None, "BRL", "5.00"),
        ]

        result = category_breakdown(rows)

        assert [(r["name"], r["currency"], r["total"]) for r in result] == [
            ("Alimentação", "BRL", Decimal("300.00")),
            ("Transporte", "BRL", Decimal("250.00")),
            ("Alimentação", "USD", Decimal("10.00")),
            (None, "BRL", Decimal("5.00")),
        ]

    def test_monthly_trend_chronological(self) -> None:
        rows = [
            ("2026-02-03", "expense", "BRL", "50.00"),
            ("2026-01-20", "income", "BRL", "1000.00"),
            ("2026-02-10", "expense", "BRL", "25.00"),
            ("2025-12-31", "expense", "USD", "7.00"),
        ]

        result = monthly_trend(rows)

        assert [(r["year"], r["month"], r["type"], r["total"]) for r in result] == [
            (2025, 12, "expense", Decimal("7.00")),
            (2026, 1, "income", Decimal("1000.00")),
            (2026, 2, "expense", Decimal("75.00")),
        ]

    def test_investment_allocation(self) -> None:
        rows = [
            ("stocks", "BRL", "1000.00"),
            ("crypto", "USD", "300.00"),
            ("stocks", "BRL", "500.00"),
        ]

        result = investment_allocation(rows)

        assert result[0] == {"type": "stocks", "currency": "BRL", "total": Decimal("1500.00")}
        assert result[1]["type"] == "crypto"

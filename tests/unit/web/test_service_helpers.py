"""
web/services 순수 헬퍼 테스트
"""

from datetime import date
from decimal import Decimal

import pytest

from core.errors import ValidationError
from core.types import TransactionKind
from web.models.requests import BudgetCreateRequest, TransactionRequest
from web.services.budget_service import resolve_category_id, resolve_period
from web.services.exchange_service import derive_exchange_rate
from web.services.holdings_service import category_to_type
from web.services.transaction_service import to_transaction_data

TODAY = date(2026, 5, 20)


class TestResolvePeriod:
    """예산 기간 해석 테스트"""

    def test_defaults_to_today(self) -> None:
        assert resolve_period(None, None, TODAY) == (5, 2026)

    def test_integer_month(self) -> None:
        assert resolve_period(11, 2025, TODAY) == (11, 2025)

    def test_year_month_string(self) -> None:
        assert resolve_period("2027-02", None, TODAY) == (2, 2027)

    def test_numeric_string(self) -> None:
        assert resolve_period("3", None, TODAY) == (3, 2026)

    @pytest.mark.parametrize("month", [0, -1, 13, "2026-13", "2026-00", "abc"])
    def test_invalid(self, month) -> None:
        with pytest.raises(ValidationError, match="Mês inválido"):
            resolve_period(month, None, TODAY)

    @pytest.mark.parametrize("year", [0, -5, 10000])
    def test_invalid_year(self, year) -> None:
        with pytest.raises(ValidationError, match="Ano inválido"):
            resolve_period(3, year, TODAY)


class TestResolveCategoryId:
    """예산 카테고리 결정 테스트"""

    def test_category_id(self) -> None:
        request = BudgetCreateRequest.model_validate({"categoryId": 5, "limitAmount": "100"})
        assert resolve_category_id(request) == 5

    def test_entity_category(self) -> None:
        request = BudgetCreateRequest.model_validate({"entityId": 9, "entityType": "category", "amount": "1"})
        assert resolve_category_id(request) == 9

    def test_entity_source_rejected(self) -> None:
        request = BudgetCreateRequest.model_validate({"entityId": 9, "entityType": "source", "amount": "1"})
        with pytest.raises(ValidationError, match="apenas categorias"):
            resolve_category_id(request)

    def test_missing(self) -> None:
        request = BudgetCreateRequest.model_validate({"limitAmount": "100"})
        with pytest.raises(ValidationError, match="categoryId"):
            resolve_category_id(request)


class TestHelpers:
    """기타 변환 헬퍼 테스트"""

    def test_derive_exchange_rate(self) -> None:
        assert derive_exchange_rate(Decimal("100"), Decimal("540")) == Decimal("5.400000")
        assert derive_exchange_rate(Decimal("3"), Decimal("1")) == Decimal("0.333333")

    def test_derive_exchange_rate_zero(self) -> None:
        assert derive_exchange_rate(Decimal("0"), Decimal("10")) == Decimal("0")

    def test_category_to_type(self) -> None:
        assert category_to_type({"name": "Casa", "category": "real_estate"}) == {
            "name": "Casa",
            "type": "real_estate",
        }
        assert category_to_type({"name": "Casa"}) == {"name": "Casa"}

    def test_to_transaction_data(self) -> None:
        request = TransactionRequest.model_validate(
            {"accountId": 2, "type": "income", "amount": "10", "date": "2026-03-01"}
        )

        data = to_transaction_data(request)

        assert data.type == TransactionKind.INCOME
        assert data.date == "2026-03-01"
        assert data.deltas()[0].amount == Decimal("10")

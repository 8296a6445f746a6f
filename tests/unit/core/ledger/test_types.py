"""
core/ledger/types.py 테스트

거래/환전 레코드의 잔고 델타 계산
"""

from decimal import Decimal

import pytest

from core.ledger.types import (
    BalanceDelta,
    ExchangeData,
    ExchangeRecord,
    TransactionData,
    TransactionRecord,
    signed_amount,
)
from core.types import TransactionKind


def _exchange(**overrides) -> ExchangeData:
    values = dict(
        from_account_id=1,
        to_account_id=2,
        from_amount=Decimal("100.00"),
        to_amount=Decimal("540.00"),
        from_currency="USD",
        to_currency="BRL",
        exchange_rate=Decimal("5.400000"),
        date="2026-01-10",
    )
    values.update(overrides)
    return ExchangeData(**values)


class TestSignedAmount:
    """signed_amount 테스트"""

    def test_income_positive(self) -> None:
        assert signed_amount(TransactionKind.INCOME, Decimal("10")) == Decimal("10")

    def test_expense_negative(self) -> None:
        assert signed_amount(TransactionKind.EXPENSE, Decimal("10")) == Decimal("-10")

    def test_string_kind(self) -> None:
        assert signed_amount("expense", Decimal("3.5")) == Decimal("-3.5")

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            signed_amount("transfer", Decimal("1"))


class TestBalanceDelta:
    """BalanceDelta 테스트"""

    def test_inverse(self) -> None:
        delta = BalanceDelta(account_id=3, amount=Decimal("12.50"))
        assert delta.inverse() == BalanceDelta(account_id=3, amount=Decimal("-12.50"))

    def test_frozen(self) -> None:
        delta = BalanceDelta(account_id=3, amount=Decimal("1"))
        with pytest.raises(AttributeError):
            delta.amount = Decimal("2")  # type: ignore


class TestTransactionDeltas:
    """거래 델타 테스트"""

    def test_expense_delta(self) -> None:
        data = TransactionData(
            account_id=7,
            type=TransactionKind.EXPENSE,
            amount=Decimal("42.00"),
            date="2026-01-05",
        )
        assert data.deltas() == [BalanceDelta(7, Decimal("-42.00"))]

    def test_record_to_dict(self) -> None:
        data = TransactionData(
            account_id=7,
            type=TransactionKind.INCOME,
            amount=Decimal("1000.00"),
            date="2026-01-05",
            category_id=2,
        )
        record = TransactionRecord(id=11, user_id=1, data=data, created_at="2026-01-05 10:00:00")

        result = record.to_dict()

        assert result["id"] == 11
        assert result["type"] == "income"
        assert result["amount"] == Decimal("1000.00")
        assert result["category_id"] == 2
        assert result["income_source_id"] is None
        assert record.deltas() == data.deltas()


class TestExchangeDeltas:
    """환전 델타 테스트"""

    def test_two_sided(self) -> None:
        assert _exchange().deltas() == [
            BalanceDelta(1, Decimal("-100.00")),
            BalanceDelta(2, Decimal("540.00")),
        ]

    def test_same_account_nets_out(self) -> None:
        """같은 계좌 내 이체는 차액만 반영"""
        data = _exchange(to_account_id=1, to_amount=Decimal("100.00"))
        assert sum(d.amount for d in data.deltas()) == Decimal("0")

    def test_record_to_dict(self) -> None:
        record = ExchangeRecord(id=5, user_id=1, data=_exchange())

        result = record.to_dict()

        assert result["from_currency"] == "USD"
        assert result["to_currency"] == "BRL"
        assert result["exchange_rate"] == Decimal("5.400000")

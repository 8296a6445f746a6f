"""
Ledger 타입 정의

거래/환전 레코드와 잔고 델타(BalanceDelta) 정의.
금액은 항상 양수로 저장하고, 부호는 적용 시점에 유형에서 결정.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol

from core.types import TransactionKind


class LedgerStep(str, Enum):
    """원자 단위 내부 단계

    전이 규칙:
    - FETCH → REVERSE: 기존 레코드 조회 성공 (update/delete)
    - FETCH → MUTATE: 기존 레코드 없음 (create)
    - REVERSE → MUTATE: 기존 효과 역적용 완료
    - MUTATE → REAPPLY: 새 레코드 기록 완료 (create/update)
    - MUTATE → DONE: 레코드 삭제 완료 (delete)
    - REAPPLY → DONE: 새 효과 적용 완료
    어느 단계에서든 예외 → 전체 롤백
    """
    FETCH = "FETCH"
    REVERSE = "REVERSE"
    MUTATE = "MUTATE"
    REAPPLY = "REAPPLY"
    DONE = "DONE"


@dataclass(frozen=True)
class BalanceDelta:
    """계좌 하나에 대한 부호 있는 잔고 변화량"""

    account_id: int
    amount: Decimal

    def inverse(self) -> "BalanceDelta":
        """역방향 델타"""
        return BalanceDelta(account_id=self.account_id, amount=-self.amount)


class LedgerEffect(Protocol):
    """잔고 효과를 가진 레코드 (거래, 환전)"""

    def deltas(self) -> list[BalanceDelta]:
        ...


def signed_amount(kind: TransactionKind | str, amount: Decimal) -> Decimal:
    """거래 유형에 따른 부호 적용

    income → +amount, expense → -amount
    """
    if TransactionKind(kind) == TransactionKind.INCOME:
        return amount
    return -amount


@dataclass(frozen=True)
class TransactionData:
    """거래 입력값 (생성/수정 공통)"""

    account_id: int
    type: TransactionKind
    amount: Decimal
    date: str
    description: str | None = None
    category_id: int | None = None
    income_source_id: int | None = None

    def deltas(self) -> list[BalanceDelta]:
        """계좌 1개에 대한 델타"""
        return [BalanceDelta(self.account_id, signed_amount(self.type, self.amount))]


@dataclass(frozen=True)
class TransactionRecord:
    """저장된 거래"""

    id: int
    user_id: int
    data: TransactionData
    created_at: str | None = None

    def deltas(self) -> list[BalanceDelta]:
        return self.data.deltas()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "account_id": self.data.account_id,
            "category_id": self.data.category_id,
            "income_source_id": self.data.income_source_id,
            "type": self.data.type.value,
            "amount": self.data.amount,
            "description": self.data.description,
            "date": self.data.date,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class ExchangeData:
    """환전/이체 입력값

    exchange_rate는 참고용 (금액과의 정합성 검증 안 함).
    """

    from_account_id: int
    to_account_id: int
    from_amount: Decimal
    to_amount: Decimal
    from_currency: str
    to_currency: str
    exchange_rate: Decimal
    date: str

    def deltas(self) -> list[BalanceDelta]:
        """출금 계좌 -from_amount, 입금 계좌 +to_amount"""
        return [
            BalanceDelta(self.from_account_id, -self.from_amount),
            BalanceDelta(self.to_account_id, self.to_amount),
        ]


@dataclass(frozen=True)
class ExchangeRecord:
    """저장된 환전"""

    id: int
    user_id: int
    data: ExchangeData
    created_at: str | None = None

    def deltas(self) -> list[BalanceDelta]:
        return self.data.deltas()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "from_account_id": self.data.from_account_id,
            "to_account_id": self.data.to_account_id,
            "from_amount": self.data.from_amount,
            "to_amount": self.data.to_amount,
            "from_currency": self.data.from_currency,
            "to_currency": self.data.to_currency,
            "exchange_rate": self.data.exchange_rate,
            "date": self.data.date,
            "created_at": self.created_at,
        }

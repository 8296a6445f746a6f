"""
Ledger 정합성 엔진

계좌 잔고가 거래/환전 이력과 항상 일치하도록 유지.

사용 예시:
```python
from core.ledger import LedgerLifecycle, TransactionData

lifecycle = LedgerLifecycle(db)

# 거래 생성 (잔고 자동 반영)
record = await lifecycle.create_transaction(user_id, TransactionData(
    account_id=1,
    type=TransactionKind.EXPENSE,
    amount=Decimal("100.00"),
    date="2026-01-15",
))

# 수정 (기존 효과 역적용 후 새 효과 적용)
await lifecycle.update_transaction(record.id, user_id, new_data)

# 삭제 (효과 역적용)
await lifecycle.delete_transaction(record.id, user_id)
```
"""

from core.ledger.lifecycle import LedgerLifecycle
from core.ledger.mutator import BalanceMutator
from core.ledger.store import LedgerStore
from core.ledger.types import (
    BalanceDelta,
    ExchangeData,
    ExchangeRecord,
    LedgerEffect,
    LedgerStep,
    TransactionData,
    TransactionRecord,
    signed_amount,
)

__all__ = [
    # 핵심 클래스
    "LedgerLifecycle",
    "BalanceMutator",
    "LedgerStore",
    # 레코드
    "TransactionData",
    "TransactionRecord",
    "ExchangeData",
    "ExchangeRecord",
    "BalanceDelta",
    "LedgerEffect",
    "LedgerStep",
    "signed_amount",
]

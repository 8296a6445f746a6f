"""
보유 자산 / 부채 / 목표 저장소

재무 목표, 투자, 자산, 부채는 계좌 잔고를 변경하지 않음.
집계(Aggregation) 입력으로만 사용.
"""

from core.storage.base import OwnedRecordStore


class GoalStore(OwnedRecordStore):
    """재무 목표 저장소"""

    table = "financial_goals"
    entity = "Goal"
    columns = (
        "account_id",
        "name",
        "target_amount",
        "current_amount",
        "currency",
        "deadline",
        "category",
        "status",
    )
    money_columns = frozenset({"target_amount", "current_amount"})


class InvestmentStore(OwnedRecordStore):
    """투자 저장소"""

    table = "investments"
    entity = "Investment"
    columns = (
        "name",
        "type",
        "amount",
        "current_value",
        "currency",
        "purchase_date",
        "broker",
        "notes",
    )
    money_columns = frozenset({"amount", "current_value"})
    order_by = "purchase_date DESC, id"


class AssetStore(OwnedRecordStore):
    """자산 저장소

    type 컬럼은 API에서 category로 노출.
    """

    table = "assets"
    entity = "Asset"
    columns = ("name", "type", "value", "currency", "purchase_date", "description")
    money_columns = frozenset({"value"})


class LiabilityStore(OwnedRecordStore):
    """부채 저장소

    type 컬럼은 API에서 category로 노출.
    """

    table = "liabilities"
    entity = "Liability"
    columns = (
        "name",
        "type",
        "amount",
        "interest_rate",
        "due_date",
        "monthly_payment",
        "currency",
        "description",
    )
    money_columns = frozenset({"amount", "interest_rate", "monthly_payment"})

"""
스토리지 모듈

사용자, 카테고리/수입원, 예산, 목표/투자/자산/부채 저장소 제공.
계좌/거래/환전은 core.ledger 참조.
"""

from core.storage.base import OwnedRecordStore
from core.storage.budget_store import BudgetStore
from core.storage.catalog_store import CategoryStore, IncomeSourceStore
from core.storage.holdings_store import AssetStore, GoalStore, InvestmentStore, LiabilityStore
from core.storage.user_store import UserStore

__all__ = [
    "OwnedRecordStore",
    "UserStore",
    "CategoryStore",
    "IncomeSourceStore",
    "BudgetStore",
    "GoalStore",
    "InvestmentStore",
    "AssetStore",
    "LiabilityStore",
]

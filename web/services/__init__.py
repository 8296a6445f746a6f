"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.account_service import AccountService
from web.services.auth_service import AuthService
from web.services.budget_service import BudgetService
from web.services.catalog_service import CatalogService
from web.services.exchange_service import ExchangeService
from web.services.holdings_service import HoldingsService
from web.services.metrics_service import MetricsService
from web.services.transaction_service import TransactionService

__all__ = [
    "AccountService",
    "AuthService",
    "BudgetService",
    "CatalogService",
    "ExchangeService",
    "HoldingsService",
    "MetricsService",
    "TransactionService",
]

"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AccountCreateRequest,
    AccountUpdateRequest,
    ExchangeRequest,
    LoginRequest,
    RegisterRequest,
    TransactionRequest,
)
from web.models.responses import (
    AccountResponse,
    AuthResponse,
    CurrencyMetricsResponse,
    ExchangeResponse,
    HealthResponse,
    MessageResponse,
    TransactionResponse,
)

__all__ = [
    # Requests
    "RegisterRequest",
    "LoginRequest",
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "TransactionRequest",
    "ExchangeRequest",
    # Responses
    "HealthResponse",
    "MessageResponse",
    "AuthResponse",
    "AccountResponse",
    "TransactionResponse",
    "ExchangeResponse",
    "CurrencyMetricsResponse",
]

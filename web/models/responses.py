"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
JSON 필드는 camelCase, 금액(Decimal)은 문자열로 직렬화 ("123.45").
"""

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiResponse(BaseModel):
    """camelCase 응답 기본 모델

    서비스의 snake_case dict를 그대로 검증 (populate_by_name).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(ApiResponse):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    message: str = Field(..., description="상태 메시지")
    timestamp: datetime = Field(..., description="응답 시간 (UTC)")


class MessageResponse(ApiResponse):
    """단순 메시지 응답 (삭제 등)"""

    message: str


# =============================================================================
# Auth
# =============================================================================


class UserResponse(ApiResponse):
    """사용자 정보"""

    id: int
    name: str
    email: str


class AuthResponse(ApiResponse):
    """회원가입/로그인 응답"""

    token: str = Field(..., description="액세스 토큰 (Bearer)")
    user: UserResponse


# =============================================================================
# 계좌 / 카테고리 / 수입원
# =============================================================================


class AccountResponse(ApiResponse):
    """계좌 응답"""

    id: int
    name: str
    type: str
    currency: str
    balance: Decimal = Field(..., description="잔고 (음수 가능)")
    is_emergency_fund: bool
    created_at: str | None = None


class CategoryResponse(ApiResponse):
    """카테고리 응답"""

    id: int
    name: str
    type: str
    color: str | None = None


class IncomeSourceResponse(ApiResponse):
    """수입원 응답"""

    id: int
    name: str
    description: str | None = None


# =============================================================================
# 거래 / 환전
# =============================================================================


class TransactionResponse(ApiResponse):
    """거래 응답"""

    id: int
    account_id: int
    category_id: int | None = None
    income_source_id: int | None = None
    type: str
    amount: Decimal
    description: str | None = None
    date: str
    created_at: str | None = None


class ExchangeResponse(ApiResponse):
    """환전 응답"""

    id: int
    from_account_id: int
    to_account_id: int
    from_amount: Decimal
    to_amount: Decimal
    from_currency: str
    to_currency: str
    exchange_rate: Decimal
    date: str
    created_at: str | None = None


# =============================================================================
# 예산 / 목표 / 보유 자산
# =============================================================================


class BudgetResponse(ApiResponse):
    """예산 응답"""

    id: int
    category_id: int
    month: int
    year: int
    limit_amount: Decimal
    currency: str


class GoalResponse(ApiResponse):
    """재무 목표 응답"""

    id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    currency: str
    deadline: str | None = None
    category: str | None = None
    status: str
    account_id: int | None = None


class InvestmentResponse(ApiResponse):
    """투자 응답"""

    id: int
    name: str
    type: str
    amount: Decimal
    current_value: Decimal
    currency: str
    purchase_date: str
    broker: str | None = None
    notes: str | None = None


class AssetResponse(ApiResponse):
    """자산 응답 (type 컬럼 → category)"""

    id: int
    name: str
    category: str | None = Field(
        default=None,
        validation_alias=AliasChoices("category", "type"),
    )
    value: Decimal
    currency: str
    purchase_date: str | None = None
    description: str | None = None


class LiabilityResponse(ApiResponse):
    """부채 응답 (type 컬럼 → category)"""

    id: int
    name: str
    category: str | None = Field(
        default=None,
        validation_alias=AliasChoices("category", "type"),
    )
    amount: Decimal
    interest_rate: Decimal | None = None
    due_date: str | None = None
    monthly_payment: Decimal | None = None
    currency: str
    description: str | None = None


# =============================================================================
# 집계
# =============================================================================


class MonthlyMetricsResponse(ApiResponse):
    """월간 수입/지출"""

    income: str
    expenses: str
    balance: str
    savings_rate: str = Field(..., description="저축률 (%, 소수 2자리)")


class CurrencyMetricsResponse(ApiResponse):
    """통화 버킷 지표"""

    total_assets: str
    total_liabilities: str
    net_worth: str
    debt_ratio: str = Field(..., description="부채비율 (%, 소수 2자리)")
    monthly: MonthlyMetricsResponse
    emergency_fund_months: str = Field(..., description="비상금 커버 개월 수 (소수 1자리)")
    emergency_fund_value: str


class CategoryBreakdownItem(ApiResponse):
    """카테고리별 합계"""

    name: str | None = None
    color: str | None = None
    currency: str
    total: Decimal


class MonthlyTrendItem(ApiResponse):
    """월별 추이"""

    year: int
    month: int
    type: str
    currency: str
    total: Decimal


class AllocationItem(ApiResponse):
    """투자 배분"""

    type: str
    currency: str
    total: Decimal

"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
JSON 필드는 camelCase (예: accountId), 파이썬 속성은 snake_case.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from core.types import (
    AccountType,
    BudgetEntityType,
    CategoryType,
    GoalStatus,
    TransactionKind,
)

# ISO 4217 통화 코드 (대문자로 정규화)
Currency = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_upper=True, pattern=r"^[A-Za-z]{3}$"),
]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# 금액 DECIMAL(15, 2), 환율/이율 DECIMAL(10, 6)
Amount = Annotated[Decimal, Field(max_digits=15, decimal_places=2)]
Rate = Annotated[Decimal, Field(max_digits=10, decimal_places=6)]


class ApiRequest(BaseModel):
    """camelCase 요청 기본 모델"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_values(self, partial: bool = False) -> dict[str, Any]:
        """저장용 값 (snake_case, None 제외, partial이면 전달된 필드만)"""
        return self.model_dump(mode="json", exclude_none=True, exclude_unset=partial)


# =============================================================================
# Auth
# =============================================================================


class RegisterRequest(ApiRequest):
    """회원가입 요청"""

    name: NonEmptyStr = Field(..., description="이름")
    email: NonEmptyStr = Field(..., description="이메일")
    password: str = Field(..., min_length=1, description="비밀번호")


class LoginRequest(ApiRequest):
    """로그인 요청"""

    email: NonEmptyStr = Field(..., description="이메일")
    password: str = Field(..., min_length=1, description="비밀번호")


class ForgotPasswordRequest(ApiRequest):
    """비밀번호 재설정 메일 요청"""

    email: NonEmptyStr = Field(..., description="이메일")


class ResetPasswordRequest(ApiRequest):
    """비밀번호 재설정 요청"""

    token: NonEmptyStr = Field(..., description="재설정 토큰")
    new_password: str = Field(..., min_length=1, description="새 비밀번호")


# =============================================================================
# 계좌
# =============================================================================


class AccountCreateRequest(ApiRequest):
    """계좌 생성 요청

    balance는 개설 잔고. 이후 잔고는 거래/환전으로만 변경.
    """

    name: NonEmptyStr = Field(..., description="계좌 이름")
    currency: Currency = Field(..., description="통화 (ISO 4217)")
    type: AccountType = Field(default=AccountType.CHECKING, description="계좌 유형")
    balance: Amount = Field(default=Decimal("0"), description="개설 잔고")
    is_emergency_fund: bool = Field(default=False, description="비상금 계좌 여부")


class AccountUpdateRequest(ApiRequest):
    """계좌 수정 요청 (전달된 필드만 변경, balance 불가)"""

    name: NonEmptyStr | None = Field(default=None, description="계좌 이름")
    type: AccountType | None = Field(default=None, description="계좌 유형")
    currency: Currency | None = Field(default=None, description="통화")
    is_emergency_fund: bool | None = Field(default=None, description="비상금 계좌 여부")


# =============================================================================
# 카테고리 / 수입원
# =============================================================================


class CategoryCreateRequest(ApiRequest):
    """카테고리 생성 요청"""

    name: NonEmptyStr = Field(..., description="카테고리 이름")
    type: CategoryType = Field(..., description="income / expense")
    color: str | None = Field(default=None, description="표시 색상 (#RRGGBB)")


class CategoryUpdateRequest(ApiRequest):
    """카테고리 수정 요청"""

    name: NonEmptyStr | None = None
    type: CategoryType | None = None
    color: str | None = None


class IncomeSourceCreateRequest(ApiRequest):
    """수입원 생성 요청"""

    name: NonEmptyStr = Field(..., description="수입원 이름")
    description: str | None = Field(default=None, description="설명")


class IncomeSourceUpdateRequest(ApiRequest):
    """수입원 수정 요청"""

    name: NonEmptyStr | None = None
    description: str | None = None


# =============================================================================
# 거래 / 환전
# =============================================================================


class TransactionRequest(ApiRequest):
    """거래 생성/수정 요청

    amount는 양수로 저장, 부호는 type으로 결정.
    """

    account_id: int = Field(..., description="계좌 ID")
    type: TransactionKind = Field(..., description="income / expense")
    amount: Amount = Field(..., ge=0, description="금액 (양수)")
    date: dt.date = Field(..., description="거래일 (YYYY-MM-DD)")
    description: str | None = Field(default=None, description="설명")
    category_id: int | None = Field(default=None, description="카테고리 ID")
    income_source_id: int | None = Field(default=None, description="수입원 ID")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "accountId": 1,
                    "type": "expense",
                    "amount": "120.50",
                    "date": "2026-01-15",
                    "description": "Mercado",
                    "categoryId": 4,
                },
            ]
        }
    }


class ExchangeRequest(ApiRequest):
    """환전/이체 생성/수정 요청

    통화 생략 시 계좌 통화, 환율 생략 시 toAmount / fromAmount.
    """

    from_account_id: int = Field(..., description="출금 계좌 ID")
    to_account_id: int = Field(..., description="입금 계좌 ID")
    from_amount: Amount = Field(..., ge=0, description="출금 금액")
    to_amount: Amount = Field(..., ge=0, description="입금 금액")
    from_currency: Currency | None = Field(default=None, description="출금 통화")
    to_currency: Currency | None = Field(default=None, description="입금 통화")
    exchange_rate: Rate | None = Field(default=None, ge=0, description="환율 (참고용)")
    date: dt.date = Field(..., description="환전일 (YYYY-MM-DD)")


# =============================================================================
# 예산 / 목표 / 보유 자산
# =============================================================================


class BudgetCreateRequest(ApiRequest):
    """예산 생성 요청 (동일 키 재요청 시 한도 갱신)

    프론트엔드 호환 입력:
    - entityId + entityType="category" → categoryId
    - amount → limitAmount
    - month "YYYY-MM" → month, year
    """

    category_id: int | None = Field(default=None, description="카테고리 ID")
    entity_id: int | None = Field(default=None, description="대상 ID (프론트엔드 호환)")
    entity_type: BudgetEntityType | None = Field(default=None, description="대상 유형")
    limit_amount: Amount | None = Field(default=None, ge=0, description="한도")
    amount: Amount | None = Field(default=None, ge=0, description="한도 (별칭)")
    month: int | str | None = Field(default=None, description="월 (1-12 또는 YYYY-MM)")
    year: int | None = Field(default=None, description="연도")
    currency: Currency | None = Field(default=None, description="통화")


class BudgetUpdateRequest(ApiRequest):
    """예산 수정 요청 (한도만)"""

    limit_amount: Amount = Field(..., ge=0, description="한도")


class GoalCreateRequest(ApiRequest):
    """재무 목표 생성 요청"""

    name: NonEmptyStr = Field(..., description="목표 이름")
    target_amount: Amount = Field(..., ge=0, description="목표 금액")
    currency: Currency | None = Field(default=None, description="통화 (기본 BRL)")
    deadline: dt.date | None = Field(default=None, description="기한")
    category: str | None = Field(default=None, description="분류")
    account_id: int | None = Field(default=None, description="연결 계좌 ID")


class GoalUpdateRequest(ApiRequest):
    """재무 목표 수정 요청"""

    name: NonEmptyStr | None = None
    target_amount: Amount | None = Field(default=None, ge=0)
    current_amount: Amount | None = Field(default=None, ge=0)
    currency: Currency | None = None
    deadline: dt.date | None = None
    category: str | None = None
    status: GoalStatus | None = None
    account_id: int | None = None


class InvestmentCreateRequest(ApiRequest):
    """투자 생성 요청 (currentValue 생략 시 amount)"""

    name: NonEmptyStr = Field(..., description="투자 이름")
    type: NonEmptyStr = Field(..., description="투자 유형")
    amount: Amount = Field(..., ge=0, description="투자 원금")
    current_value: Amount | None = Field(default=None, ge=0, description="현재 가치")
    currency: Currency = Field(..., description="통화")
    purchase_date: dt.date = Field(..., description="매수일")
    broker: str | None = Field(default=None, description="증권사")
    notes: str | None = Field(default=None, description="메모")


class InvestmentUpdateRequest(ApiRequest):
    """투자 수정 요청"""

    name: NonEmptyStr | None = None
    type: NonEmptyStr | None = None
    amount: Amount | None = Field(default=None, ge=0)
    current_value: Amount | None = Field(default=None, ge=0)
    currency: Currency | None = None
    purchase_date: dt.date | None = None
    broker: str | None = None
    notes: str | None = None


class AssetCreateRequest(ApiRequest):
    """자산 생성 요청"""

    name: NonEmptyStr = Field(..., description="자산 이름")
    category: str | None = Field(default=None, description="자산 분류")
    value: Amount = Field(..., ge=0, description="가치")
    currency: Currency = Field(..., description="통화")
    purchase_date: dt.date | None = Field(default=None, description="취득일")
    description: str | None = Field(default=None, description="설명")


class AssetUpdateRequest(ApiRequest):
    """자산 수정 요청"""

    name: NonEmptyStr | None = None
    category: str | None = None
    value: Amount | None = Field(default=None, ge=0)
    currency: Currency | None = None
    purchase_date: dt.date | None = None
    description: str | None = None


class LiabilityCreateRequest(ApiRequest):
    """부채 생성 요청"""

    name: NonEmptyStr = Field(..., description="부채 이름")
    category: str | None = Field(default=None, description="부채 분류")
    amount: Amount = Field(..., ge=0, description="잔액")
    currency: Currency = Field(..., description="통화")
    interest_rate: Rate | None = Field(default=None, description="이자율 (%)")
    due_date: dt.date | None = Field(default=None, description="만기일")
    monthly_payment: Amount | None = Field(default=None, ge=0, description="월 상환액")
    description: str | None = Field(default=None, description="설명")


class LiabilityUpdateRequest(ApiRequest):
    """부채 수정 요청"""

    name: NonEmptyStr | None = None
    category: str | None = None
    amount: Amount | None = Field(default=None, ge=0)
    currency: Currency | None = None
    interest_rate: Rate | None = None
    due_date: dt.date | None = None
    monthly_payment: Amount | None = Field(default=None, ge=0)
    description: str | None = None

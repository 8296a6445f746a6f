"""
보유 자산 라우트

재무 목표 / 투자 / 자산 / 부채 CRUD API.
계좌 잔고에는 영향 없음.
"""

from fastapi import APIRouter, Depends, Path, status

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from web.dependencies import get_app_settings, get_current_user_id, get_db
from web.models.requests import (
    AssetCreateRequest,
    AssetUpdateRequest,
    GoalCreateRequest,
    GoalUpdateRequest,
    InvestmentCreateRequest,
    InvestmentUpdateRequest,
    LiabilityCreateRequest,
    LiabilityUpdateRequest,
)
from web.models.responses import (
    AllocationItem,
    AssetResponse,
    GoalResponse,
    InvestmentResponse,
    LiabilityResponse,
    MessageResponse,
)
from web.services.holdings_service import HoldingsService
from web.services.metrics_service import MetricsService

router = APIRouter(prefix="/api", tags=["Holdings"])


# =========================================================================
# 재무 목표
# =========================================================================


@router.get("/goals", response_model=list[GoalResponse])
async def list_goals(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[GoalResponse]:
    """재무 목표 목록"""
    goals = await HoldingsService(db).list_goals(user_id)
    return [GoalResponse.model_validate(g) for g in goals]


@router.post("/goals", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(
    request: GoalCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> GoalResponse:
    """재무 목표 생성"""
    service = HoldingsService(db, base_currency=settings.base_currency)
    goal = await service.create_goal(user_id, request.to_values())
    return GoalResponse.model_validate(goal)


@router.put("/goals/{goal_id}", response_model=GoalResponse)
async def update_goal(
    request: GoalUpdateRequest,
    goal_id: int = Path(..., description="목표 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> GoalResponse:
    """재무 목표 수정"""
    goal = await HoldingsService(db).update_goal(goal_id, user_id, request.to_values(partial=True))
    return GoalResponse.model_validate(goal)


@router.delete("/goals/{goal_id}", response_model=MessageResponse)
async def delete_goal(
    goal_id: int = Path(..., description="목표 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """재무 목표 삭제"""
    await HoldingsService(db).delete_goal(goal_id, user_id)
    return MessageResponse(message="Meta deletada com sucesso")


# =========================================================================
# 투자
# =========================================================================


@router.get("/investments", response_model=list[InvestmentResponse])
async def list_investments(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[InvestmentResponse]:
    """투자 목록"""
    investments = await HoldingsService(db).list_investments(user_id)
    return [InvestmentResponse.model_validate(i) for i in investments]


@router.get("/investments/allocation", response_model=list[AllocationItem])
async def get_investment_allocation(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[AllocationItem]:
    """투자 유형/통화별 배분 (현재 가치 합계)"""
    rows = await MetricsService(db).get_investment_allocation(user_id)
    return [AllocationItem.model_validate(r) for r in rows]


@router.post("/investments", response_model=InvestmentResponse, status_code=status.HTTP_201_CREATED)
async def create_investment(
    request: InvestmentCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> InvestmentResponse:
    """투자 생성 (currentValue 생략 시 amount)"""
    investment = await HoldingsService(db).create_investment(user_id, request.to_values())
    return InvestmentResponse.model_validate(investment)


@router.put("/investments/{investment_id}", response_model=InvestmentResponse)
async def update_investment(
    request: InvestmentUpdateRequest,
    investment_id: int = Path(..., description="투자 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> InvestmentResponse:
    """투자 수정"""
    investment = await HoldingsService(db).update_investment(
        investment_id, user_id, request.to_values(partial=True)
    )
    return InvestmentResponse.model_validate(investment)


@router.delete("/investments/{investment_id}", response_model=MessageResponse)
async def delete_investment(
    investment_id: int = Path(..., description="투자 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """투자 삭제"""
    await HoldingsService(db).delete_investment(investment_id, user_id)
    return MessageResponse(message="Investimento deletado com sucesso")


# =========================================================================
# 자산
# =========================================================================


@router.get("/assets", response_model=list[AssetResponse])
async def list_assets(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[AssetResponse]:
    """자산 목록"""
    assets = await HoldingsService(db).list_assets(user_id)
    return [AssetResponse.model_validate(a) for a in assets]


@router.post("/assets", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
async def create_asset(
    request: AssetCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> AssetResponse:
    """자산 생성"""
    asset = await HoldingsService(db).create_asset(user_id, request.to_values())
    return AssetResponse.model_validate(asset)


@router.put("/assets/{asset_id}", response_model=AssetResponse)
async def update_asset(
    request: AssetUpdateRequest,
    asset_id: int = Path(..., description="자산 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> AssetResponse:
    """자산 수정"""
    asset = await HoldingsService(db).update_asset(asset_id, user_id, request.to_values(partial=True))
    return AssetResponse.model_validate(asset)


@router.delete("/assets/{asset_id}", response_model=MessageResponse)
async def delete_asset(
    asset_id: int = Path(..., description="자산 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """자산 삭제"""
    await HoldingsService(db).delete_asset(asset_id, user_id)
    return MessageResponse(message="Ativo deletado com sucesso")


# =========================================================================
# 부채
# =========================================================================


@router.get("/liabilities", response_model=list[LiabilityResponse])
async def list_liabilities(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[LiabilityResponse]:
    """부채 목록"""
    liabilities = await HoldingsService(db).list_liabilities(user_id)
    return [LiabilityResponse.model_validate(item) for item in liabilities]


@router.post("/liabilities", response_model=LiabilityResponse, status_code=status.HTTP_201_CREATED)
async def create_liability(
    request: LiabilityCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> LiabilityResponse:
    """부채 생성"""
    liability = await HoldingsService(db).create_liability(user_id, request.to_values())
    return LiabilityResponse.model_validate(liability)


@router.put("/liabilities/{liability_id}", response_model=LiabilityResponse)
async def update_liability(
    request: LiabilityUpdateRequest,
    liability_id: int = Path(..., description="부채 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> LiabilityResponse:
    """부채 수정"""
    liability = await HoldingsService(db).update_liability(
        liability_id, user_id, request.to_values(partial=True)
    )
    return LiabilityResponse.model_validate(liability)


@router.delete("/liabilities/{liability_id}", response_model=MessageResponse)
async def delete_liability(
    liability_id: int = Path(..., description="부채 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """부채 삭제"""
    await HoldingsService(db).delete_liability(liability_id, user_id)
    return MessageResponse(message="Passivo deletado com sucesso")

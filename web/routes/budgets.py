"""
예산 라우트

예산 CRUD API (같은 카테고리/기간/통화 재생성 시 한도 갱신)
"""

from fastapi import APIRouter, Depends, Path, Query, status

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.constants import Defaults
from web.dependencies import get_app_settings, get_current_user_id, get_db
from web.models.requests import BudgetCreateRequest, BudgetUpdateRequest
from web.models.responses import BudgetResponse, MessageResponse
from web.services.budget_service import BudgetService

router = APIRouter(prefix="/api", tags=["Budgets"])


@router.get("/budgets", response_model=list[BudgetResponse])
async def list_budgets(
    month: int | None = Query(default=None, ge=1, le=12, description="월 필터"),
    year: int | None = Query(default=None, ge=Defaults.MIN_YEAR, le=Defaults.MAX_YEAR, description="연도 필터"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[BudgetResponse]:
    """예산 목록"""
    budgets = await BudgetService(db).list_budgets(user_id, month=month, year=year)
    return [BudgetResponse.model_validate(b) for b in budgets]


@router.post("/budgets", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    request: BudgetCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> BudgetResponse:
    """예산 생성 (중복 키는 한도 갱신)"""
    service = BudgetService(db, base_currency=settings.base_currency)
    budget = await service.create_budget(user_id, request)
    return BudgetResponse.model_validate(budget)


@router.put("/budgets/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    request: BudgetUpdateRequest,
    budget_id: int = Path(..., description="예산 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> BudgetResponse:
    """예산 한도 수정"""
    budget = await BudgetService(db).update_budget(budget_id, user_id, request.limit_amount)
    return BudgetResponse.model_validate(budget)


@router.delete("/budgets/{budget_id}", response_model=MessageResponse)
async def delete_budget(
    budget_id: int = Path(..., description="예산 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """예산 삭제"""
    await BudgetService(db).delete_budget(budget_id, user_id)
    return MessageResponse(message="Orçamento deletado com sucesso")

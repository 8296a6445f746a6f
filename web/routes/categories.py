"""
카테고리 / 수입원 라우트

삭제 시 참조 거래는 유지되고 참조만 해제됨.
"""

from fastapi import APIRouter, Depends, Path, status

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.dependencies import get_current_user_id, get_db
from web.models.requests import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    IncomeSourceCreateRequest,
    IncomeSourceUpdateRequest,
)
from web.models.responses import CategoryResponse, IncomeSourceResponse, MessageResponse
from web.services.catalog_service import CatalogService

router = APIRouter(prefix="/api", tags=["Categories"])


# =========================================================================
# 카테고리
# =========================================================================


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[CategoryResponse]:
    """카테고리 목록"""
    records = await CatalogService.categories(db).list_by_user(user_id)
    return [CategoryResponse.model_validate(r) for r in records]


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CategoryCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> CategoryResponse:
    """카테고리 생성"""
    record = await CatalogService.categories(db).create(user_id, request.to_values())
    return CategoryResponse.model_validate(record)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    request: CategoryUpdateRequest,
    category_id: int = Path(..., description="카테고리 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> CategoryResponse:
    """카테고리 수정"""
    record = await CatalogService.categories(db).update(
        category_id, user_id, request.to_values(partial=True)
    )
    return CategoryResponse.model_validate(record)


@router.delete("/categories/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int = Path(..., description="카테고리 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """카테고리 삭제 (거래 category_id → null, 해당 예산 삭제)"""
    await CatalogService.categories(db).delete(category_id, user_id)
    return MessageResponse(message="Categoria deletada com sucesso")


# =========================================================================
# 수입원
# =========================================================================


@router.get("/income-sources", response_model=list[IncomeSourceResponse])
async def list_income_sources(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[IncomeSourceResponse]:
    """수입원 목록"""
    records = await CatalogService.income_sources(db).list_by_user(user_id)
    return [IncomeSourceResponse.model_validate(r) for r in records]


@router.post(
    "/income-sources",
    response_model=IncomeSourceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_income_source(
    request: IncomeSourceCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> IncomeSourceResponse:
    """수입원 생성"""
    record = await CatalogService.income_sources(db).create(user_id, request.to_values())
    return IncomeSourceResponse.model_validate(record)


@router.put("/income-sources/{source_id}", response_model=IncomeSourceResponse)
async def update_income_source(
    request: IncomeSourceUpdateRequest,
    source_id: int = Path(..., description="수입원 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> IncomeSourceResponse:
    """수입원 수정"""
    record = await CatalogService.income_sources(db).update(
        source_id, user_id, request.to_values(partial=True)
    )
    return IncomeSourceResponse.model_validate(record)


@router.delete("/income-sources/{source_id}", response_model=MessageResponse)
async def delete_income_source(
    source_id: int = Path(..., description="수입원 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """수입원 삭제 (거래 income_source_id → null)"""
    await CatalogService.income_sources(db).delete(source_id, user_id)
    return MessageResponse(message="Fonte de renda deletada com sucesso")

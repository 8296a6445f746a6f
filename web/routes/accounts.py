"""
계좌 라우트

계좌 CRUD API
"""

from fastapi import APIRouter, Depends, Path, status

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.dependencies import get_current_user_id, get_db
from web.models.requests import AccountCreateRequest, AccountUpdateRequest
from web.models.responses import AccountResponse, MessageResponse
from web.services.account_service import AccountService

router = APIRouter(prefix="/api", tags=["Accounts"])


@router.get("/accounts", response_model=list[AccountResponse])
async def list_accounts(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[AccountResponse]:
    """계좌 목록 (생성 순)"""
    accounts = await AccountService(db).list_accounts(user_id)
    return [AccountResponse.model_validate(a) for a in accounts]


@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    request: AccountCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> AccountResponse:
    """계좌 생성 (balance = 개설 잔고)"""
    account = await AccountService(db).create_account(
        user_id,
        name=request.name,
        currency=request.currency,
        account_type=request.type.value,
        balance=request.balance,
        is_emergency_fund=request.is_emergency_fund,
    )
    return AccountResponse.model_validate(account)


@router.put("/accounts/{account_id}", response_model=AccountResponse)
async def update_account(
    request: AccountUpdateRequest,
    account_id: int = Path(..., description="계좌 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> AccountResponse:
    """계좌 수정 (name, type, currency, isEmergencyFund)"""
    account = await AccountService(db).update_account(
        account_id, user_id, request.to_values(partial=True)
    )
    return AccountResponse.model_validate(account)


@router.delete("/accounts/{account_id}", response_model=MessageResponse)
async def delete_account(
    account_id: int = Path(..., description="계좌 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """계좌 삭제 (연결된 거래/환전 함께 삭제)"""
    await AccountService(db).delete_account(account_id, user_id)
    return MessageResponse(message="Conta deletada com sucesso")

"""
거래 / 환전 라우트

생성/수정/삭제는 잔고 역적용 → 변경 → 재적용을 하나의 원자 단위로 실행.
"""

from fastapi import APIRouter, Depends, Path, Query, status

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.dependencies import get_current_user_id, get_db
from web.models.requests import ExchangeRequest, TransactionRequest
from web.models.responses import ExchangeResponse, MessageResponse, TransactionResponse
from web.services.exchange_service import ExchangeService
from web.services.transaction_service import TransactionService

router = APIRouter(prefix="/api", tags=["Transactions"])


# =========================================================================
# 거래
# =========================================================================


@router.get("/transactions", response_model=list[TransactionResponse])
async def list_transactions(
    account_id: int | None = Query(default=None, alias="accountId", description="계좌 필터"),
    limit: int | None = Query(default=None, ge=1, le=1000, description="조회 개수"),
    offset: int = Query(default=0, ge=0, description="시작 위치"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[TransactionResponse]:
    """거래 목록 (날짜 최신 순)"""
    records = await TransactionService(db).list_transactions(
        user_id, account_id=account_id, limit=limit, offset=offset
    )
    return [TransactionResponse.model_validate(r) for r in records]


@router.post("/transactions", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    request: TransactionRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> TransactionResponse:
    """거래 생성 (계좌 잔고 반영)"""
    record = await TransactionService(db).create_transaction(user_id, request)
    return TransactionResponse.model_validate(record)


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    request: TransactionRequest,
    transaction_id: int = Path(..., description="거래 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> TransactionResponse:
    """거래 수정 (기존 효과 역적용 후 새 효과 적용)"""
    record = await TransactionService(db).update_transaction(transaction_id, user_id, request)
    return TransactionResponse.model_validate(record)


@router.delete("/transactions/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: int = Path(..., description="거래 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """거래 삭제 (효과 역적용)"""
    await TransactionService(db).delete_transaction(transaction_id, user_id)
    return MessageResponse(message="Transação deletada com sucesso")


# =========================================================================
# 환전
# =========================================================================


@router.get("/exchanges", response_model=list[ExchangeResponse])
async def list_exchanges(
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> list[ExchangeResponse]:
    """환전 목록 (날짜 최신 순)"""
    records = await ExchangeService(db).list_exchanges(user_id)
    return [ExchangeResponse.model_validate(r) for r in records]


@router.post("/exchanges", response_model=ExchangeResponse, status_code=status.HTTP_201_CREATED)
async def create_exchange(
    request: ExchangeRequest,
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> ExchangeResponse:
    """환전 생성 (출금 계좌 -fromAmount, 입금 계좌 +toAmount)"""
    record = await ExchangeService(db).create_exchange(user_id, request)
    return ExchangeResponse.model_validate(record)


@router.put("/exchanges/{exchange_id}", response_model=ExchangeResponse)
async def update_exchange(
    request: ExchangeRequest,
    exchange_id: int = Path(..., description="환전 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> ExchangeResponse:
    """환전 수정"""
    record = await ExchangeService(db).update_exchange(exchange_id, user_id, request)
    return ExchangeResponse.model_validate(record)


@router.delete("/exchanges/{exchange_id}", response_model=MessageResponse)
async def delete_exchange(
    exchange_id: int = Path(..., description="환전 ID"),
    user_id: int = Depends(get_current_user_id),
    db: SQLiteAdapter = Depends(get_db),
) -> MessageResponse:
    """환전 삭제 (양쪽 계좌 효과 역적용)"""
    await ExchangeService(db).delete_exchange(exchange_id, user_id)
    return MessageResponse(message="Operação de câmbio deletada com sucesso")

"""
헬스 체크 엔드포인트

GET /api/health - 서버 상태 확인 (인증 불필요)
"""

from fastapi import APIRouter

from core.utils.timezone import now_utc
from web.models.responses import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """서버 상태 확인"""
    return HealthResponse(
        status="ok",
        message="FinanceFlow API is running",
        timestamp=now_utc(),
    )

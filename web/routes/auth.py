"""
Auth 라우트

회원가입 / 로그인 / 비밀번호 재설정 API (인증 불필요)
"""

from fastapi import APIRouter, Depends, status

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import IPasswordResetMailer
from core.config.loader import Settings
from web.dependencies import get_app_settings, get_db, get_mailer
from web.models.requests import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from web.models.responses import AuthResponse, MessageResponse
from web.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    """회원가입 (기본 카테고리/수입원 생성 후 토큰 발급)"""
    service = AuthService(db, settings)
    session = await service.register(request.name, request.email, request.password)
    return AuthResponse.model_validate(session)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    """로그인"""
    service = AuthService(db, settings)
    session = await service.login(request.email, request.password)
    return AuthResponse.model_validate(session)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    mailer: IPasswordResetMailer = Depends(get_mailer),
) -> MessageResponse:
    """재설정 메일 요청 (계정 존재 여부와 무관하게 같은 응답)"""
    service = AuthService(db, settings, mailer=mailer)
    message = await service.forgot_password(request.email)
    return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """비밀번호 재설정"""
    service = AuthService(db, settings)
    message = await service.reset_password(request.token, request.new_password)
    return MessageResponse(message=message)

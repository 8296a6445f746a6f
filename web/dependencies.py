"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
요청마다 독립 DB 연결을 열고 응답 후 닫음 (요청 간 공유 상태 없음).
"""

from typing import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import IPasswordResetMailer
from adapters.mail.smtp_mailer import SmtpMailer
from adapters.mock.mailer import MockMailer
from core.auth.tokens import authenticate
from core.config.loader import Settings, get_settings

# auto_error=False: 토큰 누락도 AuthError(401, {"error": ...})로 통일
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """요청 단위 DB 연결 반환"""
    async with SQLiteAdapter(settings.db_path) as db:
        yield db


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> int:
    """Bearer 토큰에서 사용자 ID 추출

    Raises:
        AuthError: 토큰 없음 / 무효 / 만료
    """
    token = credentials.credentials if credentials else None
    return authenticate(token, settings.jwt_secret)


def get_mailer(settings: Settings = Depends(get_app_settings)) -> IPasswordResetMailer:
    """재설정 메일 발송기 반환

    mail 설정이 없으면 MockMailer (발송 없이 기록만).
    """
    if settings.mail is None:
        return MockMailer()
    return SmtpMailer(
        settings.mail,
        reset_url=settings.reset_url,
        ttl_minutes=settings.reset_token_ttl_minutes,
    )

"""
액세스 토큰 (JWT, HS256)

페이로드: {"userId": <int>, "iat": ..., "exp": ...}
"""

import logging
from datetime import timedelta

import jwt

from core.constants import Defaults
from core.errors import AuthError
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


def create_access_token(
    user_id: int,
    secret: str,
    expire_days: int = Defaults.TOKEN_EXPIRE_DAYS,
) -> str:
    """액세스 토큰 발급

    Args:
        user_id: 사용자 ID
        secret: 서명 키
        expire_days: 유효 기간 (일)
    """
    issued_at = now_utc()
    payload = {
        "userId": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=expire_days),
    }
    return jwt.encode(payload, secret, algorithm=Defaults.JWT_ALGORITHM)


def authenticate(token: str | None, secret: str) -> int:
    """토큰 검증 후 사용자 ID 반환

    Raises:
        AuthError: 토큰 없음 / 서명 오류 / 만료 / userId 누락
    """
    if not token:
        raise AuthError("Token não fornecido")

    try:
        payload = jwt.decode(token, secret, algorithms=[Defaults.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token expirado") from e
    except jwt.InvalidTokenError as e:
        logger.debug(f"토큰 검증 실패: {e}")
        raise AuthError("Token inválido") from e

    user_id = payload.get("userId")
    if not isinstance(user_id, int):
        raise AuthError("Token inválido")
    return user_id

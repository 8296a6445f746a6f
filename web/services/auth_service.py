"""
인증 서비스

회원가입 / 로그인 / 비밀번호 재설정
"""

import logging
import uuid
from datetime import timedelta
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import IPasswordResetMailer
from core.auth.passwords import hash_password, verify_password
from core.auth.tokens import create_access_token
from core.config.loader import Settings
from core.errors import AuthError, ValidationError
from core.storage.catalog_store import CategoryStore, IncomeSourceStore
from core.storage.user_store import UserStore
from core.utils.timezone import now_utc, to_timestamp_ms

logger = logging.getLogger(__name__)

# 계정 존재 여부를 노출하지 않는 고정 응답
FORGOT_PASSWORD_MESSAGE = "Se o email existir, você receberá instruções de recuperação"
RESET_PASSWORD_MESSAGE = "Senha redefinida com sucesso"


class AuthService:
    """인증 서비스

    Args:
        db: SQLite 어댑터
        settings: 애플리케이션 설정 (JWT 서명 키, 토큰 유효 기간)
        mailer: 재설정 메일 발송기
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        settings: Settings,
        mailer: IPasswordResetMailer | None = None,
    ):
        self.db = db
        self.settings = settings
        self.mailer = mailer
        self.users = UserStore(db)

    def _session(self, user: dict[str, Any]) -> dict[str, Any]:
        token = create_access_token(
            user["id"],
            self.settings.jwt_secret,
            expire_days=self.settings.token_expire_days,
        )
        return {
            "token": token,
            "user": {"id": user["id"], "name": user["name"], "email": user["email"]},
        }

    async def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        """회원가입

        기본 카테고리/수입원을 함께 생성.

        Raises:
            ValidationError: 이미 등록된 이메일
        """
        password_hash = hash_password(password)

        async with self.db.transaction(immediate=True):
            if await self.users.get_by_email(email) is not None:
                raise ValidationError("Email já cadastrado")

            user = await self.users.create_user(name, email, password_hash)
            await CategoryStore(self.db).seed_defaults(user["id"])
            await IncomeSourceStore(self.db).seed_defaults(user["id"])

        logger.info(f"회원가입: user_id={user['id']}", extra={"user_id": user["id"]})
        return self._session(user)

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """로그인

        Raises:
            AuthError: 이메일 없음 또는 비밀번호 불일치 (구분하지 않음)
        """
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user["password_hash"]):
            raise AuthError("Email ou senha inválidos")

        return self._session(user)

    async def forgot_password(self, email: str) -> str:
        """재설정 토큰 발급 및 메일 발송

        계정 유무와 관계없이 같은 메시지 반환.
        """
        user = await self.users.get_by_email(email)

        if user is not None:
            token = str(uuid.uuid4())
            expires_at = now_utc() + timedelta(minutes=self.settings.reset_token_ttl_minutes)

            async with self.db.transaction():
                await self.users.set_reset_token(user["id"], token, to_timestamp_ms(expires_at))

            if self.mailer is not None:
                sent = await self.mailer.send(email, token)
                if not sent:
                    logger.warning(
                        "재설정 메일 발송 실패",
                        extra={"user_id": user["id"]},
                    )

        return FORGOT_PASSWORD_MESSAGE

    async def reset_password(self, token: str, new_password: str) -> str:
        """비밀번호 재설정

        Raises:
            ValidationError: 토큰 무효 또는 만료
        """
        user = await self.users.get_by_reset_token(token, to_timestamp_ms(now_utc()))
        if user is None:
            raise ValidationError("Token inválido ou expirado")

        async with self.db.transaction():
            await self.users.update_password(user["id"], hash_password(new_password))

        return RESET_PASSWORD_MESSAGE

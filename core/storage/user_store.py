"""
사용자 저장소

사용자 계정 및 비밀번호 재설정 토큰 관리.
reset_token_expires는 epoch milliseconds (UTC).
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, name, email, password_hash, reset_token, reset_token_expires, created_at"


def _user_from_row(row: tuple[Any, ...]) -> dict[str, Any]:
    return {
        "id": row[0],
        "name": row[1],
        "email": row[2],
        "password_hash": row[3],
        "reset_token": row[4],
        "reset_token_expires": row[5],
        "created_at": row[6],
    }


class UserStore:
    """사용자 저장소

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def create_user(self, name: str, email: str, password_hash: str) -> dict[str, Any]:
        """사용자 생성"""
        cursor = await self.db.execute(
            "INSERT INTO users (name, email, password_hash) VALUES (?, ?, ?)",
            (name, email, password_hash),
        )
        user = await self.get_by_id(cursor.lastrowid)
        assert user is not None
        return user

    async def get_by_id(self, user_id: int) -> dict[str, Any] | None:
        row = await self.db.fetchone(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?",
            (user_id,),
        )
        return _user_from_row(row) if row else None

    async def get_by_email(self, email: str) -> dict[str, Any] | None:
        row = await self.db.fetchone(
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = ?",
            (email,),
        )
        return _user_from_row(row) if row else None

    async def set_reset_token(self, user_id: int, token: str, expires_ms: int) -> None:
        """재설정 토큰 저장 (기존 토큰 덮어씀)"""
        await self.db.execute(
            "UPDATE users SET reset_token = ?, reset_token_expires = ? WHERE id = ?",
            (token, expires_ms, user_id),
        )

    async def get_by_reset_token(self, token: str, now_ms: int) -> dict[str, Any] | None:
        """유효한(만료 전) 재설정 토큰의 사용자 조회"""
        row = await self.db.fetchone(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE reset_token = ? AND reset_token_expires > ?
            """,
            (token, now_ms),
        )
        return _user_from_row(row) if row else None

    async def update_password(self, user_id: int, password_hash: str) -> None:
        """비밀번호 변경 + 재설정 토큰 제거"""
        await self.db.execute(
            """
            UPDATE users
            SET password_hash = ?, reset_token = NULL, reset_token_expires = NULL
            WHERE id = ?
            """,
            (password_hash, user_id),
        )
        logger.info("비밀번호 변경 완료", extra={"user_id": user_id})

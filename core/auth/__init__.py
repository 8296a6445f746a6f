"""
인증 모듈

비밀번호 해시(bcrypt)와 액세스 토큰(JWT)
"""

from core.auth.passwords import hash_password, verify_password
from core.auth.tokens import authenticate, create_access_token

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "authenticate",
]

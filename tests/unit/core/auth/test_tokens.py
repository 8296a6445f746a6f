"""
core/auth/tokens.py 테스트
"""

from datetime import timedelta

import jwt
import pytest

from core.auth.tokens import authenticate, create_access_token
from core.errors import AuthError
from core.utils.timezone import now_utc

SECRET = "unit-test-secret"


class TestAccessToken:
    """액세스 토큰 발급/검증 테스트"""

    def test_roundtrip(self) -> None:
        token = create_access_token(42, SECRET)
        assert authenticate(token, SECRET) == 42

    def test_payload_claim(self) -> None:
        token = create_access_token(7, SECRET, expire_days=1)
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload["userId"] == 7
        assert payload["exp"] - payload["iat"] == 86400

    def test_missing_token(self) -> None:
        with pytest.raises(AuthError, match="não fornecido"):
            authenticate(None, SECRET)
        with pytest.raises(AuthError):
            authenticate("", SECRET)

    def test_wrong_secret(self) -> None:
        token = create_access_token(1, "other-secret")
        with pytest.raises(AuthError, match="inválido"):
            authenticate(token, SECRET)

    def test_garbage_token(self) -> None:
        with pytest.raises(AuthError, match="inválido"):
            authenticate("not-a-jwt", SECRET)

    def test_expired(self) -> None:
        past = now_utc() - timedelta(days=2)
        token = jwt.encode(
            {"userId": 1, "iat": past, "exp": past + timedelta(days=1)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthError, match="expirado"):
            authenticate(token, SECRET)

    def test_non_integer_user_id(self) -> None:
        token = jwt.encode({"userId": "1"}, SECRET, algorithm="HS256")
        with pytest.raises(AuthError) as exc_info:
            authenticate(token, SECRET)
        assert exc_info.value.status_code == 401

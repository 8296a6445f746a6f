"""
core/auth/passwords.py 테스트
"""

from core.auth.passwords import hash_password, verify_password


class TestPasswords:
    """bcrypt 해시 테스트"""

    def test_verify(self) -> None:
        hashed = hash_password("s3nha", rounds=4)

        assert hashed != "s3nha"
        assert verify_password("s3nha", hashed) is True
        assert verify_password("errada", hashed) is False

    def test_salted(self) -> None:
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_malformed_hash(self) -> None:
        assert verify_password("s3nha", "not-a-bcrypt-hash") is False

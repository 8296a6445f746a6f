"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IPasswordResetMailer(Protocol):
    """비밀번호 재설정 메일 발송 인터페이스

    발송 실패는 예외 대신 False 반환.
    """

    async def send(self, email: str, token: str) -> bool:
        """재설정 메일 발송

        Args:
            email: 수신 주소
            token: 재설정 토큰

        Returns:
            발송 성공 여부
        """
        ...

"""
Mock 메일 발송기

테스트 및 메일 미설정 환경용.
IPasswordResetMailer Protocol 준수.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


@dataclass
class SentMail:
    """발송 기록"""

    email: str
    token: str
    timestamp: datetime
    sent: bool


class MockMailer:
    """Mock 메일 발송기

    발송된 모든 메일을 기록하여 테스트에서 검증 가능.

    사용 예시:
    ```python
    mailer = MockMailer()

    await mailer.send("user@example.com", "reset-token")

    assert mailer.last_mail.token == "reset-token"
    ```
    """

    def __init__(self, should_fail: bool = False):
        """
        Args:
            should_fail: True면 모든 발송 실패 (에러 시나리오 테스트용)
        """
        self.should_fail = should_fail
        self.mails: list[SentMail] = []

    async def send(self, email: str, token: str) -> bool:
        """재설정 메일 발송 (기록만)"""
        self.mails.append(
            SentMail(
                email=email,
                token=token,
                timestamp=datetime.now(timezone.utc),
                sent=not self.should_fail,
            )
        )

        if self.should_fail:
            logger.warning(f"[MockMailer] 발송 실패 시뮬레이션: {email}")
        else:
            logger.info(f"[MockMailer] 재설정 메일 기록: {email}")

        return not self.should_fail

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """발송 기록 초기화"""
        self.mails.clear()

    @property
    def last_mail(self) -> SentMail | None:
        """마지막 발송 기록"""
        return self.mails[-1] if self.mails else None

    @property
    def sent_count(self) -> int:
        """성공적으로 발송된 메일 수"""
        return sum(1 for m in self.mails if m.sent)

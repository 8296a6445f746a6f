"""
SMTP 메일 발송기

비밀번호 재설정 링크를 HTML 메일로 발송.
IPasswordResetMailer Protocol 준수.

smtplib는 동기 API이므로 워커 스레드에서 실행 (이벤트 루프 블로킹 방지).
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from core.config.loader import MailConfig

logger = logging.getLogger(__name__)


SUBJECT = "Recuperação de Senha - FinanceFlow"

HTML_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #1f2937;">FinanceFlow</h1>
  <h2 style="color: #1f2937;">Recuperação de Senha</h2>
  <p style="color: #4b5563; font-size: 16px;">
    Você solicitou a recuperação de senha para sua conta no FinanceFlow.
    Clique no link abaixo para redefinir sua senha:
  </p>
  <p style="text-align: center; margin: 30px 0;">
    <a href="{reset_link}">Redefinir Senha</a>
  </p>
  <p style="color: #6b7280; font-size: 14px;">
    Este link expira em <strong>{ttl_minutes} minutos</strong>.
    Se você não solicitou esta recuperação, ignore este email.
  </p>
</div>
"""


def build_reset_link(reset_url: str, token: str) -> str:
    """재설정 링크 생성 (reset_url?token=...)"""
    separator = "&" if "?" in reset_url else "?"
    return f"{reset_url}{separator}token={token}"


class SmtpMailer:
    """SMTP 메일 발송기

    사용 예시:
    ```python
    mailer = SmtpMailer(settings.mail, reset_url=settings.reset_url)
    ok = await mailer.send("user@example.com", token)
    ```
    """

    def __init__(
        self,
        config: MailConfig,
        reset_url: str,
        ttl_minutes: int = 60,
        timeout: float = 10.0,
    ):
        """
        Args:
            config: SMTP 설정
            reset_url: 프론트엔드 재설정 페이지 URL
            ttl_minutes: 링크 유효 시간 (본문 표시용)
            timeout: SMTP 연결 타임아웃 (초)
        """
        self.config = config
        self.reset_url = reset_url
        self.ttl_minutes = ttl_minutes
        self.timeout = timeout

    def build_message(self, email: str, token: str) -> EmailMessage:
        """재설정 메일 생성"""
        link = build_reset_link(self.reset_url, token)

        message = EmailMessage()
        message["Subject"] = SUBJECT
        message["From"] = f"FinanceFlow <{self.config.sender}>"
        message["To"] = email
        message.set_content(f"Redefina sua senha: {link}")
        message.add_alternative(
            HTML_TEMPLATE.format(reset_link=link, ttl_minutes=self.ttl_minutes),
            subtype="html",
        )
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.config.host, self.config.port, timeout=self.timeout) as smtp:
            if self.config.use_tls:
                smtp.starttls()
            if self.config.username:
                smtp.login(self.config.username, self.config.password)
            smtp.send_message(message)

    async def send(self, email: str, token: str) -> bool:
        """재설정 메일 발송

        Returns:
            발송 성공 여부 (실패는 로그 후 False)
        """
        message = self.build_message(email, token)

        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"재설정 메일 발송 실패: {email}: {e}")
            return False

        logger.info(f"재설정 메일 발송 완료: {email}")
        return True

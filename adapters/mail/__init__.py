"""
메일 어댑터

SMTP 기반 비밀번호 재설정 메일 발송
"""

from adapters.mail.smtp_mailer import SmtpMailer

__all__ = ["SmtpMailer"]

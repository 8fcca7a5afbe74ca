"""
SMTP OTP notifier

Sends password reset codes by email. smtplib is blocking, so sends run in
Starlette's threadpool. Without SMTP_HOST the notifier runs in dev mode and
only logs that a code was issued.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Optional

from starlette.concurrency import run_in_threadpool

from src.app.services.otp_notifier import IOtpNotifier, redact_destination
from src.domain.entities import OTP_TTL

logger = logging.getLogger(__name__)


class SmtpOtpNotifier(IOtpNotifier):
    """Email delivery for one-time codes"""

    def __init__(
        self,
        *,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        smtp_use_tls: bool = True,
        from_email: Optional[str] = None,
        timeout: float = 30,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.from_email = from_email or smtp_user
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "SmtpOtpNotifier":
        return cls(
            smtp_host=config.SMTP_HOST,
            smtp_port=config.SMTP_PORT,
            smtp_user=config.SMTP_USER,
            smtp_password=config.SMTP_PASSWORD,
            smtp_use_tls=config.SMTP_USE_TLS,
            from_email=config.MAIL_FROM,
        )

    @property
    def is_configured(self) -> bool:
        """Check if email sending is properly configured."""
        return bool(self.smtp_host and self.from_email)

    def build_message(self, destination: str, code: str) -> EmailMessage:
        minutes = int(OTP_TTL.total_seconds() // 60)
        message = EmailMessage()
        message["Subject"] = "Your Password Reset OTP"
        message["From"] = self.from_email
        message["To"] = destination
        message.set_content(
            f"Your OTP for password reset is: {code}\n"
            f"This OTP is valid for {minutes} minutes."
        )
        return message

    async def deliver(self, destination: str, code: str) -> None:
        if not self.is_configured:
            logger.warning(
                f"SMTP not configured; OTP for {redact_destination(destination)} not sent"
            )
            logger.debug(f"Dev mode OTP for {destination}: {code}")
            return

        message = self.build_message(destination, code)
        await run_in_threadpool(self._send, message)
        logger.info(f"OTP email sent to {redact_destination(destination)}")

    def _send(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self.smtp_use_tls:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                server.starttls(context=context)
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(message)
        else:
            with smtplib.SMTP_SSL(
                self.smtp_host, self.smtp_port, context=context, timeout=self.timeout
            ) as server:
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(message)

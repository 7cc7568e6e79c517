"""SMTP delivery for the email notification tool."""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage

from application.settings import Settings
from domain.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)


class SmtpMailSender:
    """Sends plain-text emails through an SMTP relay.

    smtplib is blocking, so each send runs in a worker thread.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailSender":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.email_sender,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
        )

    async def send(self, recipient: str, subject: str, body: str) -> None:
        """Send an email.

        Raises:
            ToolExecutionError: If the SMTP exchange fails
        """
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(body)

        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"📧 Email delivery to {recipient} failed: {e}")
            raise ToolExecutionError(f"Failed to send email: {e}", tool_name="sendEmail") from e

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._use_tls:
                smtp.starttls(context=ssl.create_default_context())
            if self._username and self._password:
                smtp.login(self._username, self._password)
            smtp.send_message(message)

"""Email notification tool.

Sends a notification to the configured receiver on the assistant's
behalf. Delivery goes through a MailSender so the transport can be
swapped (SMTP in production, a mock in tests).
"""

import logging
from typing import Any, Protocol

from application.settings import Settings
from domain.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)

SEND_EMAIL = "sendEmail"

SEND_EMAIL_DESCRIPTION = "Send an email notification with a subject and a body to the configured receiver."

SEND_EMAIL_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "subject": {
            "type": "string",
            "description": "The subject line of the email",
        },
        "body": {
            "type": "string",
            "description": "The plain-text body of the email",
        },
    },
    "required": ["subject", "body"],
}


class MailSender(Protocol):
    """Delivers a plain-text email."""

    async def send(self, recipient: str, subject: str, body: str) -> None:
        """Send the message.

        Raises:
            ToolExecutionError: If delivery fails
        """
        ...


async def execute_send_email(arguments: dict[str, Any], settings: Settings, mail_sender: MailSender) -> str:
    """Execute the sendEmail tool.

    Raises:
        ToolExecutionError: If no receiver is configured or delivery fails
    """
    subject = str(arguments.get("subject") or "")
    body = str(arguments.get("body") or "")

    if settings.openai_function_calling_skip_send_email:
        logger.info(f"📧 Skipping email send (subject: {subject!r})")
        return "Email sending skipped"

    recipient = settings.email_receiver
    if not recipient:
        raise ToolExecutionError("EMAIL_RECEIVER is not configured", tool_name=SEND_EMAIL)

    await mail_sender.send(recipient, subject, body)
    logger.info(f"📧 Email sent to {recipient} (subject: {subject!r})")
    return f"Email sent to {recipient}"

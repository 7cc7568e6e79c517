"""Infrastructure layer: provider and mail transport implementations."""

from .adapters import AzureOpenAiAssistantsProvider, to_provider_event
from .smtp_mail_sender import SmtpMailSender

__all__ = [
    "AzureOpenAiAssistantsProvider",
    "SmtpMailSender",
    "to_provider_event",
]

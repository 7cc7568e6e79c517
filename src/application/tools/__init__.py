"""Built-in tools and the static assistant definition.

Tools available to the assistant:
- getStockPrice: Mock stock price lookup
- sendEmail: Email notification to the configured receiver
"""

import logging
from functools import partial

from application.services.tool_registry import ToolRegistry
from application.settings import Settings
from domain.models import AssistantDefinition

from .notification_tools import SEND_EMAIL, SEND_EMAIL_DESCRIPTION, SEND_EMAIL_PARAMETERS, MailSender, execute_send_email
from .stock_tools import GET_STOCK_PRICE, GET_STOCK_PRICE_DESCRIPTION, GET_STOCK_PRICE_PARAMETERS, MOCK_QUOTES, execute_get_stock_price

logger = logging.getLogger(__name__)

ASSISTANT_NAME = "Portfolio Assistant"

ASSISTANT_INSTRUCTIONS = (
    "You are a helpful assistant for stock portfolio questions. "
    "Use the getStockPrice function to look up current prices, "
    "use the sendEmail function when the user asks to be notified, "
    "and use file search to answer questions about attached documents."
)

FILE_SEARCH_TOOL = {"type": "file_search"}


def build_tool_registry(settings: Settings, mail_sender: MailSender) -> ToolRegistry:
    """Create the registry holding every built-in tool."""
    registry = ToolRegistry()
    registry.register(GET_STOCK_PRICE, GET_STOCK_PRICE_DESCRIPTION, GET_STOCK_PRICE_PARAMETERS, execute_get_stock_price)
    registry.register(
        SEND_EMAIL,
        SEND_EMAIL_DESCRIPTION,
        SEND_EMAIL_PARAMETERS,
        partial(execute_send_email, settings=settings, mail_sender=mail_sender),
    )
    logger.info(f"🔧 Tool registry ready with {len(registry)} tool(s)")
    return registry


def build_assistant_definition(settings: Settings, registry: ToolRegistry) -> AssistantDefinition:
    """Static definition used when no ASSISTANT_ID is configured."""
    return AssistantDefinition(
        name=ASSISTANT_NAME,
        instructions=ASSISTANT_INSTRUCTIONS,
        model=settings.azure_deployment_name or "",
        tools=[*registry.to_openai_tools(), FILE_SEARCH_TOOL],
    )


__all__ = [
    "ASSISTANT_NAME",
    "ASSISTANT_INSTRUCTIONS",
    "FILE_SEARCH_TOOL",
    "GET_STOCK_PRICE",
    "MOCK_QUOTES",
    "SEND_EMAIL",
    "MailSender",
    "build_assistant_definition",
    "build_tool_registry",
    "execute_get_stock_price",
    "execute_send_email",
]

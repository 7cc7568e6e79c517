"""Application services package.

Contains the run orchestrator and the collaborators it drives.
"""

from .assistant_service import AssistantService, RunState
from .conversation_provider import ConversationProvider
from .event_translator import EventTranslator, RunSignal, TranslatedEvent
from .tool_dispatcher import UNKNOWN_FUNCTION_OUTPUT, ToolDispatcher
from .tool_registry import ToolDefinition, ToolHandler, ToolRegistry

__all__ = [
    "AssistantService",
    "RunState",
    "ConversationProvider",
    "EventTranslator",
    "RunSignal",
    "TranslatedEvent",
    "ToolDispatcher",
    "UNKNOWN_FUNCTION_OUTPUT",
    "ToolDefinition",
    "ToolHandler",
    "ToolRegistry",
]

"""Domain models (value objects) for the assistant relay."""

from .assistant_definition import AssistantDefinition, AssistantInfo
from .assistant_request import AssistantRequest
from .output_chunk import ERROR_PREFIX, STATUS_CREATED, STATUS_IN_PROGRESS, STATUS_QUEUED, STATUS_SENTINELS, THREAD_SENTINEL_PREFIX, error_chunk, is_sentinel, thread_sentinel
from .provider_event import ProviderEvent, ProviderEventKind, ToolCall, ToolOutput

__all__ = [
    "AssistantDefinition",
    "AssistantInfo",
    "AssistantRequest",
    "ProviderEvent",
    "ProviderEventKind",
    "ToolCall",
    "ToolOutput",
    "STATUS_CREATED",
    "STATUS_QUEUED",
    "STATUS_IN_PROGRESS",
    "STATUS_SENTINELS",
    "THREAD_SENTINEL_PREFIX",
    "ERROR_PREFIX",
    "thread_sentinel",
    "error_chunk",
    "is_sentinel",
]

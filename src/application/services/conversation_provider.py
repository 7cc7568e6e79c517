"""Conversation provider interface.

The orchestrator only depends on this protocol. The Azure OpenAI
Assistants adapter in infrastructure implements it. Tests use a
scripted fake.
"""

from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from domain.models import AssistantDefinition, AssistantInfo, ProviderEvent, ToolOutput


class ConversationProvider(Protocol):
    """Protocol for the hosted conversational-assistant service.

    Non-streaming calls raise ProviderError on failure. The two streaming
    calls return async iterators of normalized ProviderEvents; they are
    closed by the caller as soon as it stops consuming them.
    """

    async def retrieve_assistant(self, assistant_id: str) -> AssistantInfo:
        """Get an existing assistant by ID."""
        ...

    async def create_assistant(self, definition: AssistantDefinition) -> AssistantInfo:
        """Create an assistant from a static definition."""
        ...

    async def retrieve_thread(self, thread_id: str) -> str:
        """Resolve an existing thread, returning its ID."""
        ...

    async def create_thread(self) -> str:
        """Create a new thread, returning its ID."""
        ...

    async def create_message(self, thread_id: str, content: str, file_ids: Sequence[str] = ()) -> str:
        """Append a user message (with file_search attachments) to a thread."""
        ...

    def stream_run(self, thread_id: str, assistant_id: str) -> AsyncIterator[ProviderEvent]:
        """Start a run on the thread and stream its events."""
        ...

    def submit_tool_outputs(self, thread_id: str, run_id: str, tool_outputs: Sequence[ToolOutput]) -> AsyncIterator[ProviderEvent]:
        """Submit tool outputs for a run and stream the continuation events."""
        ...

    async def close(self) -> None:
        """Release any resources held by the provider."""
        ...

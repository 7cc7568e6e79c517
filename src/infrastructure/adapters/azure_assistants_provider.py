"""Azure OpenAI Assistants provider implementation.

This module provides the Azure OpenAI implementation of the
ConversationProvider protocol on top of the openai SDK's AsyncAzureOpenAI
client (beta Assistants API).

Features:
- Assistant retrieval and creation from a static definition
- Thread retrieval/creation and user messages with file_search attachments
- Streaming runs and streaming tool-output submissions
- SDK events normalized into ProviderEvents
- OpenTelemetry tracing of the non-streaming calls
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import Any

import httpx
import openai
from opentelemetry import trace

from application.settings import Settings
from domain.exceptions import ConfigurationError, ProviderError
from domain.models import AssistantDefinition, AssistantInfo, ProviderEvent, ToolCall, ToolOutput

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

RETRYABLE_ERRORS = (openai.APIConnectionError, openai.APITimeoutError, openai.RateLimitError, openai.InternalServerError)


def to_provider_event(raw: Any) -> ProviderEvent:
    """Normalize one SDK stream event.

    Message deltas carry the concatenation of their text blocks. Run events
    carry the run/thread IDs, last_error.message and the pending tool calls.
    """
    kind = getattr(raw, "event", None) or "unknown"
    data = getattr(raw, "data", None)

    if kind == "thread.message.delta":
        delta = getattr(data, "delta", None)
        parts = []
        for block in getattr(delta, "content", None) or []:
            text = getattr(block, "text", None)
            value = getattr(text, "value", None)
            if value:
                parts.append(value)
        return ProviderEvent(kind=kind, text="".join(parts) or None)

    if not kind.startswith("thread.run.") or kind.startswith("thread.run.step."):
        return ProviderEvent(kind=kind)

    last_error = getattr(data, "last_error", None)
    required_action = getattr(data, "required_action", None)
    submit = getattr(required_action, "submit_tool_outputs", None)
    tool_calls = tuple(
        ToolCall(
            id=tool_call.id,
            function_name=tool_call.function.name,
            arguments_json=tool_call.function.arguments or "",
        )
        for tool_call in getattr(submit, "tool_calls", None) or []
    )

    return ProviderEvent(
        kind=kind,
        run_id=getattr(data, "id", None),
        thread_id=getattr(data, "thread_id", None),
        error_message=getattr(last_error, "message", None),
        tool_calls=tool_calls,
    )


class AzureOpenAiAssistantsProvider:
    """Azure OpenAI Assistants implementation of the ConversationProvider protocol.

    Usage:
        provider = AzureOpenAiAssistantsProvider.from_settings(settings)
        thread_id = await provider.create_thread()
        async for event in provider.stream_run(thread_id, assistant_id):
            ...
    """

    PROVIDER_NAME = "azure-openai"

    def __init__(self, client: openai.AsyncAzureOpenAI) -> None:
        """Initialize the provider.

        Args:
            client: Configured SDK client (owned by the provider, closed by close())
        """
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "AzureOpenAiAssistantsProvider":
        """Build the provider and its SDK client from settings.

        Raises:
            ConfigurationError: If the API key or the endpoint is missing
        """
        if not settings.has_provider_credentials:
            raise ConfigurationError("AZURE_OPENAI_API_KEY and AZURE_OPENAI_ENDPOINT must be set")

        logger.info(f"🔑 Creating Azure OpenAI client for {settings.azure_openai_endpoint} (API version {settings.openai_api_version})")
        client = openai.AsyncAzureOpenAI(
            api_key=settings.azure_openai_api_key,
            azure_endpoint=settings.azure_openai_endpoint,
            api_version=settings.openai_api_version,
            http_client=httpx.AsyncClient(timeout=settings.provider_timeout),
        )
        return cls(client)

    # =========================================================================
    # Assistants and threads
    # =========================================================================

    async def retrieve_assistant(self, assistant_id: str) -> AssistantInfo:
        with tracer.start_as_current_span("azure_openai.assistants.retrieve") as span:
            span.set_attribute("assistant.id", assistant_id)
            try:
                assistant = await self._client.beta.assistants.retrieve(assistant_id)
            except openai.OpenAIError as e:
                raise self._provider_error(e, "assistants.retrieve") from e
            return AssistantInfo(id=assistant.id, name=assistant.name)

    async def create_assistant(self, definition: AssistantDefinition) -> AssistantInfo:
        with tracer.start_as_current_span("azure_openai.assistants.create") as span:
            span.set_attribute("assistant.model", definition.model)
            try:
                assistant = await self._client.beta.assistants.create(**definition.to_create_params())
            except openai.OpenAIError as e:
                raise self._provider_error(e, "assistants.create") from e
            return AssistantInfo(id=assistant.id, name=assistant.name)

    async def retrieve_thread(self, thread_id: str) -> str:
        with tracer.start_as_current_span("azure_openai.threads.retrieve"):
            try:
                thread = await self._client.beta.threads.retrieve(thread_id)
            except openai.OpenAIError as e:
                raise self._provider_error(e, "threads.retrieve") from e
            return thread.id

    async def create_thread(self) -> str:
        with tracer.start_as_current_span("azure_openai.threads.create"):
            try:
                thread = await self._client.beta.threads.create()
            except openai.OpenAIError as e:
                raise self._provider_error(e, "threads.create") from e
            return thread.id

    async def create_message(self, thread_id: str, content: str, file_ids: Sequence[str] = ()) -> str:
        params: dict[str, Any] = {"role": "user", "content": content}
        if file_ids:
            params["attachments"] = [{"file_id": file_id, "tools": [{"type": "file_search"}]} for file_id in file_ids]

        with tracer.start_as_current_span("azure_openai.messages.create") as span:
            span.set_attribute("message.attachments", len(file_ids))
            try:
                message = await self._client.beta.threads.messages.create(thread_id, **params)
            except openai.OpenAIError as e:
                raise self._provider_error(e, "messages.create") from e
            return message.id

    # =========================================================================
    # Runs
    # =========================================================================

    def stream_run(self, thread_id: str, assistant_id: str) -> AsyncIterator[ProviderEvent]:
        return self._stream(
            "runs.create",
            lambda: self._client.beta.threads.runs.create(thread_id=thread_id, assistant_id=assistant_id, stream=True),
        )

    def submit_tool_outputs(self, thread_id: str, run_id: str, tool_outputs: Sequence[ToolOutput]) -> AsyncIterator[ProviderEvent]:
        return self._stream(
            "runs.submit_tool_outputs",
            lambda: self._client.beta.threads.runs.submit_tool_outputs(
                run_id,
                thread_id=thread_id,
                tool_outputs=[tool_output.to_dict() for tool_output in tool_outputs],
                stream=True,
            ),
        )

    async def _stream(self, operation: str, open_stream: Callable[[], Awaitable[Any]]) -> AsyncIterator[ProviderEvent]:
        """Open an SDK event stream and relay its events until closed."""
        try:
            stream = await open_stream()
        except openai.OpenAIError as e:
            raise self._provider_error(e, operation) from e

        try:
            async for raw in stream:
                yield to_provider_event(raw)
        except openai.OpenAIError as e:
            raise self._provider_error(e, operation) from e
        finally:
            await stream.close()

    async def close(self) -> None:
        """Close the SDK client and its HTTP connection pool."""
        await self._client.close()

    def _provider_error(self, e: openai.OpenAIError, operation: str) -> ProviderError:
        details: dict[str, Any] = {"provider": self.PROVIDER_NAME}
        if isinstance(e, openai.APIStatusError):
            details["status_code"] = e.status_code
        message = getattr(e, "message", None) or str(e)
        logger.error(f"❌ Azure OpenAI {operation} failed: {message}")
        return ProviderError(message, operation=operation, is_retryable=isinstance(e, RETRYABLE_ERRORS), details=details)

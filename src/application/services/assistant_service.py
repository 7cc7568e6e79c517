"""Assistant service orchestrating a run and its tool calls.

This service is the high-level orchestrator that:
- Resolves (or creates) the assistant and the conversation thread
- Posts the user message, with file attachments, to the thread
- Relays the run's events to the caller as text chunks and sentinels
- Dispatches tool calls when the run requires action and resumes
  relaying the continuation stream, for as many rounds as the provider asks

Every failure inside the orchestration becomes a final "Error: ..."
chunk so the outward stream always terminates cleanly.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import aclosing
from enum import Enum

from opentelemetry import trace

from application.services.conversation_provider import ConversationProvider
from application.services.event_translator import EventTranslator, RunSignal
from application.services.tool_dispatcher import ToolDispatcher
from application.services.tool_registry import ToolRegistry
from application.settings import Settings
from domain.exceptions import ConfigurationError, DomainError, ProviderError
from domain.models import AssistantDefinition, AssistantRequest, ProviderEvent, ToolOutput, error_chunk, is_sentinel, thread_sentinel
from observability import run_outcomes, run_stream_duration, run_tool_rounds

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class RunState(str, Enum):
    """States of the relay loop once the message has been posted."""

    STREAMING = "streaming"
    REQUIRES_ACTION = "requires_action"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATES = (RunState.COMPLETED, RunState.FAILED)


class AssistantService:
    """
    Orchestrates one assistant conversation turn per request.

    Responsibilities:
    - Resolving the configured assistant, or creating one from the static
      definition (cached for the lifetime of the service)
    - Reusing the caller's thread when the provider still knows it
    - Driving the Streaming -> RequiresAction -> Submitting -> Streaming
      loop until a terminal event or the end of the provider stream

    The service holds no per-request state and can be shared by all requests.
    """

    def __init__(
        self,
        provider: ConversationProvider,
        tool_registry: ToolRegistry,
        settings: Settings,
        assistant_definition: AssistantDefinition | None = None,
        translator: EventTranslator | None = None,
        dispatcher: ToolDispatcher | None = None,
    ) -> None:
        """
        Initialize the assistant service.

        Args:
            provider: Conversation provider (Azure OpenAI Assistants in production)
            tool_registry: Tools the assistant may call
            settings: Application settings
            assistant_definition: Definition used when no ASSISTANT_ID is configured
            translator: Event translator (default: EventTranslator())
            dispatcher: Tool dispatcher (default: ToolDispatcher(tool_registry))
        """
        self._provider = provider
        self._settings = settings
        self._assistant_definition = assistant_definition
        self._translator = translator or EventTranslator()
        self._dispatcher = dispatcher or ToolDispatcher(tool_registry)
        self._created_assistant_id: str | None = None
        self._assistant_lock = asyncio.Lock()

    async def process_message(self, request: AssistantRequest) -> AsyncIterator[str]:
        """
        Relay a user message to the assistant and stream the response.

        Args:
            request: The user's query, attachments and optional thread to continue

        Yields:
            Output chunks: conversation text or sentinels ("@created", "@thread:<id>", "Error: ...")
        """
        start_time = time.time()
        event_count = 0
        tool_rounds = 0
        content_chunks = 0
        outcome = "cancelled"

        span = tracer.start_span("assistant.process_message")
        span.set_attribute("assistant.message_length", len(request.message))
        span.set_attribute("assistant.file_count", len(request.file_ids))
        span.set_attribute("assistant.continuation", request.supports_continuation)

        # Current for the whole relay so dispatch and provider spans nest under it
        with trace.use_span(span, end_on_exit=False, record_exception=False, set_status_on_exception=False):
            try:
                assistant_id = await self._resolve_assistant()

                thread_id, created = await self._resolve_thread(request.thread_id)
                span.set_attribute("assistant.thread_id", thread_id)
                if created and request.supports_continuation:
                    yield thread_sentinel(thread_id)

                message_id = await self._provider.create_message(thread_id, request.message, request.file_ids)
                log.info(f"💬 Message {message_id} added to thread {thread_id} ({len(request.file_ids)} attachment(s))")

                events: AsyncIterator[ProviderEvent] = self._provider.stream_run(thread_id, assistant_id)
                pending: ProviderEvent | None = None
                tool_outputs: list[ToolOutput] = []
                state = RunState.STREAMING

                while state not in TERMINAL_STATES:
                    if state is RunState.STREAMING:
                        # A stream that ends without a terminal event is treated as completed
                        state = RunState.COMPLETED
                        async with aclosing(events) as stream:
                            async for event in stream:
                                event_count += 1
                                log.debug(f"📦 Event {event_count}: {event.describe()}")

                                translated = self._translator.translate(event)
                                for chunk in translated.chunks:
                                    if not is_sentinel(chunk):
                                        content_chunks += 1
                                    yield chunk

                                if translated.signal is RunSignal.DISPATCH_REQUIRED:
                                    pending = event
                                    state = RunState.REQUIRES_ACTION
                                    break
                                if translated.signal is RunSignal.FAILED:
                                    state = RunState.FAILED
                                    break
                                if translated.signal is RunSignal.COMPLETED:
                                    break

                    elif state is RunState.REQUIRES_ACTION:
                        tool_rounds += 1
                        log.info(f"🔧 Run requires action (round {tool_rounds})")
                        tool_outputs = await self._dispatcher.dispatch(pending.tool_calls)
                        state = RunState.SUBMITTING

                    elif state is RunState.SUBMITTING:
                        events = self._provider.submit_tool_outputs(pending.thread_id or thread_id, pending.run_id, tool_outputs)
                        pending = None
                        state = RunState.STREAMING

                outcome = state.value
                log.info(f"🎉 Processing complete! Handled {event_count} events, {tool_rounds} tool round(s), outcome: {outcome}")

            except ProviderError as e:
                outcome = "error"
                log.error(f"💥 Provider error while processing message: {e.to_dict()}")
                span.record_exception(e)
                yield error_chunk(e.message)

            except DomainError as e:
                outcome = "error"
                log.error(f"💥 Error while processing message: {e}")
                span.record_exception(e)
                yield error_chunk(e.message)

            except Exception as e:
                outcome = "error"
                log.exception(f"💥 Unexpected error while processing message: {e}")
                span.record_exception(e)
                yield error_chunk(str(e))

            finally:
                span.set_attribute("assistant.outcome", outcome)
                span.set_attribute("assistant.event_count", event_count)
                span.set_attribute("assistant.content_chunks", content_chunks)
                span.end()
                run_outcomes.add(1, {"outcome": outcome})
                run_tool_rounds.record(tool_rounds)
                run_stream_duration.record((time.time() - start_time) * 1000, {"outcome": outcome})

    async def _resolve_assistant(self) -> str:
        """Get the ID of the assistant to run.

        Raises:
            ProviderError: If the configured assistant cannot be retrieved
            ConfigurationError: If neither an ID nor a definition is available
        """
        if self._settings.assistant_id:
            assistant = await self._provider.retrieve_assistant(self._settings.assistant_id)
            log.info(f"🤖 Assistant retrieved: {assistant.name or assistant.id}")
            return assistant.id

        if self._created_assistant_id is not None:
            return self._created_assistant_id

        if self._assistant_definition is None:
            raise ConfigurationError("ASSISTANT_ID is not set and no assistant definition is available")

        async with self._assistant_lock:
            if self._created_assistant_id is None:
                assistant = await self._provider.create_assistant(self._assistant_definition)
                self._created_assistant_id = assistant.id
                log.info(f"🤖 Assistant created: {assistant.id} ({self._assistant_definition.name})")
        return self._created_assistant_id

    async def _resolve_thread(self, thread_id: str | None) -> tuple[str, bool]:
        """Reuse the caller's thread or create a new one.

        Returns:
            The thread ID and whether it was newly created
        """
        if thread_id:
            try:
                existing_id = await self._provider.retrieve_thread(thread_id)
                log.info(f"🧵 Using existing thread: {existing_id}")
                return existing_id, False
            except ProviderError as e:
                log.warning(f"⚠️ Thread {thread_id} not found, creating a new one: {e.message}")

        new_id = await self._provider.create_thread()
        log.info(f"🧵 Thread created: {new_id}")
        return new_id, True

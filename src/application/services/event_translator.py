"""Translation of provider events into outward stream chunks.

The translator is stateless: each ProviderEvent maps to zero or more
output chunks plus an optional control signal for the orchestrator.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from domain.models import STATUS_CREATED, STATUS_IN_PROGRESS, STATUS_QUEUED, ProviderEvent, ProviderEventKind, error_chunk

log = logging.getLogger(__name__)

DEFAULT_RUN_FAILURE_MESSAGE = "Run failed"


class RunSignal(str, Enum):
    """Control transitions detected while relaying a run."""

    DISPATCH_REQUIRED = "dispatch_required"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class TranslatedEvent:
    """Result of translating one provider event."""

    chunks: list[str] = field(default_factory=list)
    signal: RunSignal | None = None

    @property
    def is_terminal(self) -> bool:
        return self.signal in (RunSignal.COMPLETED, RunSignal.FAILED)


class EventTranslator:
    """Maps provider events onto the sentinel/content stream.

    | Event kind                 | Chunks                  | Signal            |
    |----------------------------|-------------------------|-------------------|
    | thread.run.created         | @created                |                   |
    | thread.run.queued          | @queued                 |                   |
    | thread.run.in_progress     | @in_progress            |                   |
    | thread.message.delta       | text (if non-empty)     |                   |
    | thread.run.failed          | Error: <message>        | FAILED            |
    | thread.run.completed       |                         | COMPLETED         |
    | thread.run.requires_action |                         | DISPATCH_REQUIRED |
    | anything else              |                         |                   |
    """

    def translate(self, event: ProviderEvent) -> TranslatedEvent:
        kind = event.kind

        if kind == ProviderEventKind.RUN_CREATED:
            return TranslatedEvent(chunks=[STATUS_CREATED])

        if kind == ProviderEventKind.RUN_QUEUED:
            return TranslatedEvent(chunks=[STATUS_QUEUED])

        if kind == ProviderEventKind.RUN_IN_PROGRESS:
            return TranslatedEvent(chunks=[STATUS_IN_PROGRESS])

        if kind == ProviderEventKind.MESSAGE_DELTA:
            if event.text:
                return TranslatedEvent(chunks=[event.text])
            return TranslatedEvent()

        if kind == ProviderEventKind.RUN_FAILED:
            message = event.error_message or DEFAULT_RUN_FAILURE_MESSAGE
            log.error(f"❌ Run failed: {message}")
            return TranslatedEvent(chunks=[error_chunk(message)], signal=RunSignal.FAILED)

        if kind == ProviderEventKind.RUN_COMPLETED:
            return TranslatedEvent(signal=RunSignal.COMPLETED)

        if kind == ProviderEventKind.RUN_REQUIRES_ACTION:
            return TranslatedEvent(signal=RunSignal.DISPATCH_REQUIRED)

        log.debug(f"🔍 Ignoring event: {kind}")
        return TranslatedEvent()

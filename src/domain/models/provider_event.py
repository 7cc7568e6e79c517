"""Provider event value objects.

A run on the conversation provider emits a sequence of lifecycle and
content events. The infrastructure adapter normalizes each SDK event into
a ProviderEvent so the relay never depends on SDK types.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ProviderEventKind(str, Enum):
    """Provider event names the relay reacts to.

    Any other event name is carried through as a plain string and ignored.
    """

    RUN_CREATED = "thread.run.created"
    RUN_QUEUED = "thread.run.queued"
    RUN_IN_PROGRESS = "thread.run.in_progress"
    RUN_REQUIRES_ACTION = "thread.run.requires_action"
    RUN_COMPLETED = "thread.run.completed"
    RUN_FAILED = "thread.run.failed"
    MESSAGE_DELTA = "thread.message.delta"


@dataclass(frozen=True)
class ToolCall:
    """A function call requested by the assistant.

    Attributes:
        id: Provider-issued identifier, echoed back in the matching ToolOutput
        function_name: Name of the registered tool to invoke
        arguments_json: Raw JSON-encoded arguments as sent by the provider
    """

    id: str
    function_name: str
    arguments_json: str = "{}"


@dataclass(frozen=True)
class ToolOutput:
    """The answer to exactly one ToolCall."""

    tool_call_id: str
    output: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the provider's submission format."""
        return {"tool_call_id": self.tool_call_id, "output": self.output}


@dataclass(frozen=True)
class ProviderEvent:
    """A normalized event emitted while a run executes.

    Attributes:
        kind: Provider event name (e.g. "thread.run.created")
        run_id: Run the event belongs to, when the payload is a run
        thread_id: Thread the event belongs to, when known
        text: Text carried by a message delta (None when absent)
        error_message: last_error.message of a failed run
        tool_calls: Pending calls of a requires-action run
    """

    kind: str
    run_id: str | None = None
    thread_id: str | None = None
    text: str | None = None
    error_message: str | None = None
    tool_calls: tuple[ToolCall, ...] = field(default_factory=tuple)

    @property
    def requires_action(self) -> bool:
        return self.kind == ProviderEventKind.RUN_REQUIRES_ACTION

    def describe(self) -> str:
        """Short description for logging."""
        details: dict[str, Any] = {"run_id": self.run_id}
        if self.tool_calls:
            details["tool_calls"] = [tc.function_name for tc in self.tool_calls]
        if self.error_message:
            details["error"] = self.error_message
        return f"{self.kind} {json.dumps(details)}"

"""AssistantRequest value object."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AssistantRequest:
    """A user query to relay to the assistant.

    Attributes:
        message: The user's natural-language query
        file_ids: Provider file IDs attached for retrieval (file_search)
        thread_id: Thread to continue, as supplied by the caller
        supports_continuation: Whether the caller understands the "@thread:" sentinel.
            False for legacy plain-text requests.
    """

    message: str
    file_ids: tuple[str, ...] = field(default_factory=tuple)
    thread_id: str | None = None
    supports_continuation: bool = True

    @classmethod
    def legacy(cls, message: str) -> "AssistantRequest":
        """Create a request from a legacy plain-text body (no continuation, no attachments)."""
        return cls(message=message, supports_continuation=False)

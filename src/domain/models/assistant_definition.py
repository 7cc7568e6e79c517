"""Assistant definition value objects."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AssistantInfo:
    """An assistant as known to the provider."""

    id: str
    name: str | None = None


@dataclass(frozen=True)
class AssistantDefinition:
    """Static definition used to create an assistant when none is configured.

    Attributes:
        name: Display name of the assistant
        instructions: System instructions
        model: Deployment/model name the assistant runs on
        tools: Tool descriptors in the provider's format
    """

    name: str
    instructions: str
    model: str
    tools: list[dict[str, Any]] = field(default_factory=list)

    def to_create_params(self) -> dict[str, Any]:
        """Convert to keyword arguments for the provider's create call."""
        return {
            "name": self.name,
            "instructions": self.instructions,
            "model": self.model,
            "tools": list(self.tools),
        }

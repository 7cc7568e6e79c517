"""Tool registry mapping tool names to handlers and schemas.

The registry is populated once at startup and only read while requests
are being handled. Side effects happen entirely inside the handlers.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from domain.exceptions import ToolNotFoundError

log = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDefinition:
    """A tool the assistant may call.

    Attributes:
        name: Unique function name advertised to the provider
        description: Human-readable description for the model
        parameters: JSON Schema of the function arguments
        handler: Async callable receiving the parsed arguments
    """

    name: str
    description: str
    handler: ToolHandler
    parameters: dict[str, Any] = field(default_factory=dict)

    def to_openai_format(self) -> dict[str, Any]:
        """Convert to OpenAI function tool format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolRegistry:
    """Registry of tools available to the assistant.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register("getStockPrice", "Look up a quote", schema, get_stock_price)
        >>> handler = registry.lookup("getStockPrice")
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(
        self,
        name: str,
        description: str,
        parameters: dict[str, Any],
        handler: ToolHandler,
    ) -> ToolDefinition:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")

        definition = ToolDefinition(name=name, description=description, handler=handler, parameters=parameters)
        self._tools[name] = definition
        log.debug(f"🔧 Registered tool: {name}")
        return definition

    def lookup(self, name: str) -> ToolHandler:
        """Get the handler registered under a name.

        Raises:
            ToolNotFoundError: If no tool has that name
        """
        definition = self._tools.get(name)
        if definition is None:
            raise ToolNotFoundError(name)
        return definition.handler

    def definitions(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def to_openai_tools(self) -> list[dict[str, Any]]:
        """Tool descriptors in registration order, in OpenAI function format."""
        return [definition.to_openai_format() for definition in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

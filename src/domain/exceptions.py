"""Domain exceptions for the assistant relay.

This module contains the exceptions raised across the relay when a
request, a provider call or a tool invocation cannot be satisfied.
"""

from typing import Any


class DomainError(Exception):
    """Base exception for assistant relay failures.

    Attributes:
        message: Human-readable description of the failure.
        code: Optional error code for programmatic handling.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(DomainError):
    """Raised at startup when required configuration is missing."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR")


class RequestValidationError(DomainError):
    """Raised when an incoming request body cannot be turned into an AssistantRequest."""

    def __init__(self, message: str, is_parse_error: bool = False) -> None:
        super().__init__(message, code="INVALID_REQUEST")
        self.is_parse_error = is_parse_error


class ProviderError(DomainError):
    """Raised when a call to the conversation provider fails.

    Attributes:
        operation: The provider operation that failed (e.g. "threads.retrieve")
        is_retryable: Whether the operation might succeed on retry
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        operation: str,
        is_retryable: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code="PROVIDER_ERROR")
        self.operation = operation
        self.is_retryable = is_retryable
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "message": self.message,
            "operation": self.operation,
            "is_retryable": self.is_retryable,
            "details": self.details,
        }


class ToolExecutionError(DomainError):
    """Raised by a tool handler when it cannot produce a result."""

    def __init__(self, message: str, tool_name: str | None = None) -> None:
        super().__init__(message, code="TOOL_EXECUTION_ERROR")
        self.tool_name = tool_name


class ToolNotFoundError(DomainError):
    """Raised when a tool name is not registered."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Tool not found: {tool_name}", code="TOOL_NOT_FOUND")
        self.tool_name = tool_name

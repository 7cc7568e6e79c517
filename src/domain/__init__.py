"""Domain layer for the assistant relay.

Contains the value objects exchanged with the conversation provider and
the exceptions raised across the relay.
"""

from .exceptions import ConfigurationError, DomainError, ProviderError, RequestValidationError, ToolExecutionError, ToolNotFoundError

__all__ = [
    "DomainError",
    "ConfigurationError",
    "RequestValidationError",
    "ProviderError",
    "ToolExecutionError",
    "ToolNotFoundError",
]

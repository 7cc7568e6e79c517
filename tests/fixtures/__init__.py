"""Test fixtures package."""

from .factories import FakeConversationProvider, ProviderEventFactory, ToolCallFactory, collect

__all__ = [
    "FakeConversationProvider",
    "ProviderEventFactory",
    "ToolCallFactory",
    "collect",
]

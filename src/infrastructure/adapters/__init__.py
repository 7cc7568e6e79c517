"""Infrastructure adapters for the Assistant Relay."""

from infrastructure.adapters.azure_assistants_provider import AzureOpenAiAssistantsProvider, to_provider_event

__all__ = [
    "AzureOpenAiAssistantsProvider",
    "to_provider_event",
]

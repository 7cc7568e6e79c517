"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Test configuration and markers
- Settings built without reading the environment file
- Mail sender mock and tool registry
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from _pytest.config import Config

from application.services import ToolRegistry
from application.settings import Settings
from application.tools import build_tool_registry

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Register the asyncio marker."""
    config.addinivalue_line("markers", "asyncio: Async tests")


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================


def build_settings(**overrides) -> Settings:
    """Build Settings with test credentials, ignoring any .env file."""
    values = {
        "assistant_id": "asst_configured",
        "azure_deployment_name": "gpt-4o-test",
        "azure_openai_endpoint": "https://example.openai.azure.com",
        "azure_openai_api_key": "test-key",  # pragma: allowlist secret
        "email_receiver": "alerts@example.com",
        "otel_enabled": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory():
    """Factory building Settings with overrides."""
    return build_settings


@pytest.fixture
def settings() -> Settings:
    """Settings with a configured assistant and credentials."""
    return build_settings()


# ============================================================================
# TOOL FIXTURES
# ============================================================================


@pytest.fixture
def mail_sender() -> MagicMock:
    """Mock MailSender."""
    sender = MagicMock()
    sender.send = AsyncMock(return_value=None)
    return sender


@pytest.fixture
def tool_registry(settings: Settings, mail_sender: MagicMock) -> ToolRegistry:
    """Registry holding the built-in tools."""
    return build_tool_registry(settings, mail_sender)

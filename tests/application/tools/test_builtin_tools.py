"""Unit tests for the built-in tools.

Tests cover:
- getStockPrice quotes and failures
- sendEmail delivery, skip flag and missing receiver
- Registry wiring and the static assistant definition
"""

import pytest

from application.tools import (
    ASSISTANT_NAME,
    FILE_SEARCH_TOOL,
    build_assistant_definition,
    build_tool_registry,
    execute_get_stock_price,
    execute_send_email,
)
from domain.exceptions import ToolExecutionError


class TestGetStockPrice:
    """Test the mock stock price lookup."""

    @pytest.mark.asyncio
    async def test_known_symbol(self):
        assert await execute_get_stock_price({"symbol": "AAPL"}) == "$123.45"

    @pytest.mark.asyncio
    async def test_symbol_is_normalized(self):
        assert await execute_get_stock_price({"symbol": " msft "}) == "$415.20"

    @pytest.mark.asyncio
    async def test_blank_symbol(self):
        with pytest.raises(ToolExecutionError, match="Symbol is required"):
            await execute_get_stock_price({"symbol": "  "})

    @pytest.mark.asyncio
    async def test_missing_symbol(self):
        with pytest.raises(ToolExecutionError):
            await execute_get_stock_price({})

    @pytest.mark.asyncio
    async def test_unknown_symbol(self):
        with pytest.raises(ToolExecutionError, match="No quote available for symbol: ZZZZ"):
            await execute_get_stock_price({"symbol": "zzzz"})


class TestSendEmail:
    """Test the email notification tool."""

    @pytest.mark.asyncio
    async def test_sends_to_configured_receiver(self, settings, mail_sender):
        result = await execute_send_email({"subject": "Price alert", "body": "AAPL is up"}, settings, mail_sender)

        assert result == "Email sent to alerts@example.com"
        mail_sender.send.assert_awaited_once_with("alerts@example.com", "Price alert", "AAPL is up")

    @pytest.mark.asyncio
    async def test_skip_flag_short_circuits(self, settings_factory, mail_sender):
        settings = settings_factory(openai_function_calling_skip_send_email=True)

        result = await execute_send_email({"subject": "s", "body": "b"}, settings, mail_sender)

        assert result == "Email sending skipped"
        mail_sender.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_receiver(self, settings_factory, mail_sender):
        settings = settings_factory(email_receiver=None)

        with pytest.raises(ToolExecutionError, match="EMAIL_RECEIVER"):
            await execute_send_email({"subject": "s", "body": "b"}, settings, mail_sender)

        mail_sender.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delivery_failure_propagates(self, settings, mail_sender):
        mail_sender.send.side_effect = ToolExecutionError("Failed to send email: connection refused", tool_name="sendEmail")

        with pytest.raises(ToolExecutionError, match="connection refused"):
            await execute_send_email({"subject": "s", "body": "b"}, settings, mail_sender)


class TestToolWiring:
    """Test registry wiring and the assistant definition."""

    def test_registry_holds_both_tools(self, tool_registry):
        assert "getStockPrice" in tool_registry
        assert "sendEmail" in tool_registry
        assert len(tool_registry) == 2

    @pytest.mark.asyncio
    async def test_registered_send_email_is_bound_to_settings(self, tool_registry, mail_sender):
        handler = tool_registry.lookup("sendEmail")

        result = await handler({"subject": "Hi", "body": "There"})

        assert result == "Email sent to alerts@example.com"
        mail_sender.send.assert_awaited_once()

    def test_assistant_definition(self, settings, mail_sender):
        registry = build_tool_registry(settings, mail_sender)

        definition = build_assistant_definition(settings, registry)

        assert definition.name == ASSISTANT_NAME
        assert definition.model == "gpt-4o-test"
        assert definition.tools[-1] == FILE_SEARCH_TOOL
        assert [tool["function"]["name"] for tool in definition.tools[:-1]] == ["getStockPrice", "sendEmail"]
        assert definition.to_create_params()["instructions"] == definition.instructions

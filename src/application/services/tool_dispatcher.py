"""Concurrent dispatch of assistant tool calls.

This module provides the ToolDispatcher class which answers every tool
call of a requires-action event with exactly one ToolOutput. Failures are
converted into output strings so the provider is never left waiting.
"""

import asyncio
import json
import logging
import time
from collections.abc import Sequence
from typing import Any

from opentelemetry import trace

from application.services.tool_registry import ToolRegistry
from domain.exceptions import ToolExecutionError, ToolNotFoundError
from domain.models import ToolCall, ToolOutput, error_chunk
from observability import tool_execution_count, tool_execution_errors, tool_execution_time

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

UNKNOWN_FUNCTION_OUTPUT = "Unknown function"


class ToolDispatcher:
    """Fans out tool calls concurrently and collects their outputs.

    Outputs are returned in the order of the input calls, regardless of
    which handler finishes first. A failing handler never cancels its
    siblings.

    Example:
        >>> dispatcher = ToolDispatcher(registry)
        >>> outputs = await dispatcher.dispatch(event.tool_calls)
    """

    def __init__(self, tool_registry: ToolRegistry) -> None:
        self._registry = tool_registry

    async def dispatch(self, tool_calls: Sequence[ToolCall]) -> list[ToolOutput]:
        """Execute all tool calls concurrently.

        Args:
            tool_calls: Pending calls from a requires-action event

        Returns:
            One ToolOutput per call, in input order
        """
        with tracer.start_as_current_span("tools.dispatch") as span:
            span.set_attribute("tools.count", len(tool_calls))
            log.info(f"🔧 Dispatching {len(tool_calls)} tool call(s): {[tc.function_name for tc in tool_calls]}")

            outputs = await asyncio.gather(*(self._execute(tool_call) for tool_call in tool_calls))
            return list(outputs)

    async def _execute(self, tool_call: ToolCall) -> ToolOutput:
        name = tool_call.function_name
        start_time = time.time()

        try:
            handler = self._registry.lookup(name)
        except ToolNotFoundError:
            log.warning(f"🔧 Unknown function requested: {name}")
            tool_execution_errors.add(1, {"tool_name": name, "reason": "unknown"})
            return ToolOutput(tool_call_id=tool_call.id, output=UNKNOWN_FUNCTION_OUTPUT)

        try:
            arguments = self._parse_arguments(tool_call)
        except ValueError as e:
            log.warning(f"🔧 Invalid arguments for {name}: {e}")
            tool_execution_errors.add(1, {"tool_name": name, "reason": "arguments"})
            return ToolOutput(tool_call_id=tool_call.id, output=error_chunk(f"Invalid arguments for {name}: {e}"))

        tool_execution_count.add(1, {"tool_name": name})
        try:
            result = await handler(arguments)
            output = result if isinstance(result, str) else json.dumps(result)
            log.info(f"🔧 Tool executed successfully: {name} in {(time.time() - start_time) * 1000:.2f}ms")
        except ToolExecutionError as e:
            log.warning(f"🔧 Tool execution failed: {name} - {e.message}")
            tool_execution_errors.add(1, {"tool_name": name, "reason": "tool"})
            output = error_chunk(e.message)
        except Exception as e:
            log.exception(f"🔧 Tool execution error: {name} - {e}")
            tool_execution_errors.add(1, {"tool_name": name, "reason": "exception"})
            output = error_chunk(str(e))
        finally:
            tool_execution_time.record((time.time() - start_time) * 1000, {"tool_name": name})

        return ToolOutput(tool_call_id=tool_call.id, output=output)

    @staticmethod
    def _parse_arguments(tool_call: ToolCall) -> dict[str, Any]:
        """Parse the JSON arguments of a call.

        Raises:
            ValueError: If the payload is not valid JSON or not an object
        """
        raw = tool_call.arguments_json.strip() if tool_call.arguments_json else ""
        if not raw:
            return {}

        arguments = json.loads(raw)  # json.JSONDecodeError is a ValueError
        if not isinstance(arguments, dict):
            raise ValueError(f"expected a JSON object, got {type(arguments).__name__}")
        return arguments

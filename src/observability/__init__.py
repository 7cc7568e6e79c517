"""Observability utilities and metrics."""

from .metrics import (
    assistant_requests_received,
    assistant_requests_rejected,
    run_outcomes,
    run_stream_duration,
    run_tool_rounds,
    tool_execution_count,
    tool_execution_errors,
    tool_execution_time,
)

__all__ = [
    # Request metrics
    "assistant_requests_received",
    "assistant_requests_rejected",
    # Run metrics
    "run_outcomes",
    "run_stream_duration",
    "run_tool_rounds",
    # Tool metrics
    "tool_execution_count",
    "tool_execution_time",
    "tool_execution_errors",
]

"""Business metrics for the Assistant Relay service.

Defines OpenTelemetry metrics for:
- Requests: Accepted and rejected relay requests
- Runs: Outcomes, stream duration and tool rounds
- Tools: Execution count, latency and errors
"""

from opentelemetry import metrics

meter = metrics.get_meter("assistant_relay")

# =============================================================================
# REQUEST METRICS
# =============================================================================

assistant_requests_received = meter.create_counter(
    name="assistant_relay.requests.received",
    description="Total assistant requests accepted for streaming",
    unit="1",
)

assistant_requests_rejected = meter.create_counter(
    name="assistant_relay.requests.rejected",
    description="Total assistant requests rejected before orchestration",
    unit="1",
)

# =============================================================================
# RUN METRICS
# =============================================================================

run_outcomes = meter.create_counter(
    name="assistant_relay.runs.outcomes",
    description="Run terminations by outcome (completed, failed, error, cancelled)",
    unit="1",
)

run_stream_duration = meter.create_histogram(
    name="assistant_relay.runs.stream_duration",
    description="Time from request start to the end of the relayed stream",
    unit="ms",
)

run_tool_rounds = meter.create_histogram(
    name="assistant_relay.runs.tool_rounds",
    description="Number of requires-action rounds per run",
    unit="1",
)

# =============================================================================
# TOOL METRICS
# =============================================================================

tool_execution_count = meter.create_counter(
    name="assistant_relay.tools.execution_count",
    description="Total tool executions",
    unit="1",
)

tool_execution_time = meter.create_histogram(
    name="assistant_relay.tools.execution_time",
    description="Time to execute a single tool call",
    unit="ms",
)

tool_execution_errors = meter.create_counter(
    name="assistant_relay.tools.execution_errors",
    description="Total tool calls answered with an error or placeholder output",
    unit="1",
)

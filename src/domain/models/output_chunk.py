"""Sentinel vocabulary of the outward text stream.

The relay streams plain text. Control information is interleaved with
conversation content as reserved markers that callers parse out:

- "@created", "@queued", "@in_progress": run status, no trailing data
- "@thread:<id>": thread identifier to persist for continuation
- "Error: <message>": terminal, human-readable failure

Any chunk not matching one of these is conversation content.
"""

STATUS_CREATED = "@created"
STATUS_QUEUED = "@queued"
STATUS_IN_PROGRESS = "@in_progress"

THREAD_SENTINEL_PREFIX = "@thread:"
ERROR_PREFIX = "Error: "

STATUS_SENTINELS = frozenset({STATUS_CREATED, STATUS_QUEUED, STATUS_IN_PROGRESS})


def thread_sentinel(thread_id: str) -> str:
    return f"{THREAD_SENTINEL_PREFIX}{thread_id}"


def error_chunk(message: str) -> str:
    return f"{ERROR_PREFIX}{message}"


def is_sentinel(chunk: str) -> bool:
    """Return True if the chunk is a control marker rather than content."""
    return chunk in STATUS_SENTINELS or chunk.startswith(THREAD_SENTINEL_PREFIX) or chunk.startswith(ERROR_PREFIX)

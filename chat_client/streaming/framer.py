"""
SSE event framing over a growing text buffer.

The framer is a pure function of its input: the caller owns the pending
buffer and threads the returned remainder into the next call. Carriage
returns are stripped before scanning, so the remainder is always normalized
text.
"""

from __future__ import annotations

from .models import FrameResult

DATA_PREFIX = "data:"
EVENT_SEPARATOR = "\n\n"


def _payload_from_block(block: str) -> str | None:
    """Join the `data:` lines of one raw block, or None if it has none."""
    data_lines = [
        line[len(DATA_PREFIX):].lstrip()
        for line in block.split("\n")
        if line.startswith(DATA_PREFIX)
    ]
    if not data_lines:
        return None
    return "\n".join(data_lines)


def consume_sse_events(buffer: str, search_from: int = 0) -> FrameResult:
    """
    Extract every complete event from `buffer`.

    Args:
        buffer: Accumulated text, possibly ending in a partial event
        search_from: Offset at which to start looking for the first separator.
            Only a hint: callers that know the head of `buffer` is an already
            normalized remainder (which never contains a separator) pass its
            length minus one to skip rescanning it.

    Returns:
        FrameResult with the payloads in arrival order and the text after
        the last separator
    """
    normalized = buffer.replace("\r", "")
    events: list[str] = []
    start = 0
    search = max(0, min(search_from, len(normalized)))

    while (end := normalized.find(EVENT_SEPARATOR, search)) != -1:
        payload = _payload_from_block(normalized[start:end])
        if payload is not None:
            events.append(payload)
        start = search = end + len(EVENT_SEPARATOR)

    return FrameResult(events=events, remainder=normalized[start:])


def flush_sse_events(buffer: str) -> list[str]:
    """Frame whatever is left at end-of-stream as if a blank line followed."""
    return consume_sse_events(buffer + EVENT_SEPARATOR).events

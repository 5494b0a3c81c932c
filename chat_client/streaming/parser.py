"""
Incremental SSE parser and delta accumulator for streamed chat responses.

StreamingParser turns raw byte chunks into ordered event payloads. It
decodes statefully, so a multi-byte character split across chunks is
carried forward instead of being mangled. It stops at the `[DONE]` sentinel.
ChunkAccumulator resolves each payload into a content delta and keeps the
running response text.
"""

from __future__ import annotations

import codecs
import logging
from collections.abc import Sequence

from ..exceptions import MalformedEventError
from .extractors import DEFAULT_EXTRACTORS, ContentExtractor, extract_delta
from .framer import consume_sse_events, flush_sse_events
from .models import AccumulatorState, StreamingStats

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"


class StreamingParser:
    """Byte-chunk to SSE payload parser for a single response."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""
        self.done = False
        self.saw_sentinel = False
        self.stats = {
            'total_chunks': 0,
            'total_bytes': 0,
            'framed_events': 0,
        }

    @property
    def pending(self) -> str:
        """Text received but not yet resolved into a complete event."""
        return self._pending

    def feed(self, chunk: bytes) -> list[str]:
        """
        Consume one raw chunk and return the payloads it completed.

        Once the sentinel is seen the parser is done: payloads after it are
        dropped, the pending buffer is discarded and further chunks are
        ignored.
        """
        if self.done:
            return []

        self.stats['total_chunks'] += 1
        self.stats['total_bytes'] += len(chunk)

        # The pending buffer is a normalized remainder without a separator,
        # so only its last character can start a new one.
        search_from = max(len(self._pending) - 1, 0)
        self._pending += self._decoder.decode(chunk)
        framed = consume_sse_events(self._pending, search_from)
        self._pending = framed.remainder
        return self._until_sentinel(framed.events)

    def finish(self) -> list[str]:
        """Flush the decoder and the pending buffer at end-of-stream."""
        if self.done:
            return []

        self._pending += self._decoder.decode(b"", final=True)
        events = flush_sse_events(self._pending)
        self._pending = ""
        payloads = self._until_sentinel(events)
        self.done = True
        return payloads

    def _until_sentinel(self, events: list[str]) -> list[str]:
        for index, data in enumerate(events):
            if data == DONE_SENTINEL:
                logger.debug(
                    "Termination sentinel received, dropping %d trailing events",
                    len(events) - index - 1,
                )
                self.stats['framed_events'] += index
                self.done = True
                self.saw_sentinel = True
                self._pending = ""
                return events[:index]

        self.stats['framed_events'] += len(events)
        return events

    def get_stats(self) -> dict[str, int]:
        """Get parser statistics for monitoring."""
        return self.stats.copy()


class ChunkAccumulator:
    """Resolves payloads into deltas and accumulates the response text."""

    def __init__(self, extractors: Sequence[ContentExtractor] = DEFAULT_EXTRACTORS):
        self.extractors = tuple(extractors)
        self.state = AccumulatorState()

    @property
    def content(self) -> str:
        return self.state.content_buffer

    def process_event(self, raw_data: str) -> str | None:
        """
        Apply one event payload.

        Returns:
            The full accumulated text when the payload carried a delta,
            otherwise None. Malformed payloads are skipped, never raised.
        """
        self.state.update_timing()
        try:
            delta = extract_delta(raw_data, self.extractors)
        except MalformedEventError as e:
            self.state.ignored_count += 1
            logger.debug("Ignoring SSE frame (%s): %.80r", e, e.raw_data)
            return None

        self.state.content_buffer += delta
        self.state.delta_count += 1
        return self.state.content_buffer

    def get_streaming_stats(self, finished_by_sentinel: bool = False) -> StreamingStats:
        """Summarize the cycle for logging."""
        return StreamingStats(
            total_events=self.state.event_count,
            content_events=self.state.delta_count,
            ignored_events=self.state.ignored_count,
            total_duration=self.state.streaming_duration,
            content_length=len(self.state.content_buffer),
            finished_by_sentinel=finished_by_sentinel,
        )

"""
Incremental SSE decoding for streamed chat responses.

- framer: splits buffered text into complete `data:` payloads
- extractors: pull content deltas out of parsed payloads
- parser: bytes -> payloads, with stateful decoding and sentinel handling
"""

from __future__ import annotations

from .extractors import (
    DEFAULT_EXTRACTORS,
    ChatCompletionDeltaExtractor,
    ContentExtractor,
    ResponseFieldExtractor,
    extract_delta,
)
from .framer import consume_sse_events, flush_sse_events
from .models import AccumulatorState, FrameResult, StreamingStats
from .parser import DONE_SENTINEL, ChunkAccumulator, StreamingParser

__all__ = [
    "DEFAULT_EXTRACTORS",
    "DONE_SENTINEL",
    "AccumulatorState",
    "ChatCompletionDeltaExtractor",
    "ChunkAccumulator",
    "ContentExtractor",
    "FrameResult",
    "ResponseFieldExtractor",
    "StreamingParser",
    "StreamingStats",
    "consume_sse_events",
    "extract_delta",
    "flush_sse_events",
]

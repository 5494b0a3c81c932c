"""
Streaming-specific dataclasses for the SSE decoder.
"""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class FrameResult:
    """Payloads framed out of a buffer plus the unconsumed remainder."""
    events: list[str]
    remainder: str


@dataclass
class AccumulatorState:
    """Mutable state for delta accumulation within one cycle."""
    content_buffer: str = ""
    event_count: int = 0
    delta_count: int = 0
    ignored_count: int = 0
    first_event_time: float | None = None
    last_event_time: float | None = None

    def update_timing(self, timestamp: float | None = None) -> None:
        """Record the arrival of one event."""
        timestamp = time.time() if timestamp is None else timestamp
        if self.first_event_time is None:
            self.first_event_time = timestamp
        self.last_event_time = timestamp
        self.event_count += 1

    @property
    def streaming_duration(self) -> float:
        """Time between the first and the last event."""
        if self.first_event_time is None or self.last_event_time is None:
            return 0.0
        return self.last_event_time - self.first_event_time


@dataclass(frozen=True)
class StreamingStats:
    """Per-cycle statistics logged when a stream concludes."""
    total_events: int
    content_events: int
    ignored_events: int
    total_duration: float
    content_length: int
    finished_by_sentinel: bool = False

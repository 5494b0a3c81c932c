"""
Display sinks for the stream coordinator.

The coordinator never renders anything itself; it drives a DisplaySink.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class DisplaySink(Protocol):
    """Presentation callbacks for one chat session."""

    def on_user_message(self, text: str) -> None:
        ...

    def on_assistant_text_update(self, full_text: str) -> None:
        ...

    def on_error(self, message: str) -> None:
        ...

    def on_stream_start(self) -> None:
        ...

    def on_stream_end(self) -> None:
        ...


class ConsoleSink:
    """
    Terminal sink.

    Assistant updates arrive as the full text so far. A terminal cannot
    rewrite what it already printed, so only the new suffix is written when
    the text grows; any other change reprints the whole reply on a new line.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        agent_labels: dict[str, str] | None = None,
        agent: str = "azure",
        fallback_label: str = "Azure",
    ) -> None:
        self.stream = stream or sys.stdout
        self.agent_labels = agent_labels or {}
        self.agent = agent
        self.fallback_label = fallback_label
        self._shown = ""
        self._busy = False

    @property
    def agent_label(self) -> str:
        return self.agent_labels.get(self.agent, self.fallback_label)

    @property
    def busy(self) -> bool:
        return self._busy

    def on_user_message(self, text: str) -> None:
        self._write(f"you> {text}\n")

    def on_stream_start(self) -> None:
        self._busy = True
        self._shown = ""
        self._write(f"[{self.agent_label}] ")

    def on_assistant_text_update(self, full_text: str) -> None:
        if full_text.startswith(self._shown):
            self._write(full_text[len(self._shown):])
        else:
            self._write(f"\n{full_text}")
        self._shown = full_text

    def on_error(self, message: str) -> None:
        self._write(f"\n{message}")

    def on_stream_end(self) -> None:
        self._busy = False
        self._write("\n")

    def show_turn(self, role: str, content: str) -> None:
        """Print a complete turn, e.g. a greeting or a history listing."""
        self._write(f"{role}> {content}\n")

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

"""
Chat Service for the streaming chat client.

This module handles one chat session end to end:
- Conversation history, replayed in full on every request
- The submit gate (one cycle in flight, rejected rather than queued)
- The read loop: bytes -> SSE payloads -> content deltas -> display sink
- Terminal cleanup on every exit path
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .exceptions import InputValidationError, TransportError
from .logging_utils import ErrorHandler, operation_context
from .models import ChatRequest, ConversationTurn, Role, StreamState
from .sink import DisplaySink
from .streaming.extractors import DEFAULT_EXTRACTORS, ContentExtractor
from .streaming.parser import ChunkAccumulator, StreamingParser
from .transport import ChatTransport

logger = logging.getLogger(__name__)

DEFAULT_AGENT = "azure"
DEFAULT_ERROR_MESSAGE = "Sorry, there was an error processing your request."


@dataclass
class ChatSession:
    """Conversation state owned by a single coordinator."""
    history: list[ConversationTurn] = field(default_factory=list)
    state: StreamState = StreamState.IDLE

    @classmethod
    def with_greeting(cls, greeting: str | None) -> ChatSession:
        """Start a session, optionally seeded with an assistant greeting."""
        session = cls()
        if greeting:
            session.append("assistant", greeting)
        return session

    @property
    def is_busy(self) -> bool:
        return self.state is not StreamState.IDLE

    def append(self, role: Role, content: str) -> ConversationTurn:
        turn = ConversationTurn(role=role, content=content)
        self.history.append(turn)
        return turn


class StreamCoordinator:
    """
    Runs request/response cycles for one ChatSession.

    A cycle appends the user turn, sends the whole history, streams the
    reply into the sink and, if any text arrived, records it as one
    assistant turn. Only transport failures are reported to the user.
    """

    def __init__(
        self,
        transport: ChatTransport,
        sink: DisplaySink,
        *,
        session: ChatSession | None = None,
        agent: str = DEFAULT_AGENT,
        encoding: str = "utf-8",
        error_message: str = DEFAULT_ERROR_MESSAGE,
        extractors: Sequence[ContentExtractor] = DEFAULT_EXTRACTORS,
    ) -> None:
        self.transport = transport
        self.sink = sink
        self.session = session if session is not None else ChatSession()
        self.agent = agent
        self.encoding = encoding
        self.error_message = error_message
        self.extractors = tuple(extractors)

    @property
    def state(self) -> StreamState:
        return self.session.state

    @property
    def history(self) -> list[ConversationTurn]:
        """Snapshot of the conversation so far."""
        return list(self.session.history)

    async def submit(self, text: str) -> bool:
        """
        Run one cycle for `text`.

        Returns:
            False if the submission was rejected (empty input or a cycle
            already in flight), True once the cycle has concluded, whether
            it succeeded or reported a transport error.
        """
        message = text.strip()
        try:
            self._check_submission(message)
        except InputValidationError as e:
            logger.debug(f"Submission rejected: {e}")
            return False

        agent = self.agent
        # Claim the gate before the first suspension point.
        self.session.state = StreamState.SENDING
        try:
            self.sink.on_user_message(message)
            self.session.append("user", message)
            self.sink.on_stream_start()

            async with operation_context(
                "chat_cycle",
                context={"agent": agent, "turns": len(self.session.history)},
            ) as cycle_logger:
                response_text = await self._run_cycle(agent, cycle_logger)

            if response_text:
                self.session.append("assistant", response_text)
        except TransportError as e:
            self.session.state = StreamState.ERROR
            logger.error(
                f"Chat cycle failed ({ErrorHandler.classify_error(e)}): {e}"
            )
            self.sink.on_error(self.error_message)
        finally:
            self.session.state = StreamState.IDLE
            self.sink.on_stream_end()

        return True

    def _check_submission(self, message: str) -> None:
        if not message:
            raise InputValidationError("Empty message", reason="empty")
        if self.session.is_busy:
            raise InputValidationError(
                f"Cycle already active ({self.session.state.value})",
                reason="busy",
            )

    async def _run_cycle(self, agent: str, cycle_logger) -> str:
        """Send the history and stream the reply; returns the accumulated text."""
        request = ChatRequest(agent=agent, messages=self.session.history)
        parser = StreamingParser(self.encoding)
        accumulator = ChunkAccumulator(self.extractors)

        async with self.transport.open_stream(request.to_payload()) as response:
            if not response.is_success:
                details = await response.text()
                raise TransportError.from_status(response.status_code, details)

            body = response.body()
            if body is None:
                raise TransportError.missing_body(response.status_code)

            self.session.state = StreamState.STREAMING
            async for chunk in body:
                self._dispatch(parser.feed(chunk), accumulator)
                if parser.done:
                    break
            else:
                self._dispatch(parser.finish(), accumulator)

        stats = accumulator.get_streaming_stats(parser.saw_sentinel)
        cycle_logger.info(
            "Stream concluded",
            events=stats.total_events,
            deltas=stats.content_events,
            ignored=stats.ignored_events,
            content_length=stats.content_length,
            stream_duration=round(stats.total_duration, 3),
            sentinel=stats.finished_by_sentinel,
            **parser.get_stats(),
        )
        return accumulator.content

    def _dispatch(
        self, payloads: Iterable[str], accumulator: ChunkAccumulator
    ) -> None:
        for data in payloads:
            full_text = accumulator.process_event(data)
            if full_text is not None:
                self.sink.on_assistant_text_update(full_text)

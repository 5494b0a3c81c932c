"""
Streaming chat client.

This package submits a conversation to a chat endpoint and renders the
assistant's reply as it streams in over Server-Sent Events:
- Incremental SSE framing that tolerates arbitrary chunk boundaries
- Content extraction for Workers-AI and OpenAI/Azure style payloads
- A single-flight stream coordinator driving a display sink
"""

from __future__ import annotations

from .chat_service import ChatSession, StreamCoordinator
from .exceptions import (
    ChatClientError,
    InputValidationError,
    MalformedEventError,
    TransportError,
)
from .models import ChatRequest, ConversationTurn, StreamState
from .sink import ConsoleSink, DisplaySink
from .transport import ChatTransport, HttpxChatTransport, StreamResponse

__all__ = [
    "ChatClientError",
    "ChatRequest",
    "ChatSession",
    "ChatTransport",
    "ConsoleSink",
    "ConversationTurn",
    "DisplaySink",
    "HttpxChatTransport",
    "InputValidationError",
    "MalformedEventError",
    "StreamCoordinator",
    "StreamResponse",
    "StreamState",
    "TransportError",
]

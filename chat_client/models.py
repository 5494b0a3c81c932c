# chat_client/models.py
from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]


class StreamState(Enum):
    """Lifecycle of one request/response cycle."""
    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    ERROR = "error"


class ConversationTurn(BaseModel):
    """One message of the conversation, replayed verbatim on every request."""
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    """
    Outbound request body.

    `agent` is an opaque routing value; the client never interprets it.
    """
    agent: str
    messages: list[ConversationTurn] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body sent to the backend."""
        return self.model_dump(mode="json")

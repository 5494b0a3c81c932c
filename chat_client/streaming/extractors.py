"""
Content delta extraction for the payload schemas seen upstream.

Each extractor inspects a parsed JSON value and returns the text it
recognizes, or None. They are tried in order and the first hit wins.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Protocol

from ..exceptions import MalformedEventError


class ContentExtractor(Protocol):
    """Strategy that pulls a content delta out of a parsed payload."""

    name: str

    def extract(self, payload: Any) -> str | None:
        ...


class ResponseFieldExtractor:
    """Workers-AI style payloads: `{"response": "..."}`."""

    name = "response"

    def extract(self, payload: Any) -> str | None:
        if not isinstance(payload, dict):
            return None
        content = payload.get("response")
        if isinstance(content, str) and content:
            return content
        return None


class ChatCompletionDeltaExtractor:
    """OpenAI/Azure style payloads: `{"choices": [{"delta": {"content": "..."}}]}`."""

    name = "chat_completion"

    def extract(self, payload: Any) -> str | None:
        if not isinstance(payload, dict):
            return None
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        choice = choices[0]
        if not isinstance(choice, dict):
            return None
        delta = choice.get("delta")
        if not isinstance(delta, dict):
            return None
        content = delta.get("content")
        if isinstance(content, str) and content:
            return content
        return None


DEFAULT_EXTRACTORS: tuple[ContentExtractor, ...] = (
    ResponseFieldExtractor(),
    ChatCompletionDeltaExtractor(),
)


def extract_delta(
    raw_data: str,
    extractors: Sequence[ContentExtractor] = DEFAULT_EXTRACTORS,
) -> str:
    """
    Parse one event payload and resolve its content delta.

    Raises:
        MalformedEventError: If the payload is not JSON or no extractor
            recognizes it.
    """
    try:
        payload = json.loads(raw_data)
    except json.JSONDecodeError as e:
        raise MalformedEventError(f"JSON decode error: {e}", raw_data) from e

    for extractor in extractors:
        if content := extractor.extract(payload):
            return content

    raise MalformedEventError("No recognized content field", raw_data)

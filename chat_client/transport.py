"""
HTTP transport for the chat endpoint.

The coordinator only depends on the ChatTransport protocol: open a streamed
POST, inspect the status, then iterate raw byte chunks. HttpxChatTransport
is the production implementation; every httpx failure surfaces as a
TransportError so the coordinator has a single failure type to report.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Protocol

import httpx

from .exceptions import TransportError

logger = logging.getLogger(__name__)


class StreamResponse(Protocol):
    """Response handle consumed by the coordinator."""

    status_code: int

    @property
    def is_success(self) -> bool:
        ...

    def body(self) -> AsyncIterator[bytes] | None:
        ...

    async def text(self) -> str:
        ...


class ChatTransport(Protocol):
    """Anything that can open a streamed chat request."""

    def open_stream(
        self, payload: dict[str, Any]
    ) -> AbstractAsyncContextManager[StreamResponse]:
        ...


class HttpxStreamResponse:
    """StreamResponse backed by a streaming httpx.Response."""

    def __init__(self, response: httpx.Response):
        self._response = response
        self.status_code = response.status_code

    @property
    def is_success(self) -> bool:
        return self._response.is_success

    def body(self) -> AsyncIterator[bytes] | None:
        return self._response.aiter_bytes()

    async def text(self) -> str:
        """Best-effort diagnostic body text for error reports."""
        try:
            await self._response.aread()
        except httpx.HTTPError as e:
            logger.debug(f"Could not read error body: {e}")
            return ""
        return self._response.text


class HttpxChatTransport:
    """Streams chat requests over a shared httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str,
        endpoint: str,
        *,
        timeouts: dict[str, float] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._owns_client = client is None
        if client is None:
            timeouts = timeouts or {}
            client = httpx.AsyncClient(
                base_url=base_url,
                timeout=httpx.Timeout(
                    connect=timeouts.get("connect_timeout", 10.0),
                    read=timeouts.get("read_timeout", 60.0),
                    write=timeouts.get("write_timeout", 10.0),
                    pool=timeouts.get("pool_timeout", 10.0),
                ),
            )
        self.client: httpx.AsyncClient = client

    @asynccontextmanager
    async def open_stream(
        self, payload: dict[str, Any]
    ) -> AsyncIterator[HttpxStreamResponse]:
        """POST the payload and yield the streaming response."""
        try:
            async with self.client.stream(
                "POST",
                self.endpoint,
                json=payload,
                headers={"Content-Type": "application/json"},
            ) as response:
                logger.debug(
                    f"Chat endpoint responded {response.status_code} "
                    f"({response.headers.get('content-type', 'unknown')})"
                )
                yield HttpxStreamResponse(response)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error during streaming: {e}")
            raise TransportError(f"HTTP error: {e!s}") from e

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> HttpxChatTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

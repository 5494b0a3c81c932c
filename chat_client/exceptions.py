"""
Error taxonomy for the streaming chat client.

Only TransportError is meant to reach the user. The other errors are raised
and handled inside the client:
- InputValidationError is caught by the coordinator, which rejects the submit
- MalformedEventError is swallowed by the accumulator, which skips the event
"""

from __future__ import annotations


class ChatClientError(Exception):
    """Base error for the chat client."""


class InputValidationError(ChatClientError):
    """Submission rejected: empty input or a cycle already in flight."""

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class TransportError(ChatClientError):
    """Transport-level failure with the HTTP context that is available."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: str = "",
        category: str = "transport_error",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.details = details
        self.category = category

    @classmethod
    def from_status(cls, status_code: int, details: str = "") -> TransportError:
        """Build the error for a non-success response."""
        message = f"Failed to get response ({status_code}) {details}".rstrip()
        return cls(
            message,
            status_code=status_code,
            details=details,
            category="http_status_error",
        )

    @classmethod
    def missing_body(cls, status_code: int | None = None) -> TransportError:
        """Build the error for a response that has no body to stream."""
        return cls(
            "Response body is null",
            status_code=status_code,
            category="missing_body",
        )


class MalformedEventError(ChatClientError):
    """An SSE payload that is not JSON or carries no recognized content."""

    def __init__(self, message: str, raw_data: str):
        super().__init__(message)
        self.raw_data = raw_data

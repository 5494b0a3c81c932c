#!/usr/bin/env python3
"""
Test script for logging utilities.

This validates that error classification and operation logging work correctly.
"""

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from chat_client.exceptions import InputValidationError, TransportError
from chat_client.logging_utils import ErrorHandler, configure_logging, operation_context


def wrapped(cause):
    """A TransportError raised from `cause`, as the transport does."""
    try:
        raise TransportError(f"HTTP error: {cause}") from cause
    except TransportError as e:
        return e


class TestErrorHandler:
    """Test the ErrorHandler class."""

    def test_classify_status_error(self):
        error = TransportError.from_status(502, "bad gateway")
        assert ErrorHandler.classify_error(error) == "http_status_error"
        assert error.status_code == 502
        assert str(error) == "Failed to get response (502) bad gateway"

    def test_classify_missing_body(self):
        assert ErrorHandler.classify_error(TransportError.missing_body(200)) == "missing_body"

    def test_classify_wrapped_timeout(self):
        error = wrapped(httpx.ReadTimeout("read timed out"))
        assert ErrorHandler.classify_error(error) == "timeout_error"

    def test_classify_wrapped_connection_error(self):
        error = wrapped(httpx.ConnectError("refused"))
        assert ErrorHandler.classify_error(error) == "connection_error"

    def test_classify_wrapped_protocol_error(self):
        error = wrapped(httpx.RemoteProtocolError("peer closed"))
        assert ErrorHandler.classify_error(error) == "transport_error"

    def test_classify_plain_errors(self):
        assert ErrorHandler.classify_error(TimeoutError()) == "timeout_error"
        assert ErrorHandler.classify_error(ConnectionError()) == "connection_error"
        assert ErrorHandler.classify_error(ValueError()) == "parameter_error"
        assert ErrorHandler.classify_error(RuntimeError()) == "unknown_error"

    def test_classify_validation_errors(self):
        class Model(BaseModel):
            value: int

        with pytest.raises(ValidationError) as exc_info:
            Model(value="nope")

        assert ErrorHandler.classify_error(exc_info.value) == "validation_error"
        assert ErrorHandler.classify_error(
            InputValidationError("Empty message", reason="empty")
        ) == "validation_error"


class TestOperationContext:
    """Test the operation_context async context manager."""

    @pytest.mark.asyncio
    async def test_success_yields_bound_logger(self):
        async with operation_context("test_operation", context={"agent": "cf"}) as op_logger:
            op_logger.info("inside")

    @pytest.mark.asyncio
    async def test_failure_is_reraised(self):
        with pytest.raises(ValueError, match="Test error"):
            async with operation_context("test_operation"):
                raise ValueError("Test error")


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError, match="Unknown logging level"):
        configure_logging("LOUD")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

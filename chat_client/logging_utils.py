"""
Centralized logging and error classification for the chat client.

Features:
- Structured logging with contextual information
- Transport error classification for log records
- Operation timing through an async context manager
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from .exceptions import InputValidationError, TransportError

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(colors=True),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


def configure_logging(level: str | int = "INFO") -> None:
    """Install the stdlib handler that structlog and module loggers share."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level '{level}'")
        level = resolved
    logging.basicConfig(
        level=level, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    logging.getLogger().setLevel(level)


class ErrorHandler:
    """Error classification for structured log records."""

    @staticmethod
    def classify_error(error: BaseException) -> str:
        """
        Classify an error into a log category.

        A TransportError without a status code is classified by its cause,
        so network failures keep their timeout/connection distinction.

        Args:
            error: The exception to classify

        Returns:
            The error category
        """
        if isinstance(error, TransportError):
            if error.__cause__ is not None:
                cause_category = ErrorHandler.classify_error(error.__cause__)
                if cause_category != "unknown_error":
                    return cause_category
            return error.category
        if isinstance(error, httpx.TimeoutException | TimeoutError):
            return "timeout_error"
        if isinstance(error, httpx.NetworkError | ConnectionError | OSError):
            return "connection_error"
        if isinstance(error, httpx.HTTPError):
            return "transport_error"
        if isinstance(error, InputValidationError | ValidationError):
            return "validation_error"
        if isinstance(error, ValueError | TypeError):
            return "parameter_error"
        return "unknown_error"


@asynccontextmanager
async def operation_context(
    operation: str,
    *,
    context: dict[str, Any] | None = None,
    log_timing: bool = True,
):
    """
    Async context manager for operation logging.

    Args:
        operation: Description of the operation
        context: Additional context for logging
        log_timing: Whether to log operation timing

    Yields:
        Bound logger for the operation
    """
    operation_logger = logger.bind(
        operation=operation,
        **(context or {}),
    )

    operation_logger.info("Operation started")
    start_time = time.perf_counter() if log_timing else None

    try:
        yield operation_logger

        # Log success
        log_data: dict[str, Any] = {}
        if log_timing and start_time is not None:
            duration = round((time.perf_counter() - start_time) * 1000, 2)
            log_data["duration_ms"] = duration

        operation_logger.info("Operation completed successfully", **log_data)

    except Exception as e:
        # Log failure
        error_log_data: dict[str, Any] = {
            "error_type": type(e).__name__,
            "error_category": ErrorHandler.classify_error(e),
            "error_message": str(e),
        }
        if log_timing and start_time is not None:
            duration = round((time.perf_counter() - start_time) * 1000, 2)
            error_log_data["duration_ms"] = duration

        operation_logger.error("Operation failed", **error_log_data)
        raise

from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigurationError,
    DecodeError,
    InternalError,
    ProtocolError,
    SessionExpiredError,
    TransportError,
)


def error_category(error: BaseException) -> str:
    """Map an exception to the category used for structured error logging."""
    if isinstance(error, ConfigurationError):
        return "config"
    if isinstance(error, TransportError | OSError | ConnectionError):
        return "network"
    if isinstance(error, ProtocolError | SessionExpiredError):
        return "protocol"
    if isinstance(error, DecodeError):
        return "parsing"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    This function formats and logs an error message along with the string
    representation of the exception using structured logging for better
    error tracking and aggregation.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict = dict(getattr(error, "data", None) or {})
    if context:
        merged.update(context)
    log_structured_error(
        error_type=error_category(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )

"""Error taxonomy and logging helpers for session handling."""

from .handling import log_error
from .internal import (
    ConfigurationError,
    DecodeError,
    InternalError,
    ProtocolError,
    SessionError,
    SessionExpiredError,
    TransportError,
    TransportFailure,
)

__all__ = [
    "InternalError",
    "ConfigurationError",
    "SessionError",
    "TransportFailure",
    "TransportError",
    "ProtocolError",
    "DecodeError",
    "SessionExpiredError",
    "log_error",
]

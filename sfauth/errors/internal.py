"""Centralized internal error hierarchy.

These exceptions provide semantic categories for session handling. Only raise
these inside application/network boundaries – never directly surface raw
aiohttp / pydantic errors to callers of the coordinator; wrap them instead.

Classes:
  InternalError        – Base for all internal errors.
  ConfigurationError   – Missing or invalid configuration (fatal, at construction).
  SessionError         – Base for failures of a login/logout exchange.
  TransportError       – Timeout, interruption or failure of the HTTP exchange.
  ProtocolError        – Non-success status returned by the OAuth endpoint.
  DecodeError          – Malformed JSON body on an otherwise handled status.
  SessionExpiredError  – An API call was rejected with the current token.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..session.types import RestError


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigurationError(InternalError):
    """Exception raised when the session configuration is missing or invalid.

    Raised eagerly while building the configuration or the coordinator, never
    deferred to request time.
    """


class SessionError(InternalError):
    """Base class for failures of a login or logout exchange."""


class TransportFailure(str, Enum):
    """Enumeration of transport failure causes.

    Attributes:
        TIMEOUT: The request did not complete within the configured timeout.
        INTERRUPTED: The connection was dropped while the exchange was in progress.
        FAILED: Any other failure executing the request.
    """

    TIMEOUT = "timeout"
    INTERRUPTED = "interrupted"
    FAILED = "failed"


class TransportError(SessionError):
    """Exception raised when the HTTP exchange itself fails.

    The original transport exception is always chained as ``__cause__``.

    Attributes:
        kind: Which kind of transport failure occurred.
    """

    def __init__(self, message: str, *, kind: TransportFailure) -> None:
        super().__init__(message, data={"kind": kind.value})
        self.kind = kind


class ProtocolError(SessionError):
    """Exception raised for an unexpected status from the OAuth endpoint.

    Attributes:
        status_code: HTTP status returned by the endpoint.
        description: Error description or reason phrase sent by the server.
        errors: Structured errors decoded from the response, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        description: str | None = None,
        errors: Sequence[RestError] = (),
    ) -> None:
        super().__init__(
            message, data={"status_code": status_code, "description": description}
        )
        self.status_code = status_code
        self.description = description
        self.errors = list(errors)


class DecodeError(SessionError):
    """Exception raised when a response body cannot be decoded."""


class SessionExpiredError(SessionError):
    """Exception raised when an API call is rejected with the current token.

    Attributes:
        token: The access token that was rejected.
    """

    def __init__(self, token: str | None, status_code: int = 401) -> None:
        super().__init__(
            f"Session expired (status={status_code})",
            data={"status_code": status_code},
        )
        self.token = token
        self.status_code = status_code


__all__ = [
    "InternalError",
    "ConfigurationError",
    "SessionError",
    "TransportFailure",
    "TransportError",
    "ProtocolError",
    "DecodeError",
    "SessionExpiredError",
]

"""Shared OAuth2 password-grant session coordination on aiohttp."""

from .config import SessionConfig, load_session_config
from .errors import (
    ConfigurationError,
    DecodeError,
    InternalError,
    ProtocolError,
    SessionError,
    SessionExpiredError,
    TransportError,
    TransportFailure,
)
from .session import (
    AuthenticatedClient,
    HookListener,
    SessionCoordinator,
    SessionListener,
)

__version__ = "1.0.0"

__all__ = [
    "AuthenticatedClient",
    "ConfigurationError",
    "DecodeError",
    "HookListener",
    "InternalError",
    "ProtocolError",
    "SessionConfig",
    "SessionCoordinator",
    "SessionError",
    "SessionExpiredError",
    "SessionListener",
    "TransportError",
    "TransportFailure",
    "load_session_config",
]

"""Session coordination: login/logout protocol, listeners and the coordinator."""

from .codec import decode_error, decode_success
from .coordinator import SessionCoordinator
from .listeners import HookListener, ListenerSet, SessionListener
from .protocol import (
    HttpRequest,
    HttpResponse,
    build_login_request,
    build_logout_request,
    classify_login_response,
)
from .security_handler import AuthenticatedClient
from .state import SessionState
from .types import LoginError, LoginToken, RestError

__all__ = [
    "AuthenticatedClient",
    "HookListener",
    "HttpRequest",
    "HttpResponse",
    "ListenerSet",
    "LoginError",
    "LoginToken",
    "RestError",
    "SessionCoordinator",
    "SessionListener",
    "SessionState",
    "build_login_request",
    "build_logout_request",
    "classify_login_response",
    "decode_error",
    "decode_success",
]

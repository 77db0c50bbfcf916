"""Login/logout request shaping and login response classification.

Both capabilities are side-effect free and independent of the coordinator's
lock, so a companion retry mechanism can build an equivalent login request,
send it on its own HTTP session and classify the result.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlencode

import aiohttp

from ..config.model import SessionConfig
from ..constants import OAUTH2_REVOKE_PATH, OAUTH2_TOKEN_PATH
from ..errors.internal import ProtocolError, TransportError, TransportFailure
from .codec import decode_error, decode_success
from .types import LoginToken, RestError

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


@dataclass(frozen=True)
class HttpResponse:
    """Status line and body of a completed exchange."""

    status: int
    reason: str
    body: bytes | str


@dataclass(frozen=True)
class HttpRequest:
    """A fully shaped request that can be sent on any aiohttp session.

    Attributes:
        method: HTTP method.
        url: Absolute URL including query string.
        timeout: Timeout applied to this request only.
        data: Form fields, sent as application/x-www-form-urlencoded.
        headers: Extra request headers.
        operation: Label used in transport error messages ("Login", "Logout").
    """

    method: str
    url: str
    timeout: aiohttp.ClientTimeout
    data: Mapping[str, str] | None = None
    headers: Mapping[str, str] | None = field(default=None, repr=False)
    operation: str = "Login"

    async def send(self, http_session: aiohttp.ClientSession) -> HttpResponse:
        """Send the request and read the whole body.

        Args:
            http_session: Session used to perform the exchange.

        Returns:
            HttpResponse with status, reason phrase and raw body bytes.

        Raises:
            TransportError: On timeout, dropped connection or other client failure.
        """
        try:
            async with http_session.request(
                self.method,
                self.url,
                data=dict(self.data) if self.data is not None else None,
                headers=dict(self.headers) if self.headers is not None else None,
                timeout=self.timeout,
            ) as resp:
                body = await resp.read()
                return HttpResponse(resp.status, resp.reason or "", body)
        except TimeoutError as e:
            raise TransportError(
                f"{self.operation} request timeout: {e}", kind=TransportFailure.TIMEOUT
            ) from e
        except (aiohttp.ServerDisconnectedError, aiohttp.ClientPayloadError) as e:
            raise TransportError(
                f"{self.operation} error: {e}", kind=TransportFailure.INTERRUPTED
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(
                f"Unexpected {self.operation.lower()} error: {e}",
                kind=TransportFailure.FAILED,
            ) from e


def base_url(config: SessionConfig, instance_url: str | None) -> str:
    """Prefer the org-specific instance URL once it is known."""
    return instance_url if instance_url else config.login_url


def build_login_request(
    config: SessionConfig, instance_url: str | None = None
) -> HttpRequest:
    """Build the OAuth2 password-grant POST request.

    Args:
        config: Validated session configuration.
        instance_url: Instance URL from a previous login, if any.

    Returns:
        HttpRequest ready to send.
    """
    url = base_url(config, instance_url) + OAUTH2_TOKEN_PATH
    logging.info(f"🔑 Login user {config.username} at loginUrl: {url}")
    fields = {
        "grant_type": "password",
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "username": config.username,
        "password": config.password,
        "format": "json",
    }
    return HttpRequest("POST", url, config.timeout, data=fields, operation="Login")


def build_logout_request(
    config: SessionConfig, access_token: str, instance_url: str | None = None
) -> HttpRequest:
    """Build the GET request revoking ``access_token``."""
    query = urlencode({"token": access_token})
    url = f"{base_url(config, instance_url)}{OAUTH2_REVOKE_PATH}?{query}"
    return HttpRequest("GET", url, config.timeout, operation="Logout")


def classify_login_response(status: int, reason: str, body: bytes | str) -> LoginToken:
    """Classify a token endpoint response.

    Args:
        status: HTTP status code.
        reason: HTTP reason phrase.
        body: Raw response body; invalid UTF-8 is reported as DecodeError.

    Returns:
        The decoded LoginToken for a 200 response.

    Raises:
        DecodeError: If a 200 or 400 body cannot be decoded.
        ProtocolError: For a 400 error payload or any other status.
    """
    if status == HTTP_OK:
        return decode_success(body)
    if status == HTTP_BAD_REQUEST:
        error = decode_error(body)
        msg = (
            f"Login error code:[{error.error}] "
            f"description:[{error.error_description}]"
        )
        raise ProtocolError(
            msg,
            status_code=HTTP_BAD_REQUEST,
            description=error.error_description,
            errors=[RestError(message=msg, error_code=error.error)],
        )
    raise ProtocolError(
        f"Login error status:[{status}] reason:[{reason}]",
        status_code=status,
        description=reason,
    )

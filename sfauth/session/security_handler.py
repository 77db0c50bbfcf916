"""Authenticated API client that re-logs in when the session expires."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import aiohttp
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from ..constants import AUTH_RETRY_MAX_ATTEMPTS
from ..errors.internal import SessionExpiredError
from .coordinator import SessionCoordinator
from .protocol import HttpRequest, HttpResponse

HTTP_UNAUTHORIZED = 401


class AuthenticatedClient:
    """Sends API requests with the shared session token.

    A 401 response marks the token used for that request as stale. The next
    attempt calls ``coordinator.login(stale_token)``, so many requests failing
    on the same token trigger a single login between them.
    """

    def __init__(
        self,
        coordinator: SessionCoordinator,
        http_session: aiohttp.ClientSession | None = None,
        max_attempts: int = AUTH_RETRY_MAX_ATTEMPTS,
    ) -> None:
        """Initialize the client.

        Args:
            coordinator: Session coordinator providing tokens.
            http_session: Session for API calls; defaults to the coordinator's.
            max_attempts: Total attempts per request, including the first.
        """
        self.coordinator = coordinator
        self.http_session = http_session or coordinator.http_session
        self.max_attempts = max(1, max_attempts)

    async def _token_for_attempt(self, stale_token: str | None) -> str:
        if stale_token is not None:
            logging.info("🔄 Session expired, logging in again")
            return await self.coordinator.login(stale_token)
        token = self.coordinator.access_token
        if token is None:
            token = await self.coordinator.login(None)
        return token

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        base = self.coordinator.instance_url or self.coordinator.config.login_url
        return base + (path if path.startswith("/") else f"/{path}")

    async def request(
        self,
        method: str,
        path: str,
        *,
        data: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        """Send an authenticated request, re-logging in on 401.

        Args:
            method: HTTP method.
            path: Path relative to the instance URL, or an absolute URL.
            data: Optional form fields.
            headers: Optional extra headers.

        Returns:
            The HttpResponse of the last attempt.

        Raises:
            SessionExpiredError: If every attempt was rejected with 401.
            SessionError: If a re-login or the request itself fails.
        """
        stale_token: str | None = None
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            retry=retry_if_exception_type(SessionExpiredError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                token = await self._token_for_attempt(stale_token)
                merged = dict(headers or {})
                merged["Authorization"] = f"Bearer {token}"
                api_request = HttpRequest(
                    method.upper(),
                    self._url(path),
                    self.coordinator.timeout,
                    data=data,
                    headers=merged,
                    operation="API",
                )
                response = await api_request.send(self.http_session)
                if response.status == HTTP_UNAUTHORIZED:
                    stale_token = token
                    raise SessionExpiredError(token, response.status)
                return response
        raise SessionExpiredError(stale_token)

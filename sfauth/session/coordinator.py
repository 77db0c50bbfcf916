"""Session coordinator: the single owner of the shared login credential."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from ..config.model import SessionConfig
from ..errors.internal import ConfigurationError, ProtocolError, SessionError
from .listeners import ListenerSet, SessionListener
from .protocol import (
    HTTP_OK,
    HttpRequest,
    HttpResponse,
    build_login_request,
    build_logout_request,
    classify_login_response,
)
from .state import SessionState


class SessionCoordinator:
    """Owns the current access token and serialises login/logout transitions.

    Many tasks share one coordinator. A task whose token was rejected calls
    ``login(rejected_token)``; only the first such caller performs a new login
    exchange, every later caller holding the same stale token gets the fresh
    token back without touching the network.

    All transitions run under one ``asyncio.Lock``. Listeners are notified
    inside the transition, so by the time ``login`` returns every listener has
    seen the new token.
    """

    def __init__(
        self, http_session: aiohttp.ClientSession, config: SessionConfig
    ) -> None:
        """Initialize the coordinator.

        Args:
            http_session: HTTP session used for login and revoke requests.
            config: Validated login configuration.

        Raises:
            ConfigurationError: If the session or config is missing.
        """
        if http_session is None:
            raise ConfigurationError("http_session cannot be None")
        if not isinstance(config, SessionConfig):
            raise ConfigurationError("config must be a SessionConfig")
        self.http_session = http_session
        self._config = config
        self._state = SessionState()
        self._lock = asyncio.Lock()
        self._listeners = ListenerSet()

    # ----------------------------- State ----------------------------- #
    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        return self._config.timeout

    @property
    def access_token(self) -> str | None:
        return self._state.access_token

    @property
    def instance_url(self) -> str | None:
        return self._state.instance_url

    @property
    def listeners(self) -> ListenerSet:
        return self._listeners

    # --------------------------- Listeners --------------------------- #
    def add_listener(self, listener: SessionListener) -> bool:
        """Register a listener; returns False if it was already registered."""
        return self._listeners.add(listener)

    def remove_listener(self, listener: SessionListener) -> bool:
        """Unregister a listener; returns False if it was not registered."""
        return self._listeners.remove(listener)

    # ---------------------------- Login ------------------------------ #
    async def login(self, old_token: str | None) -> str:
        """Return a current access token, logging in only when needed.

        A new login exchange happens only when no token is held or the held
        token equals ``old_token``. Otherwise another caller already replaced
        the stale token and the held one is returned immediately.

        Args:
            old_token: The token the caller last used, or None.

        Returns:
            The current access token.

        Raises:
            TransportError: On timeout or transport failure.
            ProtocolError: If the endpoint rejects the login.
            DecodeError: If the response body cannot be decoded.
        """
        async with self._lock:
            held = self._state.access_token
            if held is not None and held != old_token:
                logging.debug("🔁 Token already refreshed by another caller")
                return held

            # re-login targets the org endpoint even though revoke clears it
            instance_url = self._state.instance_url
            if old_token is not None:
                await self._revoke_stale(old_token)

            request = build_login_request(self._config, instance_url)
            response = await request.send(self.http_session)
            return await self._apply_login_response(response)

    async def _revoke_stale(self, old_token: str) -> None:
        """Best-effort revoke of the token being replaced."""
        # old_token may no longer be held (e.g. after a failed login); it is
        # still revoked before a new one is requested.
        try:
            await self._revoke_and_reset(old_token, self._state.instance_url)
        except SessionError as e:
            logging.warning(
                f"⚠️ Error revoking old access token: {type(e).__name__}: {str(e)}"
            )

    def build_login_request(self) -> HttpRequest:
        """Build a login request bound to the current instance URL.

        Does not take the lock, so a companion retry mechanism can send the
        request on its own HTTP session.
        """
        return build_login_request(self._config, self._state.instance_url)

    async def apply_login_response(self, response: HttpResponse) -> str:
        """Classify an externally obtained login response and install it.

        Args:
            response: Completed token endpoint exchange.

        Returns:
            The new access token.

        Raises:
            ProtocolError: If the response is not a successful login.
            DecodeError: If the response body cannot be decoded.
        """
        async with self._lock:
            return await self._apply_login_response(response)

    async def _apply_login_response(self, response: HttpResponse) -> str:
        token = classify_login_response(response.status, response.reason, response.body)
        # don't log token or instance URL
        logging.info("✅ Login successful")
        self._state.install(token)
        await self._listeners.notify_login(token.access_token, token.instance_url)
        return token.access_token

    # ---------------------------- Logout ----------------------------- #
    async def logout(self) -> None:
        """Revoke the current token and clear the session.

        Does nothing when no token is held. Otherwise the token is revoked and,
        whatever the outcome, the session is cleared and listeners are notified.

        Raises:
            ProtocolError: If the revoke endpoint returns a non-200 status.
            TransportError: On timeout or transport failure.
        """
        async with self._lock:
            await self._logout_locked()

    async def _logout_locked(self) -> None:
        token = self._state.access_token
        if token is None:
            return
        await self._revoke_and_reset(token, self._state.instance_url)

    async def _revoke_and_reset(self, token: str, instance_url: str | None) -> None:
        """Revoke ``token``, then clear the session and notify listeners."""
        try:
            request = build_logout_request(self._config, token, instance_url)
            response = await request.send(self.http_session)
            if response.status != HTTP_OK:
                raise ProtocolError(
                    f"Logout error, code: [{response.status}] reason: [{response.reason}]",
                    status_code=response.status,
                    description=response.reason,
                )
            logging.info("👋 Logout successful")
        finally:
            self._state.clear()
            await self._listeners.notify_logout()

    # --------------------------- Lifecycle --------------------------- #
    async def start(self) -> None:
        """Log in with whatever token is currently held (usually none)."""
        await self.login(self._state.access_token)

    async def stop(self) -> None:
        """Log out, revoking the current token if any."""
        await self.logout()

    def __repr__(self) -> str:
        return f"SessionCoordinator(user={self._config.username!r}, state={self._state!r})"

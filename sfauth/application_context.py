"""Central application context for shared async resources."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from .config.model import SessionConfig
from .errors.handling import log_error
from .errors.internal import SessionError
from .logging_config import error_aggregator
from .session.coordinator import SessionCoordinator


class ApplicationContext:
    """Holds the HTTP session and session coordinator for the process lifetime."""

    session: aiohttp.ClientSession | None
    coordinator: SessionCoordinator | None
    _started: bool
    _lock: asyncio.Lock

    def __init__(self) -> None:
        # Core resources
        self.session = None
        self.coordinator = None
        # Lifecycle flags
        self._started = False
        self._lock = asyncio.Lock()

    # ------------------------- Construction ------------------------- #
    @classmethod
    async def create(
        cls,
        config: SessionConfig,
        http_session: aiohttp.ClientSession | None = None,
    ) -> ApplicationContext:
        """Create a context with an HTTP session and a coordinator.

        Args:
            config: Validated session configuration.
            http_session: Optional existing session; a new one is opened otherwise.

        Returns:
            A context ready to be started.
        """
        ctx = cls()
        logging.debug("🧪 Creating application context")
        ctx.session = http_session or aiohttp.ClientSession()
        logging.debug("🔗 HTTP session created")
        ctx.coordinator = SessionCoordinator(ctx.session, config)
        return ctx

    @property
    def started(self) -> bool:
        return self._started

    # --------------------------- Lifecycle -------------------------- #
    async def start(self) -> None:
        """Perform the initial login. Idempotent.

        Raises:
            SessionError: If the initial login fails.
        """
        async with self._lock:
            if self._started:
                return
            if self.coordinator:
                await self.coordinator.start()
            self._started = True
            logging.debug("🚀 Application context started")

    async def shutdown(self) -> None:
        """Log out and close the HTTP session.

        A failing logout is logged; the HTTP session is closed regardless.
        Errors recorded during the process lifetime are summarised last.
        """
        async with self._lock:
            logging.info("🔻 Application context shutdown initiated")
            await self._stop_coordinator()
            await self._close_http_session()
            self._started = False
            logging.info("✅ Application context shutdown complete")
            error_aggregator.log_summary_report()

    async def _stop_coordinator(self) -> None:
        if not self.coordinator:
            return
        try:
            await self.coordinator.stop()
        except SessionError as e:
            log_error("Error during logout at shutdown", e)

    async def _close_http_session(self) -> None:
        """Close the HTTP session gracefully."""
        if not self.session:
            return
        try:
            await self.session.close()
        except (aiohttp.ClientError, OSError) as e:
            logging.error(f"💥 Error closing HTTP session: {str(e)}")
        finally:
            self.session = None

    async def __aenter__(self) -> ApplicationContext:
        try:
            await self.start()
        except BaseException:
            await self.shutdown()
            raise
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:
        await self.shutdown()

#!/usr/bin/env python3
"""
Command line entry point: verify the configured credentials by logging in
and out again.
"""

import asyncio
import logging
import sys

from .application_context import ApplicationContext
from .config import load_session_config
from .errors.handling import log_error
from .errors.internal import InternalError
from .logging_config import LoggerConfigurator
from .session.listeners import HookListener


def _log_login(_access_token: str, instance_url: str) -> None:
    logging.info(f"🏢 Session established instance_url={instance_url}")


async def main(config_file: str | None = None) -> int:
    """Log in with the configured credentials, then log out.

    Args:
        config_file: Optional JSON config file; environment overrides apply.

    Returns:
        Process exit code.
    """
    try:
        config = load_session_config(config_file)
        ctx = await ApplicationContext.create(config)
        ctx.coordinator.add_listener(HookListener(on_login=_log_login, name="cli"))
        async with ctx:
            logging.info(f"✅ Credentials valid for user={config.username}")
        return 0
    except InternalError as e:
        log_error("Session check failed", e)
        return 1


def run() -> None:
    """Synchronous entry point for the application."""
    LoggerConfigurator().configure()
    config_file = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        sys.exit(asyncio.run(main(config_file)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()

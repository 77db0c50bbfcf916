"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..constants import (
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_CONFIG_FILE,
    ENV_LOGIN_URL,
    ENV_PASSWORD,
    ENV_REQUEST_TIMEOUT_MS,
    ENV_USERNAME,
)
from ..errors.internal import ConfigurationError
from .model import SessionConfig

# Environment variable -> SessionConfig field
ENV_FIELDS: dict[str, str] = {
    ENV_LOGIN_URL: "login_url",
    ENV_CLIENT_ID: "client_id",
    ENV_CLIENT_SECRET: "client_secret",
    ENV_USERNAME: "username",
    ENV_PASSWORD: "password",
    ENV_REQUEST_TIMEOUT_MS: "timeout_ms",
}


def read_config_file(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read a JSON configuration object from disk.

    Args:
        path: Path to the JSON file.

    Returns:
        The decoded object.

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return data


def load_session_config(
    path: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> SessionConfig:
    """Load and validate the session configuration.

    Values from the JSON file (``path`` or ``SFAUTH_CONFIG_FILE``) are applied
    first, then overridden by ``SFAUTH_*`` environment variables.

    Args:
        path: Optional JSON config file.
        environ: Environment mapping, defaults to ``os.environ``.

    Returns:
        Validated SessionConfig.

    Raises:
        ConfigurationError: If the file is unreadable or a value is missing/invalid.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    config_file = path or env.get(ENV_CONFIG_FILE)
    if config_file:
        values.update(read_config_file(config_file))
        logging.debug(f"📁 Loaded session config file path={config_file}")
    overrides = {field: env[name] for name, field in ENV_FIELDS.items() if env.get(name)}
    if overrides:
        logging.debug(f"🔧 Applied environment overrides fields={sorted(overrides)}")
    values.update(overrides)
    return SessionConfig.from_dict(values)

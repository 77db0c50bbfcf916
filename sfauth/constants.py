"""
Configuration constants for the sfauth session coordinator

This module contains the defaults and wire paths used throughout the package.
Numeric defaults can be overridden by setting an environment variable with the
same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


# Login host used when no explicit login URL is configured
DEFAULT_LOGIN_URL = "https://login.salesforce.com"

# Per-request timeout for login and revoke calls (milliseconds)
DEFAULT_REQUEST_TIMEOUT_MS = _get_env_int("SFAUTH_REQUEST_TIMEOUT_MS", 60_000)

# OAuth2 endpoints, relative to the instance URL or login URL
OAUTH2_TOKEN_PATH = "/services/oauth2/token"
OAUTH2_REVOKE_PATH = "/services/oauth2/revoke"

# Attempts made by the authenticated client (first try + re-login retries)
AUTH_RETRY_MAX_ATTEMPTS = _get_env_int("SFAUTH_AUTH_RETRY_MAX_ATTEMPTS", 2)

# Environment variable names read by the config loader
ENV_CONFIG_FILE = "SFAUTH_CONFIG_FILE"
ENV_LOGIN_URL = "SFAUTH_LOGIN_URL"
ENV_CLIENT_ID = "SFAUTH_CLIENT_ID"
ENV_CLIENT_SECRET = "SFAUTH_CLIENT_SECRET"
ENV_USERNAME = "SFAUTH_USERNAME"
ENV_PASSWORD = "SFAUTH_PASSWORD"
ENV_REQUEST_TIMEOUT_MS = "SFAUTH_REQUEST_TIMEOUT_MS"

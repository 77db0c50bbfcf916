from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiohttp
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..constants import DEFAULT_LOGIN_URL, DEFAULT_REQUEST_TIMEOUT_MS
from ..errors.internal import ConfigurationError


def _describe_validation_error(exc: ValidationError) -> str:
    """Build a one-line summary of the offending fields."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "config"
        parts.append(f"{loc} ({err.get('msg', 'invalid')})")
    return ", ".join(parts)


class SessionConfig(BaseModel):
    """Login configuration for the password-grant session.

    Validated eagerly: a missing or empty required field raises
    ConfigurationError at construction time. Credentials are kept verbatim,
    including leading or trailing whitespace; a blank value is rejected.

    Attributes:
        login_url: Generic login host, stored without trailing slash. Optional:
            defaults to the production login host when not configured.
        client_id: Connected app consumer key.
        client_secret: Connected app consumer secret.
        username: Login username.
        password: Login password (including any security token suffix).
        timeout_ms: Per-request timeout for login and revoke calls.
    """

    model_config = ConfigDict(frozen=True)

    login_url: str = Field(default=DEFAULT_LOGIN_URL, min_length=1)
    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)
    timeout_ms: int = Field(default=DEFAULT_REQUEST_TIMEOUT_MS, gt=0)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid session configuration: {_describe_validation_error(e)}",
                data={"fields": [err.get("loc") for err in e.errors()]},
            ) from e

    @field_validator("login_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Drop trailing '/' so endpoint paths can be appended directly."""
        stripped = v.strip().rstrip("/")
        if not stripped:
            raise ValueError("login_url must not be empty")
        return stripped

    @field_validator("client_id", "client_secret", "username", "password")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        """Timeout applied to every login and revoke request."""
        return aiohttp.ClientTimeout(total=self.timeout_ms / 1000)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionConfig:
        """Create SessionConfig from a dictionary, ignoring None values.

        Args:
            data: Mapping of configuration values.

        Returns:
            SessionConfig instance.

        Raises:
            ConfigurationError: If a required value is missing or invalid.
        """
        return cls(**{k: v for k, v in data.items() if v is not None})

"""Credential state cell owned by a SessionCoordinator."""

from __future__ import annotations

from dataclasses import dataclass

from .types import LoginToken


@dataclass
class SessionState:
    """Current access token and instance URL.

    Both fields are set together by ``install`` and cleared together by
    ``clear``. Only the owning coordinator mutates them, under its lock.

    Attributes:
        access_token: Current bearer token, or None when logged out.
        instance_url: Org-specific base URL, or None when logged out.
    """

    access_token: str | None = None
    instance_url: str | None = None

    @property
    def authenticated(self) -> bool:
        return self.access_token is not None

    def install(self, token: LoginToken) -> None:
        self.access_token = token.access_token
        self.instance_url = token.instance_url

    def clear(self) -> None:
        self.access_token = None
        self.instance_url = None

    def __repr__(self) -> str:
        # never print the token itself
        return f"SessionState(authenticated={self.authenticated}, instance_url={self.instance_url!r})"

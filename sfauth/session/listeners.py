"""Session listeners and the registry used to notify them."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionListener(Protocol):
    """Observer notified about login and logout transitions.

    Either method may be a plain function or a coroutine function. Listeners
    must not rely on being called in any particular order.
    """

    def on_login(self, access_token: str, instance_url: str) -> Awaitable[None] | None: ...

    def on_logout(self) -> Awaitable[None] | None: ...


class HookListener:
    """Adapt plain callables to the SessionListener interface.

    Equality is identity, so the same HookListener instance must be used to
    unregister it.
    """

    def __init__(
        self,
        on_login: Callable[[str, str], Any] | None = None,
        on_logout: Callable[[], Any] | None = None,
        name: str | None = None,
    ) -> None:
        self._on_login = on_login
        self._on_logout = on_logout
        self.name = name or "hook"

    def on_login(self, access_token: str, instance_url: str) -> Any:
        if self._on_login is not None:
            return self._on_login(access_token, instance_url)
        return None

    def on_logout(self) -> Any:
        if self._on_logout is not None:
            return self._on_logout()
        return None

    def __repr__(self) -> str:
        return f"HookListener({self.name})"


class ListenerSet:
    """Duplicate-free collection of listeners.

    Membership uses ==, so listeners need not be hashable.

    Registration never waits on a login/logout transition. Notification works
    on a snapshot, so (un)registering from inside a callback does not affect
    the pass in progress.
    """

    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []

    def add(self, listener: SessionListener) -> bool:
        """Register ``listener``. Returns False if it was already present."""
        if listener in self._listeners:
            return False
        self._listeners.append(listener)
        return True

    def remove(self, listener: SessionListener) -> bool:
        """Unregister ``listener``. Returns False if it was not registered."""
        if listener not in self._listeners:
            return False
        self._listeners.remove(listener)
        return True

    def snapshot(self) -> tuple[SessionListener, ...]:
        return tuple(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners

    async def notify_login(self, access_token: str, instance_url: str) -> None:
        """Call ``on_login`` on every listener, isolating failures."""
        for listener in self.snapshot():
            await _call_isolated(listener, "on_login", access_token, instance_url)

    async def notify_logout(self) -> None:
        """Call ``on_logout`` on every listener, isolating failures."""
        for listener in self.snapshot():
            await _call_isolated(listener, "on_logout")


async def _call_isolated(listener: SessionListener, method: str, *args: str) -> None:
    try:
        result = getattr(listener, method)(*args)
        if inspect.isawaitable(result):
            await result
    except Exception as e:  # noqa: BLE001
        logging.warning(
            f"⚠️ Unexpected error from listener {listener!r} during {method}: {type(e).__name__}: {str(e)}"
        )

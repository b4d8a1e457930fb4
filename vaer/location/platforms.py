"""
Platforms for environments without a browser.

The CLI and the server have no location hardware to ask, so the position is
configured up front and reported the way a browser would report it.
"""

import asyncio
from collections.abc import Callable

from ..settings import Settings
from .resolver import is_secure_origin
from .types import (
    PermissionState,
    Position,
    PositionError,
    PositionErrorCode,
    PositionOptions,
)


class StaticPermissionStatus:
    def __init__(self, state: PermissionState) -> None:
        self._state = state
        self._listeners: list[Callable[[], None]] = []

    @property
    def state(self) -> PermissionState:
        return self._state

    def set_state(self, state: PermissionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener()

    def add_change_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def remove_change_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)


class StaticPermissions:
    def __init__(self, status: StaticPermissionStatus) -> None:
        self.status = status

    async def query(self, name: str) -> StaticPermissionStatus:
        return self.status


class StaticGeolocation:
    """
    Reports a fixed position, or POSITION_UNAVAILABLE if none is configured.

    Callbacks are scheduled on the running loop rather than called inline,
    like a browser would.
    """

    def __init__(self, position: tuple[float, float] | None) -> None:
        self.position = position

    def get_current_position(
        self,
        on_success: Callable[[Position], None],
        on_error: Callable[[PositionError], None],
        options: PositionOptions,
    ) -> None:
        loop = asyncio.get_running_loop()

        if self.position is None:
            error = PositionError(
                PositionErrorCode.POSITION_UNAVAILABLE, "No position configured"
            )
            loop.call_soon(on_error, error)
            return

        latitude, longitude = self.position
        loop.call_soon(on_success, Position(latitude=latitude, longitude=longitude))


class StaticPlatform:
    def __init__(
        self,
        *,
        position: tuple[float, float] | None,
        is_secure_context: bool = True,
        permission: PermissionState = PermissionState.GRANTED,
    ) -> None:
        self._geolocation = StaticGeolocation(position)
        self._permissions = StaticPermissions(StaticPermissionStatus(permission))
        self._is_secure_context = is_secure_context

    @property
    def geolocation(self) -> StaticGeolocation:
        return self._geolocation

    @property
    def permissions(self) -> StaticPermissions:
        return self._permissions

    @property
    def is_secure_context(self) -> bool:
        return self._is_secure_context

    @classmethod
    def from_settings(
        cls, settings: Settings, *, position: tuple[float, float] | None = None
    ) -> "StaticPlatform":
        return cls(
            position=position or settings.static_position,
            is_secure_context=is_secure_origin(settings.app_url),
        )

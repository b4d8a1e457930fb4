import enum
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude out of range: {self.longitude}")


class PermissionState(str, enum.Enum):
    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"


class PositionErrorCode(enum.IntEnum):
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


@dataclass(frozen=True, kw_only=True)
class PositionOptions:
    enable_high_accuracy: bool = True
    timeout: timedelta = timedelta(seconds=20)
    # How old a cached position the platform may hand back
    maximum_age: timedelta = timedelta(minutes=5)


@dataclass(frozen=True, kw_only=True)
class Position:
    latitude: float
    longitude: float
    accuracy: float | None = None


@dataclass(frozen=True)
class PositionError:
    code: int
    message: str = ""


class PermissionStatus(Protocol):
    """The current permission state for a capability, as reported by the platform."""

    @property
    def state(self) -> PermissionState: ...

    def add_change_listener(self, listener: Callable[[], None]) -> None: ...

    def remove_change_listener(self, listener: Callable[[], None]) -> None: ...


class Permissions(Protocol):
    def query(self, name: str) -> Awaitable[PermissionStatus]: ...


class Geolocation(Protocol):
    def get_current_position(
        self,
        on_success: Callable[[Position], None],
        on_error: Callable[[PositionError], None],
        options: PositionOptions,
    ) -> None:
        """
        Request the current position. Exactly one of the callbacks is
        expected to be invoked later on the event loop, though platforms
        are allowed to never call back at all.
        """
        ...


class Platform(Protocol):
    """The capabilities of the environment the application runs in."""

    @property
    def geolocation(self) -> Geolocation | None: ...

    @property
    def permissions(self) -> Permissions | None: ...

    @property
    def is_secure_context(self) -> bool: ...

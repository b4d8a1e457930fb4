from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from vaer.location.platforms import StaticPermissionStatus
from vaer.location.types import (
    PermissionState,
    Position,
    PositionError,
    PositionOptions,
)


class FakeGeolocation:
    """
    Records position requests. Answers with `outcome` on the next loop
    iteration, or never if there is no outcome.
    """

    def __init__(self, outcome: Position | PositionError | None = None) -> None:
        self.outcome = outcome
        self.calls: list[PositionOptions] = []
        self.on_success: Callable[[Position], None] | None = None
        self.on_error: Callable[[PositionError], None] | None = None

    def get_current_position(
        self,
        on_success: Callable[[Position], None],
        on_error: Callable[[PositionError], None],
        options: PositionOptions,
    ) -> None:
        self.calls.append(options)
        self.on_success = on_success
        self.on_error = on_error

        loop = asyncio.get_running_loop()
        if isinstance(self.outcome, Position):
            loop.call_soon(on_success, self.outcome)
        elif isinstance(self.outcome, PositionError):
            loop.call_soon(on_error, self.outcome)


class FakePermissions:
    def __init__(
        self, status: StaticPermissionStatus | None = None, *, error: Exception | None = None
    ) -> None:
        self.status = status
        self.error = error
        self.queries: list[str] = []

    async def query(self, name: str) -> StaticPermissionStatus:
        self.queries.append(name)
        if self.error:
            raise self.error
        assert self.status is not None
        return self.status


@dataclass
class FakePlatform:
    geolocation: FakeGeolocation | None = field(default_factory=FakeGeolocation)
    permissions: FakePermissions | None = None
    is_secure_context: bool = True


async def settle_loop(iterations: int = 5) -> None:
    for _ in range(iterations):
        await asyncio.sleep(0)


@pytest.fixture
def oslo() -> Position:
    return Position(latitude=59.9171, longitude=10.7276, accuracy=12.0)


@pytest.fixture
def prompt_status() -> StaticPermissionStatus:
    return StaticPermissionStatus(PermissionState.PROMPT)

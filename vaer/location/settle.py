"""
A single-assignment result cell.

Several sources may race to produce the outcome of one operation (platform
callbacks, timers, permission change events). The cell accepts the first
outcome and silently discards the rest.
"""

import asyncio
import enum
from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class SettleState(enum.Enum):
    PENDING = "pending"
    SETTLED = "settled"


class SettleOnce(Generic[T]):
    """
    Holds the outcome of one asynchronous operation.

    The only transition is PENDING -> SETTLED, made by whichever of
    `resolve()` or `reject()` is called first. Later calls return False and
    have no effect. Callbacks registered with `on_settle()` run once, on the
    transition, and are used to release timers and listeners.
    """

    def __init__(self, *, name: str = "operation") -> None:
        self.name = name
        self.state = SettleState.PENDING
        self._future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._on_settle: list[Callable[[], None]] = []

    @property
    def settled(self) -> bool:
        return self.state is SettleState.SETTLED

    def on_settle(self, callback: Callable[[], None]) -> None:
        if self.settled:
            callback()
        else:
            self._on_settle.append(callback)

    def resolve(self, value: T, *, source: str = "-") -> bool:
        if not self._transition(source):
            return False
        self._future.set_result(value)
        return True

    def reject(self, exc: BaseException, *, source: str = "-") -> bool:
        if not self._transition(source):
            return False
        self._future.set_exception(exc)
        return True

    def cancel(self, *, source: str = "-") -> bool:
        if not self._transition(source):
            return False
        self._future.cancel()
        return True

    async def wait(self) -> T:
        # Shield so that cancelling the waiter doesn't settle the cell
        return await asyncio.shield(self._future)

    def _transition(self, source: str) -> bool:
        if self.settled:
            logger.debug("Ignoring late outcome", operation=self.name, source=source)
            return False

        self.state = SettleState.SETTLED
        logger.debug("Settled", operation=self.name, source=source)

        callbacks, self._on_settle = self._on_settle, []
        for callback in callbacks:
            callback()
        return True

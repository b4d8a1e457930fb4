"""
Resolve the user's current location.

The platform exposes a callback based location API, an optional permission
API and a secure-context flag. `resolve_location` layers the permission
checks, a fallback for platforms that never report permission changes, and an
outer timeout on top of a single position request, and turns the outcome into
either a `Coordinate` or one `LocationError`.
"""

import asyncio
from datetime import timedelta
from ipaddress import ip_address
from typing import Any
from urllib.parse import urlsplit

import structlog

from .exceptions import (
    InsecureContext,
    LocationError,
    PermissionBlocked,
    PermissionDenied,
    PositionUnavailable,
    Timeout,
    Unknown,
    Unsupported,
)
from .settle import SettleOnce
from .types import (
    Coordinate,
    Geolocation,
    PermissionState,
    PermissionStatus,
    Platform,
    Position,
    PositionError,
    PositionErrorCode,
    PositionOptions,
)

logger = structlog.get_logger()

DEFAULT_OUTER_TIMEOUT = timedelta(seconds=25)
DEFAULT_PROMPT_FALLBACK_DELAY = timedelta(seconds=1)

ERROR_CODE_MAP: dict[int, type[LocationError]] = {
    PositionErrorCode.PERMISSION_DENIED: PermissionDenied,
    PositionErrorCode.POSITION_UNAVAILABLE: PositionUnavailable,
    PositionErrorCode.TIMEOUT: Timeout,
}


def location_error_for(error: PositionError) -> LocationError:
    """
    Map a platform error code to our error taxonomy.
    """

    return ERROR_CODE_MAP.get(error.code, Unknown)()


async def resolve_location(
    platform: Platform,
    *,
    options: PositionOptions | None = None,
    outer_timeout: timedelta = DEFAULT_OUTER_TIMEOUT,
    prompt_fallback_delay: timedelta = DEFAULT_PROMPT_FALLBACK_DELAY,
) -> Coordinate:
    """
    Get the current coordinate from the platform.

    Raises Unsupported or InsecureContext without touching the platform, and
    PermissionDenied, PositionUnavailable, Timeout or Unknown based on what
    the platform reports. The first outcome wins, anything reported after
    that is ignored.
    """

    geolocation = platform.geolocation
    if geolocation is None:
        raise Unsupported()

    if not platform.is_secure_context:
        raise InsecureContext()

    cell: SettleOnce[Coordinate] = SettleOnce(name="resolve-location")
    request = _LocationRequest(
        cell,
        geolocation,
        options=options or PositionOptions(),
        outer_timeout=outer_timeout,
    )

    permissions = platform.permissions
    if permissions is None:
        request.start(source="no-permissions-api")
    else:
        try:
            status = await permissions.query("geolocation")
        except Exception as e:
            logger.info("Permissions API error, requesting location anyway", error=str(e))
            request.start(source="permissions-error")
        else:
            _handle_permission_state(
                cell, request, status, prompt_fallback_delay=prompt_fallback_delay
            )

    try:
        return await cell.wait()
    except asyncio.CancelledError:
        cell.cancel(source="caller")
        raise


def _handle_permission_state(
    cell: SettleOnce[Coordinate],
    request: "_LocationRequest",
    status: PermissionStatus,
    *,
    prompt_fallback_delay: timedelta,
) -> None:
    logger.info("Permission state", state=status.state)

    if status.state == PermissionState.DENIED:
        cell.reject(PermissionBlocked(), source="permission-query")
        return

    if status.state != PermissionState.PROMPT:
        request.start(source="permission-query")
        return

    logger.info("Permission prompt detected, waiting for user response")

    def on_change() -> None:
        logger.info("Permission state changed", state=status.state)
        if status.state == PermissionState.GRANTED:
            request.start(source="permission-change")
        elif status.state == PermissionState.DENIED:
            cell.reject(PermissionDenied(), source="permission-change")

    status.add_change_listener(on_change)
    cell.on_settle(lambda: status.remove_change_listener(on_change))

    # Some platforms never report a change, so ask for the position anyway
    loop = asyncio.get_running_loop()
    fallback = loop.call_later(
        prompt_fallback_delay.total_seconds(),
        request.start,
        "prompt-fallback",
    )
    cell.on_settle(fallback.cancel)


class _LocationRequest:
    """
    One position request against the platform, guarded by an outer timeout.

    `start()` may be called from several places (permission change, prompt
    fallback), but the platform is only asked once.
    """

    def __init__(
        self,
        cell: SettleOnce[Coordinate],
        geolocation: Geolocation,
        *,
        options: PositionOptions,
        outer_timeout: timedelta,
    ) -> None:
        self.cell = cell
        self.geolocation = geolocation
        self.options = options
        self.outer_timeout = outer_timeout
        self.started = False

    def start(self, source: str = "-") -> None:
        if self.started or self.cell.settled:
            return
        self.started = True

        loop = asyncio.get_running_loop()
        timer = loop.call_later(self.outer_timeout.total_seconds(), self._on_timeout)
        self.cell.on_settle(timer.cancel)

        logger.info(
            "Requesting location",
            source=source,
            enable_high_accuracy=self.options.enable_high_accuracy,
            timeout=self.options.timeout.total_seconds(),
            maximum_age=self.options.maximum_age.total_seconds(),
        )
        try:
            self.geolocation.get_current_position(
                self._on_success, self._on_error, self.options
            )
        except Exception:
            logger.exception("Location request failed")
            self.cell.reject(Unknown(), source="request")

    def _on_success(self, position: Position) -> None:
        try:
            coordinate = Coordinate(position.latitude, position.longitude)
        except ValueError:
            logger.warning(
                "Platform reported an invalid position",
                latitude=position.latitude,
                longitude=position.longitude,
            )
            self.cell.reject(PositionUnavailable(), source="success-callback")
            return

        if self.cell.resolve(coordinate, source="success-callback"):
            logger.info(
                "Location obtained",
                latitude=position.latitude,
                longitude=position.longitude,
                accuracy=position.accuracy,
            )

    def _on_error(self, error: PositionError) -> None:
        if self.cell.reject(location_error_for(error), source="error-callback"):
            logger.info("Location error", code=error.code, message=error.message)

    def _on_timeout(self) -> None:
        if self.cell.reject(Timeout(), source="outer-timeout"):
            logger.info("Location request timed out")


def is_secure_origin(url: str) -> bool:
    """
    Check if an origin counts as a secure context: either served over HTTPS
    or from a local development host.
    """

    parts = urlsplit(url)
    if parts.scheme == "https":
        return True

    host = (parts.hostname or "").lower()
    if host == "localhost" or host.endswith(".localhost"):
        return True

    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def describe_platform(platform: Platform) -> dict[str, Any]:
    """
    Snapshot of the location capabilities of a platform, for debugging.
    """

    info = {
        "is_supported": platform.geolocation is not None,
        "is_secure_context": platform.is_secure_context,
        "permissions_api": platform.permissions is not None,
    }
    logger.debug("Geolocation debug info", **info)
    return info

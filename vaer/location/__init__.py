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
from .resolver import describe_platform, is_secure_origin, resolve_location
from .types import Coordinate, PositionOptions

__all__ = [
    "Coordinate",
    "InsecureContext",
    "LocationError",
    "PermissionBlocked",
    "PermissionDenied",
    "PositionOptions",
    "PositionUnavailable",
    "Timeout",
    "Unknown",
    "Unsupported",
    "describe_platform",
    "is_secure_origin",
    "resolve_location",
]

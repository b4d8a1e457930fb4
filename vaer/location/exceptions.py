class LocationError(Exception):
    """
    Base exception for failures to resolve the current location.

    Every failure carries a `kind`, which is stable and meant for programmatic
    checks, and a `hint`, which tells the user what to do instead.
    """

    kind = "unknown"
    hint = "Location access is not available. Please search for a city instead."

    def __init__(self, hint: str | None = None) -> None:
        if hint is not None:
            self.hint = hint
        super().__init__(self.hint)


class Unsupported(LocationError):
    kind = "unsupported"
    hint = (
        "Geolocation is not supported by this browser. "
        "Please try searching for a city instead."
    )


class InsecureContext(LocationError):
    kind = "insecure_context"
    hint = (
        "Location access requires a secure connection (HTTPS). "
        "Please search for a city instead."
    )


class PermissionDenied(LocationError):
    kind = "permission_denied"
    hint = (
        "Location access denied. Please allow location access in your "
        "browser settings or search for a city instead."
    )


class PermissionBlocked(PermissionDenied):
    """Permission was already denied before we asked for a position."""

    hint = (
        "Location access is blocked. Please enable location access in your "
        "browser settings or search for a city instead."
    )


class PositionUnavailable(LocationError):
    kind = "position_unavailable"
    hint = (
        "Location information is unavailable. "
        "Please try searching for a city instead."
    )


class Timeout(LocationError):
    kind = "timeout"
    hint = "Location request timed out. Please try again or search for a city instead."


class Unknown(LocationError):
    pass

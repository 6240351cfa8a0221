"""Browser geolocation contract.

The position is acquired on the client. The API only receives the resulting
coordinates or the failure code reported by ``GeolocationPositionError``.
"""

from __future__ import annotations

from ...config import settings

PERMISSION_DENIED = 1
POSITION_UNAVAILABLE = 2
TIMEOUT = 3


def position_options() -> dict:
    """Options the client passes to ``getCurrentPosition``."""
    return {
        "enableHighAccuracy": True,
        "timeout": settings.geolocation_timeout_seconds * 1000,
        "maximumAge": 0,
    }


class GeolocationError(Exception):
    user_message = "could not get your location"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(self.user_message)
        self.detail = detail


class GeolocationDenied(GeolocationError):
    user_message = "permission denied"


class GeolocationUnavailable(GeolocationError):
    user_message = "location unavailable"


class GeolocationTimeout(GeolocationError):
    user_message = "timed out"


_ERRORS_BY_CODE: dict[int, type[GeolocationError]] = {
    PERMISSION_DENIED: GeolocationDenied,
    POSITION_UNAVAILABLE: GeolocationUnavailable,
    TIMEOUT: GeolocationTimeout,
}


def geolocation_error(code: int, detail: str | None = None) -> GeolocationError:
    return _ERRORS_BY_CODE.get(code, GeolocationError)(detail)

"""Deep links that hand a planned route over to navigation apps."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote

from ...config import settings
from ...models.domain import GeoPoint

GOOGLE_MAPS_DIR_URL = "https://www.google.com/maps/dir/?api=1"
WAZE_URL = "https://waze.com/ul"


def _js_number(value: float) -> str:
    """Render a coordinate the way JavaScript template strings do (10.0 -> "10")."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _lat_lng(point: GeoPoint) -> str:
    return f"{_js_number(point.lat)},{_js_number(point.lng)}"


def google_maps_url(
    origin: GeoPoint,
    stops: Sequence[GeoPoint],
    max_waypoints: int | None = None,
    destination: GeoPoint | None = None,
) -> str | None:
    """Driving directions from ``origin`` through ``stops``.

    Without a fixed ``destination`` the last stop is the destination and the
    ones before it become waypoints. With one, every stop is a waypoint.
    Waypoints are truncated to the Google Maps limit.
    """
    if not stops:
        return None
    limit = settings.max_google_waypoints if max_waypoints is None else max_waypoints

    if destination is None:
        destination, intermediates = stops[-1], stops[:-1]
    else:
        intermediates = stops
    url = (
        f"{GOOGLE_MAPS_DIR_URL}&origin={_lat_lng(origin)}"
        f"&destination={_lat_lng(destination)}&travelmode=driving"
    )
    waypoints = [_lat_lng(point) for point in intermediates][:limit]
    if waypoints:
        url += f"&waypoints={quote('|'.join(waypoints), safe='')}"
    return url


def waze_url(stops: Sequence[GeoPoint]) -> str | None:
    """Waze only navigates to a single destination: the first stop."""
    if not stops:
        return None
    return f"{WAZE_URL}?ll={_lat_lng(stops[0])}&navigate=yes"

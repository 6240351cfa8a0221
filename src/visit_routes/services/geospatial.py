"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from ..models.domain import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters between two points."""

    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def tour_length(
    points: Sequence[GeoPoint],
    origin: GeoPoint | None = None,
    closed: bool = False,
) -> float:
    """Sum of leg distances in meters along ``points``.

    With ``origin`` the first leg starts there. ``closed`` adds the leg from the
    last point back to the first point of the sequence (not the origin).
    """

    total = 0.0
    if origin is not None and points:
        total += haversine_m(origin, points[0])
    for current, following in zip(points, points[1:]):
        total += haversine_m(current, following)
    if closed and len(points) > 1:
        total += haversine_m(points[-1], points[0])
    return total

"""Visit sequence optimization for a single field route.

The visiting order is built greedily (nearest neighbour from the origin) and
then improved with 2-opt segment reversals. Both steps use straight-line
haversine distances; the real road distance only comes back from OSRM once the
order is fixed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ...config import settings
from ...models.domain import GeoPoint
from ..geospatial import haversine_m

MIN_REFINABLE_STOPS = 4

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RefinementResult:
    tour: list[GeoPoint]
    passes: int
    swaps: int


def nearest_neighbor_tour(origin: GeoPoint, points: Sequence[GeoPoint]) -> list[GeoPoint]:
    """Order ``points`` by repeatedly travelling to the closest unvisited one.

    Ties keep the earliest point in the input order.
    """
    unvisited = list(points)
    if len(unvisited) <= 1:
        return unvisited

    tour: list[GeoPoint] = []
    current = origin
    while unvisited:
        best_index = 0
        best_distance = haversine_m(current, unvisited[0])
        for index in range(1, len(unvisited)):
            distance = haversine_m(current, unvisited[index])
            if distance < best_distance:
                best_index = index
                best_distance = distance
        current = unvisited.pop(best_index)
        tour.append(current)
    return tour


def refine_tour(
    tour: Sequence[GeoPoint],
    tolerance_m: float | None = None,
    max_passes: int | None = None,
) -> RefinementResult:
    """Improve a tour with 2-opt moves over the cyclic sequence.

    For each pair ``i < j`` the edges ``(i, i+1)`` and ``(j, j+1 mod n)`` are
    replaced by ``(i, j)`` and ``(i+1, j+1 mod n)`` by reversing ``i+1..j`` when
    that saves more than ``tolerance_m`` meters. Passes repeat until one makes
    no swap or ``max_passes`` is reached. The first stop never moves.
    """
    tolerance = settings.refine_tolerance_meters if tolerance_m is None else tolerance_m
    pass_limit = settings.refine_max_passes if max_passes is None else max_passes

    route = list(tour)
    n = len(route)
    if n < MIN_REFINABLE_STOPS:
        return RefinementResult(tour=route, passes=0, swaps=0)

    passes = 0
    swaps = 0
    improved = True
    while improved and passes < pass_limit:
        improved = False
        passes += 1
        for i in range(n - 1):
            for j in range(i + 1, n):
                a, b = route[i], route[i + 1]
                c, d = route[j], route[(j + 1) % n]
                old_length = haversine_m(a, b) + haversine_m(c, d)
                new_length = haversine_m(a, c) + haversine_m(b, d)
                if new_length < old_length - tolerance:
                    route[i + 1 : j + 1] = reversed(route[i + 1 : j + 1])
                    swaps += 1
                    improved = True

    if improved:
        logger.warning(f"2-opt stopped at the pass limit ({pass_limit}) with {n} stops")
    logger.debug(f"2-opt finished: {passes} passes, {swaps} swaps, {n} stops")
    return RefinementResult(tour=route, passes=passes, swaps=swaps)


def two_opt(
    tour: Sequence[GeoPoint],
    tolerance_m: float | None = None,
    max_passes: int | None = None,
) -> list[GeoPoint]:
    return refine_tour(tour, tolerance_m=tolerance_m, max_passes=max_passes).tour


def optimize_sequence(origin: GeoPoint, points: Sequence[GeoPoint]) -> list[GeoPoint]:
    """Nearest-neighbour construction followed by 2-opt when there are enough stops."""
    tour = nearest_neighbor_tour(origin, points)
    if len(tour) >= MIN_REFINABLE_STOPS:
        tour = two_opt(tour)
    return tour

"""Routing orchestration service."""

from __future__ import annotations

import logging
import threading
from typing import Sequence

from ...models.domain import GeoPoint
from .errors import EmptyPointSet, MissingOrigin, RouteCancelled, RoutingProviderError
from .models import RoutePlan, ensure_distinct_points
from .osrm_client import OSRMClient
from .sequence_solver import optimize_sequence

logger = logging.getLogger(__name__)


def _check_cancelled(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise RouteCancelled()


def _polyline_from_geometry(route: dict) -> list[tuple[float, float]]:
    """GeoJSON geometry is [lng, lat]; the plan exposes (lat, lng)."""
    geometry = route.get("geometry") or {}
    try:
        return [(float(coord[1]), float(coord[0])) for coord in geometry.get("coordinates", [])]
    except (IndexError, TypeError, ValueError) as exc:
        raise RoutingProviderError(f"OSRM route geometry is malformed: {exc}") from exc


def _instructions_from_legs(route: dict) -> list[str]:
    instructions: list[str] = []
    for leg in route.get("legs") or []:
        for step in leg.get("steps") or []:
            maneuver = step.get("maneuver") or {}
            instruction = maneuver.get("instruction")
            if instruction:
                instructions.append(instruction)
    return instructions


def plan_route(
    origin: GeoPoint | None,
    points: Sequence[GeoPoint],
    optimize_order: bool = True,
    *,
    client: OSRMClient | None = None,
    timeout: float | None = None,
    cancel_event: threading.Event | None = None,
) -> RoutePlan:
    """Order the visit points and fetch the drivable route from OSRM.

    With ``optimize_order`` the points are re-sequenced (nearest neighbour,
    then 2-opt from four stops up); otherwise they are visited as given. The
    returned plan carries the final order, which downstream scheduling and
    saving must use instead of the input order.

    Raises:
        MissingOrigin: ``origin`` is None.
        EmptyPointSet: ``points`` is empty.
        DuplicatePoint: a point id occurs more than once in ``points``.
        RoutingProviderError: OSRM failed or found no route.
        RouteCancelled: ``cancel_event`` was set before the request or before
            the plan was returned.
    """
    if origin is None:
        raise MissingOrigin()
    if not points:
        raise EmptyPointSet()
    ensure_distinct_points(points)

    if optimize_order and len(points) > 1:
        ordered = optimize_sequence(origin, points)
    else:
        ordered = list(points)

    _check_cancelled(cancel_event)

    osrm_client = client or OSRMClient()
    coordinates = [origin.coordinates, *(point.coordinates for point in ordered)]
    data = osrm_client.route(coordinates, timeout=timeout)

    _check_cancelled(cancel_event)

    route = data["routes"][0]
    try:
        distance = float(route["distance"])
        duration = float(route["duration"])
    except (KeyError, TypeError, ValueError) as exc:
        raise RoutingProviderError(f"OSRM route is missing distance or duration: {exc}") from exc

    plan = RoutePlan(
        distance_meters=distance,
        duration_seconds=duration,
        polyline=_polyline_from_geometry(route),
        ordered_points=ordered,
        optimized=optimize_order and len(points) > 1,
        instructions=_instructions_from_legs(route),
    )
    logger.info(
        f"Planned route with {plan.stop_count} stops: "
        f"{plan.distance_meters:.0f} m, {plan.duration_seconds:.0f} s (optimized={plan.optimized})"
    )
    return plan

"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from ..itinerary.scheduler import ScheduledStop
from ..routing.models import RoutePlan
from .formatter import format_distance, format_duration


def route_plan_to_json(plan: RoutePlan) -> dict:
    return {
        "distance_meters": plan.distance_meters,
        "duration_seconds": plan.duration_seconds,
        "distance_label": format_distance(plan.distance_meters),
        "duration_label": format_duration(plan.duration_seconds),
        "optimized": plan.optimized,
        "polyline": [list(pair) for pair in plan.polyline],
        "instructions": list(plan.instructions),
        "ordered_points": [
            {
                "order": order,
                "id": point.id,
                "kind": point.kind.value,
                "name": point.name,
                "lat": point.lat,
                "lng": point.lng,
                "address": point.address,
            }
            for order, point in enumerate(plan.ordered_points, start=1)
        ],
    }


def itinerary_to_csv(stops: Sequence[ScheduledStop]) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "order",
        "start_time",
        "duration_minutes",
        "kind",
        "id",
        "name",
        "address",
        "lat",
        "lng",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for order, stop in enumerate(stops, start=1):
        writer.writerow(
            {
                "order": order,
                "start_time": stop.start_time,
                "duration_minutes": stop.duration_minutes,
                "kind": stop.point.kind.value,
                "id": stop.point.id,
                "name": stop.point.name,
                "address": stop.point.address or "",
                "lat": stop.point.lat,
                "lng": stop.point.lng,
            }
        )
    return buffer.getvalue()

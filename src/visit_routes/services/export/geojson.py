"""GeoJSON export of planned routes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from ...models.domain import GeoPoint
from ..outputs.formatter import format_distance, format_duration
from ..routing.models import RoutePlan


def point_feature(point: GeoPoint, order: int) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [point.lng, point.lat]},
        "properties": {
            "order": order,
            "id": point.id,
            "kind": point.kind.value,
            "name": point.name,
            "address": point.address,
        },
    }


def plan_to_geojson(plan: RoutePlan, origin: GeoPoint) -> Dict[str, Any]:
    """Convert a route plan to a GeoJSON FeatureCollection.

    The polyline becomes a LineString (GeoJSON uses lon,lat order). The origin
    is exported with order 0 and the stops from 1 upwards.
    """
    features: List[Dict[str, Any]] = []

    if len(plan.polyline) >= 2:
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[lng, lat] for lat, lng in plan.polyline],
                },
                "properties": {
                    "distance_meters": plan.distance_meters,
                    "duration_seconds": plan.duration_seconds,
                    "distance_label": format_distance(plan.distance_meters),
                    "duration_label": format_duration(plan.duration_seconds),
                    "stops": plan.stop_count,
                },
            }
        )

    features.append(point_feature(origin, 0))
    for order, point in enumerate(plan.ordered_points, start=1):
        features.append(point_feature(point, order))

    return {"type": "FeatureCollection", "features": features}


def save_geojson(collection: Dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(collection, f, indent=2, ensure_ascii=False)

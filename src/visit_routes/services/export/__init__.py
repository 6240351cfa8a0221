"""Export services."""

from .geojson import plan_to_geojson, save_geojson
from .route_record import (
    InvalidStatusTransition,
    RouteRecord,
    RouteStopRecord,
    build_route_record,
)

__all__ = [
    "plan_to_geojson",
    "save_geojson",
    "build_route_record",
    "RouteRecord",
    "RouteStopRecord",
    "InvalidStatusTransition",
]

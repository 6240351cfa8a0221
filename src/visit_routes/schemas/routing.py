"""Routing request/response schemas."""

from __future__ import annotations

import math
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, conint, field_validator

from ..models.domain import GeoPoint, PointKind


class GeoPointModel(BaseModel):
    id: str = Field(..., min_length=1)
    kind: PointKind = PointKind.DEMAND
    name: str = ""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: Optional[str] = None

    @field_validator("lat", "lng")
    @classmethod
    def _require_geocoded(cls, value: float) -> float:
        """Points without geocoding arrive as 0/NaN and cannot be routed."""
        if not math.isfinite(value) or value == 0:
            raise ValueError("coordinate must be finite and non-zero")
        return value

    def to_domain(self) -> GeoPoint:
        return GeoPoint(
            id=self.id,
            kind=self.kind,
            name=self.name,
            lat=self.lat,
            lng=self.lng,
            address=self.address,
        )

    @classmethod
    def from_domain(cls, point: GeoPoint) -> "GeoPointModel":
        return cls(
            id=point.id,
            kind=point.kind,
            name=point.name,
            lat=point.lat,
            lng=point.lng,
            address=point.address,
        )


class GeolocationFailureModel(BaseModel):
    """Failure reported by the browser instead of a position."""
    code: int = Field(..., description="GeolocationPositionError code: 1 denied, 2 unavailable, 3 timeout.")
    message: Optional[str] = None


class ScheduleOptions(BaseModel):
    """Unset fields fall back to the configured defaults."""
    start_time: Optional[str] = Field(default=None, description="First visit start, HH:MM.")
    default_duration_minutes: Optional[int] = Field(default=None, ge=0)
    travel_buffer_minutes: Optional[int] = Field(default=None, ge=0)
    durations: Dict[int, conint(ge=0)] = Field(
        default_factory=dict,
        description="Per-stop duration overrides keyed by stop index (0-based, in visiting order).",
    )


class RoutePlanRequest(BaseModel):
    origin: Optional[GeoPointModel] = None
    origin_error: Optional[GeolocationFailureModel] = None
    points: List[GeoPointModel] = Field(default_factory=list)
    destination: Optional[GeoPointModel] = Field(default=None, description="Fixed end point after the last stop.")
    optimize_order: bool = True
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    schedule: Optional[ScheduleOptions] = None


class ScheduledStopModel(BaseModel):
    order: int
    point: GeoPointModel
    start_time: str
    duration_minutes: int
    manual: bool = False


class NavigationLinksModel(BaseModel):
    google_maps: Optional[str] = None
    waze: Optional[str] = None


class RoutePlanResponse(BaseModel):
    distance_meters: float
    duration_seconds: float
    distance_label: str
    duration_label: str
    optimized: bool
    polyline: List[List[float]]
    ordered_points: List[GeoPointModel]
    instructions: List[str] = Field(default_factory=list)
    links: NavigationLinksModel
    itinerary: Optional[List[ScheduledStopModel]] = None


class ScheduleRequest(ScheduleOptions):
    points: List[GeoPointModel]


class LinksRequest(BaseModel):
    origin: GeoPointModel
    points: List[GeoPointModel]
    destination: Optional[GeoPointModel] = None


class RouteRecordRequest(BaseModel):
    title: str = Field(..., min_length=1)
    scheduled_date: date
    origin: GeoPointModel
    points: List[GeoPointModel] = Field(..., description="Stops in their final visiting order.")
    destination: Optional[GeoPointModel] = None
    distance_meters: float = Field(..., ge=0)
    duration_seconds: float = Field(..., ge=0)
    optimized: bool = False
    notes: Optional[str] = None
    schedule: Optional[ScheduleOptions] = None

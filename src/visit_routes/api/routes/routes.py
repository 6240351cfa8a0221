"""Routing endpoints."""

from __future__ import annotations

import logging
from typing import List, Sequence

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ...models.domain import GeoPoint
from ...schemas.routing import (
    GeoPointModel,
    LinksRequest,
    NavigationLinksModel,
    RoutePlanRequest,
    RoutePlanResponse,
    RouteRecordRequest,
    ScheduledStopModel,
    ScheduleOptions,
    ScheduleRequest,
)
from ...services.export.route_record import build_route_record
from ...services.itinerary.scheduler import ItineraryScheduler, ScheduledStop
from ...services.navigation.geolocation import GeolocationError, geolocation_error
from ...services.navigation.links import google_maps_url, waze_url
from ...services.outputs.routing_formatter import itinerary_to_csv, route_plan_to_json
from ...services.routing.errors import RouteError, RoutingProviderError
from ...services.routing.models import RoutePlan
from ...services.routing.service import plan_route

router = APIRouter(prefix="/routes", tags=["routes"])

logger = logging.getLogger(__name__)


def _scheduled_stops(points: Sequence[GeoPoint], options: ScheduleOptions) -> list[ScheduledStop]:
    scheduler = ItineraryScheduler(
        points,
        start_time=options.start_time,
        default_duration_minutes=options.default_duration_minutes,
        travel_buffer_minutes=options.travel_buffer_minutes,
        durations=options.durations,
    )
    return scheduler.stops


def _stop_models(stops: Sequence[ScheduledStop]) -> List[ScheduledStopModel]:
    return [
        ScheduledStopModel(
            order=order,
            point=GeoPointModel.from_domain(stop.point),
            start_time=stop.start_time,
            duration_minutes=stop.duration_minutes,
            manual=stop.manual,
        )
        for order, stop in enumerate(stops, start=1)
    ]


def _links(
    origin: GeoPoint,
    stops: Sequence[GeoPoint],
    destination: GeoPoint | None = None,
) -> NavigationLinksModel:
    return NavigationLinksModel(
        google_maps=google_maps_url(origin, stops, destination=destination),
        waze=waze_url(stops),
    )


@router.post("/plan", response_model=RoutePlanResponse, status_code=status.HTTP_200_OK)
def plan(payload: RoutePlanRequest) -> RoutePlanResponse:
    if payload.origin is None and payload.origin_error is not None:
        error: GeolocationError = geolocation_error(payload.origin_error.code, payload.origin_error.message)
        logger.info(f"Client could not get its position (code {payload.origin_error.code}): {error.detail}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.user_message)

    origin = payload.origin.to_domain() if payload.origin else None
    points = [point.to_domain() for point in payload.points]
    try:
        route_plan: RoutePlan = plan_route(
            origin,
            points,
            optimize_order=payload.optimize_order,
            timeout=payload.timeout_seconds,
        )
    except RoutingProviderError as exc:
        code = status.HTTP_504_GATEWAY_TIMEOUT if exc.timed_out else status.HTTP_502_BAD_GATEWAY
        raise HTTPException(status_code=code, detail=exc.message) from exc
    except RouteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error planning route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan route: {str(exc)}",
        ) from exc

    itinerary = None
    if payload.schedule is not None:
        itinerary = _stop_models(_scheduled_stops(route_plan.ordered_points, payload.schedule))

    destination = payload.destination.to_domain() if payload.destination else None
    return RoutePlanResponse(
        **route_plan_to_json(route_plan),
        links=_links(origin, route_plan.ordered_points, destination),
        itinerary=itinerary,
    )


@router.post("/schedule", response_model=List[ScheduledStopModel], status_code=status.HTTP_200_OK)
def schedule_stops(payload: ScheduleRequest) -> List[ScheduledStopModel]:
    points = [point.to_domain() for point in payload.points]
    return _stop_models(_scheduled_stops(points, payload))


@router.post("/schedule/csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def schedule_stops_csv(payload: ScheduleRequest) -> PlainTextResponse:
    points = [point.to_domain() for point in payload.points]
    return PlainTextResponse(itinerary_to_csv(_scheduled_stops(points, payload)), media_type="text/csv")


@router.post("/links", response_model=NavigationLinksModel, status_code=status.HTTP_200_OK)
def links(payload: LinksRequest) -> NavigationLinksModel:
    destination = payload.destination.to_domain() if payload.destination else None
    return _links(payload.origin.to_domain(), [point.to_domain() for point in payload.points], destination)


@router.post("/record", status_code=status.HTTP_200_OK)
def route_record(payload: RouteRecordRequest) -> dict:
    """Build the saved-route payload for a finalized plan without storing it."""
    points = [point.to_domain() for point in payload.points]
    if not points:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A saved route needs at least one stop.")
    route_plan = RoutePlan(
        distance_meters=payload.distance_meters,
        duration_seconds=payload.duration_seconds,
        polyline=[],
        ordered_points=points,
        optimized=payload.optimized,
    )
    itinerary = _scheduled_stops(points, payload.schedule) if payload.schedule else None
    try:
        record = build_route_record(
            payload.title,
            payload.scheduled_date,
            route_plan,
            itinerary=itinerary,
            origin=payload.origin.to_domain(),
            notes=payload.notes,
            destination=payload.destination.to_domain() if payload.destination else None,
        )
    except (RouteError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return record.to_payload()

"""Saved-route payload handed to the persistence layer.

Nothing here talks to a database. A finalized plan (and optionally its
itinerary) is turned into a header + ordered stops record, and status changes
or visited toggles produce a new record.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from ...models.domain import GeoPoint, PointKind, RouteStatus
from ..itinerary.scheduler import ScheduledStop
from ..routing.models import RoutePlan, ensure_distinct_points

ALLOWED_TRANSITIONS: dict[RouteStatus, frozenset[RouteStatus]] = {
    RouteStatus.PENDING: frozenset({RouteStatus.IN_PROGRESS, RouteStatus.CANCELLED}),
    RouteStatus.IN_PROGRESS: frozenset({RouteStatus.COMPLETED, RouteStatus.CANCELLED}),
    RouteStatus.COMPLETED: frozenset(),
    RouteStatus.CANCELLED: frozenset(),
}


class InvalidStatusTransition(ValueError):
    def __init__(self, current: RouteStatus, target: RouteStatus) -> None:
        super().__init__(f"Cannot move a route from '{current.value}' to '{target.value}'.")
        self.current = current
        self.target = target


class UnknownStop(LookupError):
    pass


@dataclass(frozen=True, slots=True)
class RouteStopRecord:
    order: int
    kind: PointKind
    reference_id: str
    name: str
    lat: float
    lng: float
    address: Optional[str] = None
    visited: bool = False
    visit_note: Optional[str] = None
    scheduled_time: Optional[str] = None
    estimated_duration_minutes: Optional[int] = None


@dataclass(frozen=True, slots=True)
class RouteRecord:
    title: str
    scheduled_date: date
    stops: List[RouteStopRecord]
    status: RouteStatus = RouteStatus.PENDING
    optimized: bool = False
    origin_lat: Optional[float] = None
    origin_lng: Optional[float] = None
    destination_lat: Optional[float] = None
    destination_lng: Optional[float] = None
    notes: Optional[str] = None
    completion_notes: Optional[str] = None
    completed_at: Optional[datetime] = None
    distance_meters: Optional[float] = None
    duration_seconds: Optional[float] = None

    def transition(self, target: RouteStatus, completion_notes: str | None = None) -> "RouteRecord":
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransition(self.status, target)
        if target is RouteStatus.COMPLETED:
            return replace(
                self,
                status=target,
                completed_at=datetime.now(timezone.utc),
                completion_notes=completion_notes,
            )
        return replace(self, status=target)

    def mark_visited(self, order: int, visited: bool = True, note: str | None = None) -> "RouteRecord":
        if self.status.is_terminal:
            raise ValueError(f"Route is '{self.status.value}' and its stops can no longer change.")
        stops = list(self.stops)
        for index, stop in enumerate(stops):
            if stop.order == order:
                stops[index] = replace(stop, visited=visited, visit_note=note)
                return replace(self, stops=stops)
        raise UnknownStop(f"Route has no stop with order {order}.")

    def copy(self, scheduled_date: date) -> "RouteRecord":
        """Pending copy of this route on another date, with every stop unvisited."""
        stops = [
            replace(stop, visited=False, visit_note=None, scheduled_time=None, estimated_duration_minutes=None)
            for stop in self.stops
        ]
        return replace(
            self,
            title=f"{self.title} (Cópia)",
            scheduled_date=scheduled_date,
            stops=stops,
            status=RouteStatus.PENDING,
            completion_notes=None,
            completed_at=None,
        )

    @property
    def visited_count(self) -> int:
        return sum(1 for stop in self.stops if stop.visited)

    def to_payload(self) -> dict:
        """Header and stop rows in the shape the route tables expect."""
        header = {
            "titulo": self.title,
            "data_programada": self.scheduled_date.isoformat(),
            "status": self.status.value,
            "otimizar": self.optimized,
            "origem_lat": self.origin_lat,
            "origem_lng": self.origin_lng,
            "destino_lat": self.destination_lat,
            "destino_lng": self.destination_lng,
            "observacoes": self.notes,
            "observacoes_conclusao": self.completion_notes,
            "concluida_em": self.completed_at.isoformat() if self.completed_at else None,
        }
        stops = [
            {
                "ordem": stop.order,
                "tipo": stop.kind.value,
                "referencia_id": stop.reference_id,
                "nome": stop.name,
                "endereco": stop.address,
                "latitude": stop.lat,
                "longitude": stop.lng,
                "visitado": stop.visited,
                "observacao_visita": stop.visit_note,
                "horario_agendado": stop.scheduled_time,
                "duracao_estimada": stop.estimated_duration_minutes,
            }
            for stop in self.stops
        ]
        return {"rota": header, "rota_pontos": stops}


def build_route_record(
    title: str,
    scheduled_date: date,
    plan: RoutePlan,
    itinerary: Sequence[ScheduledStop] | None = None,
    origin: GeoPoint | None = None,
    notes: str | None = None,
    destination: GeoPoint | None = None,
) -> RouteRecord:
    """Snapshot a finalized plan as a pending route.

    When an itinerary is given it must follow the plan's stop order.
    ``destination`` is an optional fixed end point after the last stop.
    """
    if not title.strip():
        raise ValueError("Route title cannot be empty.")
    ensure_distinct_points(plan.ordered_points)
    if itinerary is not None:
        if [stop.point.id for stop in itinerary] != [point.id for point in plan.ordered_points]:
            raise ValueError("Itinerary order does not match the planned stop order.")

    stops: list[RouteStopRecord] = []
    for index, point in enumerate(plan.ordered_points):
        scheduled = itinerary[index] if itinerary is not None else None
        stops.append(
            RouteStopRecord(
                order=index + 1,
                kind=point.kind,
                reference_id=point.id,
                name=point.name,
                lat=point.lat,
                lng=point.lng,
                address=point.address,
                scheduled_time=scheduled.start_time if scheduled else None,
                estimated_duration_minutes=scheduled.duration_minutes if scheduled else None,
            )
        )

    return RouteRecord(
        title=title.strip(),
        scheduled_date=scheduled_date,
        stops=stops,
        optimized=plan.optimized,
        origin_lat=origin.lat if origin else None,
        origin_lng=origin.lng if origin else None,
        destination_lat=destination.lat if destination else None,
        destination_lng=destination.lng if destination else None,
        notes=notes,
        distance_meters=plan.distance_meters,
        duration_seconds=plan.duration_seconds,
    )

"""Domain models for visit points and saved routes."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PointKind(str, Enum):
    ORIGIN = "origin"
    DEMAND = "demanda"
    CITIZEN = "municipe"


class RouteStatus(str, Enum):
    """Lifecycle of a saved route."""

    PENDING = "pendente"
    IN_PROGRESS = "em_andamento"
    COMPLETED = "concluida"
    CANCELLED = "cancelada"

    @property
    def is_terminal(self) -> bool:
        return self in (RouteStatus.COMPLETED, RouteStatus.CANCELLED)


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A geocoded location taking part in a route: the start or a visit."""

    id: str
    kind: PointKind
    name: str
    lat: float
    lng: float
    address: Optional[str] = None

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.lat, self.lng)

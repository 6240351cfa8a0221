"""Routing domain models."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Sequence

from ...models.domain import GeoPoint
from .errors import DuplicatePoint


@dataclass(frozen=True, slots=True)
class RoutePlan:
    distance_meters: float
    duration_seconds: float
    polyline: List[tuple[float, float]]
    ordered_points: List[GeoPoint]
    optimized: bool = False
    instructions: List[str] = field(default_factory=list)

    @property
    def stop_count(self) -> int:
        return len(self.ordered_points)


def ensure_distinct_points(points: Sequence[GeoPoint]) -> None:
    """Raise ``DuplicatePoint`` if any point id occurs more than once."""
    counts = Counter(point.id for point in points)
    repeated = [point_id for point_id, count in counts.items() if count > 1]
    if repeated:
        raise DuplicatePoint(repeated)

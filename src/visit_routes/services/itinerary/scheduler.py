"""Visit time scheduling for an ordered route.

Each stop starts when the previous one ends plus a fixed travel buffer:

    start[i] = start[i-1] + duration[i-1] + buffer

Changing the global start time or the buffer recomputes every stop; changing a
stop's duration recomputes the stops after it. Editing one stop's time by hand
only touches that stop. Whether later recomputations keep such hand edits is
controlled by ``preserve_manual_overrides``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Mapping, Sequence

from ...config import settings
from ...models.domain import GeoPoint

MINUTES_PER_DAY = 24 * 60

logger = logging.getLogger(__name__)


class UnparsableTime(ValueError):
    """A visit time that is not in HH:MM form."""


@dataclass(frozen=True, slots=True)
class ScheduledStop:
    point: GeoPoint
    start_time: str
    duration_minutes: int
    manual: bool = False


def parse_hhmm(value: str) -> int:
    """Return minutes since midnight for an ``HH:MM`` string."""
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except (AttributeError, ValueError) as exc:
        raise UnparsableTime(f"Invalid time {value!r}, expected HH:MM") from exc
    return parsed.hour * 60 + parsed.minute


def format_hhmm(minutes: int) -> str:
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class ItineraryScheduler:
    """Schedule owned by one planning session."""

    def __init__(
        self,
        points: Sequence[GeoPoint],
        start_time: str | None = None,
        default_duration_minutes: int | None = None,
        travel_buffer_minutes: int | None = None,
        durations: Mapping[int, int] | None = None,
        preserve_manual_overrides: bool | None = None,
    ) -> None:
        self.default_duration_minutes = (
            settings.default_visit_duration_minutes if default_duration_minutes is None else default_duration_minutes
        )
        self.travel_buffer_minutes = (
            settings.travel_buffer_minutes if travel_buffer_minutes is None else travel_buffer_minutes
        )
        self.preserve_manual_overrides = (
            settings.preserve_manual_overrides if preserve_manual_overrides is None else preserve_manual_overrides
        )
        self.start_time = settings.default_start_time
        if start_time is not None:
            self._accept_start_time(start_time)

        overrides = durations or {}
        if self.default_duration_minutes < 0 or any(minutes < 0 for minutes in overrides.values()):
            raise ValueError("Visit duration cannot be negative.")
        if self.travel_buffer_minutes < 0:
            raise ValueError("Travel buffer cannot be negative.")
        start = parse_hhmm(self.start_time)
        self._stops = [
            ScheduledStop(
                point=point,
                start_time=format_hhmm(start),
                duration_minutes=overrides.get(index, self.default_duration_minutes),
            )
            for index, point in enumerate(points)
        ]
        self.recompute()

    @property
    def stops(self) -> list[ScheduledStop]:
        return list(self._stops)

    def _accept_start_time(self, value: str) -> bool:
        try:
            parse_hhmm(value)
        except UnparsableTime as exc:
            logger.warning(f"Keeping start time {self.start_time}: {exc}")
            return False
        self.start_time = value.strip()
        return True

    def recompute(self, from_index: int = 0) -> list[ScheduledStop]:
        """Recompute start times of stops ``from_index`` onwards."""
        if not self._stops:
            return []
        from_index = max(from_index, 0)
        for index in range(from_index, len(self._stops)):
            stop = self._stops[index]
            if stop.manual and self.preserve_manual_overrides:
                continue
            if index == 0:
                minutes = parse_hhmm(self.start_time)
            else:
                previous = self._stops[index - 1]
                minutes = parse_hhmm(previous.start_time) + previous.duration_minutes + self.travel_buffer_minutes
                if minutes >= MINUTES_PER_DAY:
                    logger.warning(f"Stop {index} starts past midnight, its time wraps to {format_hhmm(minutes)}")
            self._stops[index] = replace(stop, start_time=format_hhmm(minutes), manual=False)
        return self.stops

    def set_start_time(self, value: str) -> list[ScheduledStop]:
        if self._accept_start_time(value):
            self.recompute()
        return self.stops

    def set_travel_buffer(self, minutes: int) -> list[ScheduledStop]:
        if minutes < 0:
            raise ValueError("Travel buffer cannot be negative.")
        self.travel_buffer_minutes = minutes
        return self.recompute()

    def set_stop_duration(self, index: int, minutes: int) -> list[ScheduledStop]:
        if minutes < 0:
            raise ValueError("Visit duration cannot be negative.")
        self._stops[index] = replace(self._stops[index], duration_minutes=minutes)
        return self.recompute(index + 1)

    def set_stop_time(self, index: int, value: str) -> list[ScheduledStop]:
        """Manually set one stop's start time; later stops are left as they are."""
        try:
            minutes = parse_hhmm(value)
        except UnparsableTime as exc:
            logger.warning(f"Keeping {self._stops[index].start_time} for stop {index}: {exc}")
            return self.stops
        self._stops[index] = replace(self._stops[index], start_time=format_hhmm(minutes), manual=True)
        return self.stops


def schedule(
    ordered_points: Sequence[GeoPoint],
    start_time: str,
    default_duration_minutes: int,
    travel_buffer_minutes: int,
    durations: Mapping[int, int] | None = None,
) -> list[ScheduledStop]:
    """Compute visit times for ``ordered_points``; ``durations`` maps stop index to minutes."""
    return ItineraryScheduler(
        ordered_points,
        start_time=start_time,
        default_duration_minutes=default_duration_minutes,
        travel_buffer_minutes=travel_buffer_minutes,
        durations=durations,
    ).stops

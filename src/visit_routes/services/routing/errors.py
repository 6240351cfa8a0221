"""Failures raised while planning a route."""

from __future__ import annotations


class RouteError(Exception):
    """Base class for route planning failures."""


class MissingOrigin(RouteError):
    def __init__(self, message: str = "A starting location is required to plan a route.") -> None:
        super().__init__(message)


class EmptyPointSet(RouteError):
    def __init__(self, message: str = "At least one visit point is required to plan a route.") -> None:
        super().__init__(message)


class DuplicatePoint(RouteError):
    """The same visit point appears more than once in a route."""

    def __init__(self, point_ids: list[str]) -> None:
        super().__init__(f"Visit points appear more than once: {', '.join(point_ids)}.")
        self.point_ids = point_ids


class RoutingProviderError(RouteError):
    """OSRM answered with an HTTP error, a non-"Ok" code, or no route.

    ``status_code`` is the upstream HTTP status when there was one.
    """

    def __init__(self, message: str, status_code: int | None = None, timed_out: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.timed_out = timed_out


class RouteCancelled(RouteError):
    def __init__(self, message: str = "Route planning was cancelled.") -> None:
        super().__init__(message)

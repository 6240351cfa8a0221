"""Human-readable labels for route totals."""

from __future__ import annotations

import math


def format_distance(meters: float) -> str:
    if meters < 1000:
        # half-up like Math.round, not banker's rounding
        return f"{math.floor(meters + 0.5)} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    if hours > 0:
        return f"{hours}h {minutes}min"
    return f"{minutes} min"

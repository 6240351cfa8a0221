#!/usr/bin/env python3
"""Manual check that the configured OSRM server can plan a small visit route."""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from visit_routes.config import settings
from visit_routes.models.domain import GeoPoint, PointKind
from visit_routes.services.outputs.formatter import format_distance, format_duration
from visit_routes.services.routing.errors import RouteError
from visit_routes.services.routing.osrm_client import check_health
from visit_routes.services.routing.service import plan_route


def main():
    print("=" * 60)
    print("OSRM Connection Test")
    print("=" * 60)
    print()

    print("1. Checking OSRM configuration...")
    print(f"   [OK] OSRM Base URL: {settings.osrm_base_url}")
    print(f"   [OK] OSRM Profile: {settings.osrm_profile}")
    print()

    print("2. Testing OSRM health check...")
    if not check_health():
        print("   [ERROR] OSRM service is not responding")
        print("   Set VISIT_OSRM_BASE_URL in your .env file if you use your own server")
        return 1
    print("   [OK] OSRM service is healthy and accessible!")
    print()

    print("3. Planning a four-stop route in central São Paulo...")
    origin = GeoPoint(id="origin", kind=PointKind.ORIGIN, name="Praça da Sé", lat=-23.550520, lng=-46.633308)
    stops = [
        GeoPoint(id="1", kind=PointKind.DEMAND, name="Paulista", lat=-23.561414, lng=-46.655881),
        GeoPoint(id="2", kind=PointKind.CITIZEN, name="Liberdade", lat=-23.558300, lng=-46.635200),
        GeoPoint(id="3", kind=PointKind.DEMAND, name="Consolação", lat=-23.553000, lng=-46.660000),
        GeoPoint(id="4", kind=PointKind.CITIZEN, name="República", lat=-23.543500, lng=-46.642700),
    ]
    try:
        plan = plan_route(origin, stops, optimize_order=True)
    except RouteError as e:
        print(f"   [ERROR] Route planning failed: {e}")
        return 1

    print(f"   [OK] Order: {' -> '.join(point.name for point in plan.ordered_points)}")
    print(f"   [OK] {format_distance(plan.distance_meters)}, {format_duration(plan.duration_seconds)}")
    print(f"   [OK] Polyline with {len(plan.polyline)} points")
    print()

    print("=" * 60)
    print("[SUCCESS] OSRM is connected and working!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())

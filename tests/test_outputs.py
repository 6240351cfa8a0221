import csv
import io
import json
from pathlib import Path

from visit_routes.models.domain import GeoPoint, PointKind
from visit_routes.services.export.geojson import plan_to_geojson, save_geojson
from visit_routes.services.itinerary.scheduler import schedule
from visit_routes.services.outputs.formatter import format_distance, format_duration
from visit_routes.services.outputs.routing_formatter import itinerary_to_csv, route_plan_to_json
from visit_routes.services.routing.models import RoutePlan

ORIGIN = GeoPoint(id="O", kind=PointKind.ORIGIN, name="Gabinete", lat=-23.55, lng=-46.63)
STOPS = [
    GeoPoint(id="D1", kind=PointKind.DEMAND, name="Buraco na rua", lat=-23.56, lng=-46.64, address="Rua A, 10"),
    GeoPoint(id="M1", kind=PointKind.CITIZEN, name="Maria", lat=-23.57, lng=-46.65),
]
PLAN = RoutePlan(
    distance_meters=3456.0,
    duration_seconds=3725.0,
    polyline=[(-23.55, -46.63), (-23.56, -46.64), (-23.57, -46.65)],
    ordered_points=STOPS,
    optimized=True,
)


def test_format_distance():
    assert format_distance(999.4) == "999 m"
    assert format_distance(999.5) == "1000 m"
    assert format_distance(1500) == "1.5 km"
    assert format_distance(12340) == "12.3 km"


def test_format_duration():
    assert format_duration(59) == "0 min"
    assert format_duration(600) == "10 min"
    assert format_duration(3725) == "1h 2min"


def test_route_plan_to_json():
    payload = route_plan_to_json(PLAN)

    assert payload["distance_label"] == "3.5 km"
    assert payload["duration_label"] == "1h 2min"
    assert [point["order"] for point in payload["ordered_points"]] == [1, 2]
    assert payload["ordered_points"][0]["kind"] == "demanda"


def test_itinerary_to_csv():
    stops = schedule(STOPS, "09:00", 20, 10)

    rows = list(csv.DictReader(io.StringIO(itinerary_to_csv(stops))))

    assert [row["start_time"] for row in rows] == ["09:00", "09:30"]
    assert rows[0]["address"] == "Rua A, 10"
    assert rows[1]["kind"] == "municipe"


def test_plan_to_geojson(tmp_path: Path):
    collection = plan_to_geojson(PLAN, ORIGIN)

    assert collection["type"] == "FeatureCollection"
    line, origin, *stops = collection["features"]
    assert line["geometry"]["type"] == "LineString"
    assert line["geometry"]["coordinates"][0] == [-46.63, -23.55]
    assert origin["properties"]["order"] == 0
    assert [feature["properties"]["id"] for feature in stops] == ["D1", "M1"]

    output = tmp_path / "exports" / "route.geojson"
    save_geojson(collection, output)
    assert json.loads(output.read_text(encoding="utf-8")) == collection

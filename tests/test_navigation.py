from visit_routes.models.domain import GeoPoint, PointKind
from visit_routes.services.navigation.geolocation import (
    GeolocationDenied,
    GeolocationError,
    GeolocationTimeout,
    GeolocationUnavailable,
    geolocation_error,
    position_options,
)
from visit_routes.services.navigation.links import google_maps_url, waze_url


def _point(pid: str, lat: float, lng: float) -> GeoPoint:
    return GeoPoint(id=pid, kind=PointKind.CITIZEN, name=pid, lat=lat, lng=lng)


ORIGIN = _point("O", -23.55, -46.63)
STOPS = [_point("A", -23.56, -46.64), _point("B", -23.57, -46.65), _point("C", -23.58, -46.66)]


def test_google_maps_url_with_waypoints():
    url = google_maps_url(ORIGIN, STOPS)

    assert url == (
        "https://www.google.com/maps/dir/?api=1"
        "&origin=-23.55,-46.63"
        "&destination=-23.58,-46.66"
        "&travelmode=driving"
        "&waypoints=-23.56%2C-46.64%7C-23.57%2C-46.65"
    )


def test_google_maps_url_single_stop_has_no_waypoints():
    url = google_maps_url(ORIGIN, STOPS[:1])

    assert url == (
        "https://www.google.com/maps/dir/?api=1"
        "&origin=-23.55,-46.63&destination=-23.56,-46.64&travelmode=driving"
    )


def test_google_maps_url_caps_waypoints():
    stops = [_point(f"P{i}", -23.5 - i * 0.001, -46.6) for i in range(30)]

    url = google_maps_url(ORIGIN, stops)
    waypoints = url.split("&waypoints=")[1]

    assert waypoints.count("%7C") == 22


def test_google_maps_url_renders_whole_numbers_like_javascript():
    url = google_maps_url(_point("O", 10.0, -47.0), [_point("A", -23.5, 12.25)])

    assert "&origin=10,-47&" in url
    assert "&destination=-23.5,12.25&" in url


def test_google_maps_url_with_fixed_destination():
    url = google_maps_url(ORIGIN, STOPS[:2], destination=_point("F", -23.6, -46.7))

    assert url == (
        "https://www.google.com/maps/dir/?api=1"
        "&origin=-23.55,-46.63"
        "&destination=-23.6,-46.7"
        "&travelmode=driving"
        "&waypoints=-23.56%2C-46.64%7C-23.57%2C-46.65"
    )


def test_waze_url_targets_first_stop():
    assert waze_url(STOPS) == "https://waze.com/ul?ll=-23.56,-46.64&navigate=yes"


def test_links_for_empty_route():
    assert google_maps_url(ORIGIN, []) is None
    assert waze_url([]) is None


def test_geolocation_error_codes():
    assert isinstance(geolocation_error(1), GeolocationDenied)
    assert isinstance(geolocation_error(2), GeolocationUnavailable)
    assert isinstance(geolocation_error(3), GeolocationTimeout)

    generic = geolocation_error(42, "weird")
    assert type(generic) is GeolocationError
    assert generic.detail == "weird"

    assert geolocation_error(1).user_message == "permission denied"
    assert geolocation_error(2).user_message == "location unavailable"
    assert str(geolocation_error(3)) == "timed out"


def test_position_options_request_fresh_high_accuracy_fix():
    options = position_options()

    assert options["enableHighAccuracy"] is True
    assert options["maximumAge"] == 0
    assert options["timeout"] == 15000

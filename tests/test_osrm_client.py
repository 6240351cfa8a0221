import httpx
import pytest

from visit_routes.services.routing.errors import RoutingProviderError
from visit_routes.services.routing.osrm_client import OSRMClient, check_health

COORDINATES = [(-23.55, -46.63), (-23.56, -46.64)]

OK_PAYLOAD = {
    "code": "Ok",
    "routes": [
        {
            "distance": 1834.2,
            "duration": 301.5,
            "geometry": {"coordinates": [[-46.63, -23.55], [-46.64, -23.56]]},
            "legs": [],
        }
    ],
}


def _client(handler) -> OSRMClient:
    return OSRMClient(base_url="http://osrm.test/", profile="driving", transport=httpx.MockTransport(handler))


def test_route_builds_lon_lat_url_and_params():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=OK_PAYLOAD)

    data = _client(handler).route(COORDINATES)

    assert data["routes"][0]["distance"] == 1834.2
    request = seen[0]
    assert request.url.host == "osrm.test"
    assert request.url.path == "/route/v1/driving/-46.63,-23.55;-46.64,-23.56"
    assert request.url.params["overview"] == "full"
    assert request.url.params["geometries"] == "geojson"
    assert request.url.params["steps"] == "true"


def test_route_rejects_non_ok_code():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": "Error", "message": "boom"})

    with pytest.raises(RoutingProviderError) as excinfo:
        _client(handler).route(COORDINATES)

    assert "boom" in str(excinfo.value)


def test_route_reports_upstream_message_on_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": "InvalidQuery", "message": "Query string malformed"})

    with pytest.raises(RoutingProviderError) as excinfo:
        _client(handler).route(COORDINATES)

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Query string malformed"


def test_route_rejects_empty_route_list():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": "Ok", "routes": []})

    with pytest.raises(RoutingProviderError):
        _client(handler).route(COORDINATES)


def test_route_timeout_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RoutingProviderError) as excinfo:
        _client(handler).route(COORDINATES, timeout=0.5)

    assert excinfo.value.timed_out is True
    assert len(calls) == 1


def test_route_requires_two_coordinates():
    with pytest.raises(ValueError):
        _client(lambda request: httpx.Response(200, json=OK_PAYLOAD)).route(COORDINATES[:1])


def test_check_health():
    ok = httpx.MockTransport(lambda request: httpx.Response(200, json=OK_PAYLOAD))
    down = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))

    assert check_health("http://osrm.test", transport=ok) is True
    assert check_health("http://osrm.test", transport=down) is False

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import make_service, ok
from test_n2yo_adapters import ABOVE_PAYLOAD, POSITIONS_PAYLOAD
from satellite_tracking.api.dependencies import get_n2yo_service
from satellite_tracking.config import settings
from satellite_tracking.main import app

PREFIX = settings.api_v1_prefix

TLE_PAYLOAD = {
    "info": {"satid": 25544, "satname": "SPACE STATION", "transactionscount": 1},
    "tle": "1 25544U\r\n2 25544",
}


def route_by_endpoint(responses):
    """Upstream fake that answers by endpoint name (tle, positions, above...)."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        endpoint = request.url.path.split("/")[4]
        response = responses[endpoint]
        if isinstance(response, Exception):
            raise response
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    handler.requests = requests
    return handler


@pytest.fixture
def override():
    def install(handler):
        app.dependency_overrides[get_n2yo_service] = lambda: make_service(handler, retry_delay=0)
        return TestClient(app)

    yield install
    app.dependency_overrides.clear()


def test_satellite_resource_combines_tle_and_position(override):
    handler = route_by_endpoint({"tle": ok(TLE_PAYLOAD), "positions": ok(POSITIONS_PAYLOAD)})
    client = override(handler)

    response = client.get(f"{PREFIX}/resources/satellite/25544")

    body = response.json()
    assert response.status_code == 200
    assert body["name"] == "SPACE STATION"
    assert body["tle"]["line1"] == "1 25544U"
    assert body["position"]["eclipsed"] is True
    assert body["position"]["timestamp"] == "2018-03-18T06:26:58.000Z"
    paths = sorted(request.url.path for request in handler.requests)
    assert paths[0].startswith("/rest/v1/satellite/positions/25544/0/0/0/1/")
    assert paths[1].startswith("/rest/v1/satellite/tle/25544/")


def test_satellite_resource_tolerates_one_failed_lookup(override):
    handler = route_by_endpoint({"tle": httpx.Response(500, text="down"), "positions": ok(POSITIONS_PAYLOAD)})
    client = override(handler)

    response = client.get(f"{PREFIX}/resources/satellite/25544")

    body = response.json()
    assert response.status_code == 200
    assert body["name"] == "SPACE STATION"
    assert "tle" not in body
    assert "position" in body


def test_satellite_resource_raises_when_both_lookups_fail(override):
    handler = route_by_endpoint({"tle": httpx.Response(500, text="down"), "positions": httpx.Response(500)})
    client = override(handler)

    response = client.get(f"{PREFIX}/resources/satellite/25544")

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "UPSTREAM_ERROR"


def test_satellite_resource_without_data_is_not_found(override):
    handler = route_by_endpoint({"tle": ok({"info": {}}), "positions": ok({"info": {}})})
    client = override(handler)

    response = client.get(f"{PREFIX}/resources/satellite/25544")

    assert response.status_code == 404


def test_satellite_resource_reports_failure_when_other_lookup_is_empty(override):
    handler = route_by_endpoint({"tle": httpx.Response(429), "positions": ok({"info": {"satid": 25544}, "positions": []})})
    client = override(handler)

    response = client.get(f"{PREFIX}/resources/satellite/25544")

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"


def test_satellite_resource_reports_position_failure_when_tle_is_empty(override):
    handler = route_by_endpoint({"tle": ok({"info": {"satid": 25544}}), "positions": httpx.Response(503, text="busy")})
    client = override(handler)

    response = client.get(f"{PREFIX}/resources/satellite/25544")

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "UPSTREAM_ERROR"


def test_satellite_resource_rejects_non_positive_id(override):
    client = override(route_by_endpoint({}))

    response = client.get(f"{PREFIX}/resources/satellite/0")

    assert response.status_code == 422


def test_category_resource(override):
    handler = route_by_endpoint({"above": ok(ABOVE_PAYLOAD)})
    client = override(handler)

    response = client.get(f"{PREFIX}/resources/satellites/category/14")

    body = response.json()
    assert body["category_id"] == 14
    assert body["category_name"] == "Weather"
    assert body["count"] == 2
    assert handler.requests[0].url.path.startswith("/rest/v1/satellite/above/0/0/0/90/14/")


def test_category_resource_rejects_unknown_category(override):
    client = override(route_by_endpoint({}))

    response = client.get(f"{PREFIX}/resources/satellites/category/31")

    assert response.status_code == 422
    assert response.json()["error"]["details"]["field"] == "category_id"


def test_above_resource(override):
    handler = route_by_endpoint({"above": ok({"info": {"satcount": 0}})})
    client = override(handler)

    response = client.get(f"{PREFIX}/resources/satellites/above/51.5/-0.12/45")

    body = response.json()
    assert response.status_code == 200
    assert body["location"] == {"latitude": 51.5, "longitude": -0.12}
    assert body["radius"] == 45
    assert body["satellites"] == []
    assert body["message"] == "No satellites found above the specified location."
    assert handler.requests[0].url.path.startswith("/rest/v1/satellite/above/51.5/-0.12/0/45/0/")


def test_above_resource_rejects_bad_radius(override):
    client = override(route_by_endpoint({}))

    response = client.get(f"{PREFIX}/resources/satellites/above/0/0/120")

    assert response.status_code == 422
    assert response.json()["error"]["details"]["field"] == "radius"

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import FakeN2YO, make_service, ok
from test_n2yo_adapters import ABOVE_PAYLOAD, POSITIONS_PAYLOAD, RADIO_PASSES_PAYLOAD, VISUAL_PASSES_PAYLOAD
from satellite_tracking.api import dependencies
from satellite_tracking.api.dependencies import get_n2yo_service
from satellite_tracking.config import settings
from satellite_tracking.main import app

PREFIX = settings.api_v1_prefix


@pytest.fixture
def upstream():
    return FakeN2YO()


@pytest.fixture
def client(upstream):
    app.dependency_overrides[get_n2yo_service] = lambda: make_service(upstream, retry_delay=0)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_detailed_health_reports_n2yo_configuration(client, monkeypatch):
    monkeypatch.setattr(settings, "n2yo_api_key", "KEY")

    response = client.get("/health/detailed")

    body = response.json()
    assert body["status"] == "healthy"
    assert body["checks"]["n2yo_api"]["status"] == "configured"


def test_categories(client):
    response = client.get(f"{PREFIX}/satellites/categories")

    assert response.status_code == 200
    assert {"id": 29, "name": "Starlink"} in response.json()["categories"]


def test_tle_tool(client, upstream):
    upstream.responses = [ok({
        "info": {"satid": 25544, "satname": "SPACE STATION", "transactionscount": 1},
        "tle": "1 25544U\r\n2 25544",
    })]

    response = client.get(f"{PREFIX}/satellites/25544/tle")

    assert response.status_code == 200
    body = response.json()
    assert body["satellite_id"] == 25544
    assert body["satellite_name"] == "SPACE STATION"
    assert body["tle"] == {"line1": "1 25544U", "line2": "2 25544", "line3": ""}
    assert body["updated"].endswith("Z")


def test_tle_tool_without_tle_is_not_found(client, upstream):
    upstream.responses = [ok({"info": {"satid": 1}})]

    response = client.get(f"{PREFIX}/satellites/1/tle")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_positions_tool(client, upstream):
    upstream.responses = [ok(POSITIONS_PAYLOAD)]

    response = client.get(
        f"{PREFIX}/satellites/25544/positions",
        params={"observer_lat": 41.702, "observer_lng": -76.014, "seconds": 2}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["satellite_name"] == "SPACE STATION"
    assert body["observer"] == {"latitude": 41.702, "longitude": -76.014, "altitude": 0}
    assert len(body["positions"]) == 2
    assert body["positions"][0]["timestamp"] == "2018-03-18T06:26:58.000Z"
    assert upstream.paths[0].startswith("/rest/v1/satellite/positions/25544/41.702/-76.014/0/2/")


def test_positions_tool_validates_ranges(client, upstream):
    response = client.get(
        f"{PREFIX}/satellites/25544/positions",
        params={"observer_lat": 91, "observer_lng": 0}
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert upstream.requests == []


def test_positions_tool_without_data_is_not_found(client, upstream):
    upstream.responses = [ok({"info": {"satid": 25544}})]

    response = client.get(
        f"{PREFIX}/satellites/25544/positions",
        params={"observer_lat": 0, "observer_lng": 0}
    )

    assert response.status_code == 404


def test_visual_passes_tool(client, upstream):
    upstream.responses = [ok(VISUAL_PASSES_PAYLOAD)]

    response = client.get(
        f"{PREFIX}/satellites/25544/visual-passes",
        params={"observer_lat": 41.702, "observer_lng": -76.014}
    )

    body = response.json()
    assert response.status_code == 200
    assert body["prediction_days"] == 7
    assert body["satellite_name"] == "SPACE STATION"
    assert body["passes"][0]["start"]["azimuth_compass"] == "NW"
    assert body["passes"][0]["duration_seconds"] == 485
    assert body["passes"][0]["magnitude"] == -2.4


def test_radio_passes_tool_empty(client, upstream):
    upstream.responses = [ok({"info": {"passescount": 0}})]

    response = client.get(
        f"{PREFIX}/satellites/25544/radio-passes",
        params={"observer_lat": 0, "observer_lng": 0, "days": 3}
    )

    body = response.json()
    assert response.status_code == 200
    assert body["passes"] == []
    assert body["prediction_days"] == 3
    assert "No radio passes found" in body["message"]


def test_radio_passes_tool(client, upstream):
    upstream.responses = [ok(RADIO_PASSES_PAYLOAD)]

    response = client.get(
        f"{PREFIX}/satellites/25544/radio-passes",
        params={"observer_lat": 0, "observer_lng": 0, "min_elevation": 10}
    )

    assert response.status_code == 200
    assert "elevation" not in response.json()["passes"][0]["start"]
    assert upstream.paths[0].startswith("/rest/v1/satellite/radiopasses/25544/0/0/0/7/10/")


def test_above_tool(client, upstream):
    upstream.responses = [ok(ABOVE_PAYLOAD)]

    response = client.get(
        f"{PREFIX}/satellites/above",
        params={"observer_lat": 10, "observer_lng": 20, "category_id": 29}
    )

    body = response.json()
    assert response.status_code == 200
    assert body["category"] == "Starlink"
    assert body["search_radius"] == 90
    assert body["count"] == 2
    assert body["satellites"][0]["international_designator"] == "1998-067A"


def test_search_requires_query_or_category(client, upstream):
    response = client.get(f"{PREFIX}/satellites/search")

    assert response.status_code == 422
    assert response.json()["error"]["details"]["field"] == "query"
    assert upstream.requests == []


def test_search_by_name(client, upstream):
    upstream.responses = [ok(ABOVE_PAYLOAD)]

    response = client.get(f"{PREFIX}/satellites/search/name", params={"query": "iss"})

    body = response.json()
    assert body["count"] == 1
    assert body["satellites"][0]["name"] == "ISS (ZARYA)"
    assert body["category"] is None


def test_search_by_category_without_results(client, upstream):
    upstream.responses = [ok({"info": {"satcount": 0}, "above": []})]

    response = client.get(f"{PREFIX}/satellites/search/category/29")

    body = response.json()
    assert body["count"] == 0
    assert body["category"] == "Starlink"
    assert body["message"] == "No satellites found in category: Starlink."


def test_rate_limit_is_reported_as_429(client, upstream):
    upstream.responses = [httpx.Response(429)]

    response = client.get(f"{PREFIX}/satellites/25544/tle")

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
    assert len(upstream.requests) == 4
    assert "X-Correlation-ID" in response.headers


def test_invalid_credential_is_reported_as_bad_gateway(client, upstream):
    upstream.responses = [httpx.Response(401)]

    response = client.get(f"{PREFIX}/satellites/25544/tle")

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "INVALID_CREDENTIAL"


def test_missing_api_key_is_configuration_error(monkeypatch):
    monkeypatch.setattr(settings, "n2yo_api_key", None)
    dependencies._shared_n2yo_service.cache_clear()

    response = TestClient(app).get(f"{PREFIX}/satellites/25544/tle")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"
    dependencies._shared_n2yo_service.cache_clear()

import csv
import io
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.hubroute.main import create_app
from src.hubroute.services.routing.dispatcher import build_registry

SHANGHAI = {"latitude": "31.2304", "longitude": "121.4737"}
BEIJING = {"latitude": "39.9042", "longitude": "116.4074"}


def _payload(**overrides) -> dict:
    payload = {
        "origin": SHANGHAI,
        "destination": BEIJING,
        "package_weight": {"value": "2.5", "unit": "Kg"},
        "service_level": "Standard",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def api_client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    from src.hubroute.services.routing import service as routing_service

    registry = build_registry()
    monkeypatch.setattr(routing_service, "get_registry", lambda: registry)
    return TestClient(create_app())


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_strategies(api_client: TestClient):
    response = api_client.get("/api/routing/strategies")

    assert response.status_code == 200
    assert response.json() == {"strategies": ["Fastest", "Cheapest", "Balanced"]}


def test_calculate_endpoint(api_client: TestClient):
    response = api_client.post("/api/routing/calculate", json=_payload(strategy="fastest"))

    assert response.status_code == 200
    payload = response.json()
    assert payload["strategy_used"] == "Fastest"
    assert payload["found"] is True
    assert payload["waypoint_node_ids"][0] == "ORIGIN"
    assert payload["waypoint_node_ids"][-1] == "DESTINATION"
    assert isinstance(payload["distance_km"], float)
    assert payload["distance_km"] > 0
    distance = Decimal(repr(payload["distance_km"]))
    assert distance == distance.quantize(Decimal("0.1"))
    hours, minutes, seconds = payload["estimated_duration"].split(":")
    assert int(hours) > 0 and 0 <= int(minutes) < 60 and 0 <= int(seconds) < 60
    assert payload["estimated_cost"]["currency"] == "CNY"
    assert isinstance(payload["estimated_cost"]["amount"], float)
    assert payload["estimated_cost"]["amount"] > 0


def test_near_antipodal_request_is_routed(api_client: TestClient):
    response = api_client.post(
        "/api/routing/calculate",
        json=_payload(
            origin={"latitude": "0.08", "longitude": "0"},
            destination={"latitude": "-0.08", "longitude": "180"},
            strategy="Fastest",
        ),
    )

    assert response.status_code == 200
    assert response.json()["found"] is True


def test_calculate_is_repeatable(api_client: TestClient):
    first = api_client.post("/api/routing/calculate", json=_payload(strategy="Balanced")).json()
    second = api_client.post("/api/routing/calculate", json=_payload(strategy="BALANCED")).json()

    assert first == second


def test_compare_endpoint(api_client: TestClient):
    response = api_client.post("/api/routing/compare", json=_payload(package_weight={"value": "500", "unit": "G"}))

    assert response.status_code == 200
    routes = response.json()
    assert [route["strategy_used"] for route in routes] == ["Fastest", "Cheapest", "Balanced"]
    assert all(route["found"] for route in routes)


def test_compare_csv_endpoint(api_client: TestClient):
    response = api_client.post("/api/routing/compare/csv", json=_payload())

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert [row["strategy_used"] for row in rows] == ["Fastest", "Cheapest", "Balanced"]
    assert all(row["waypoints"].startswith("ORIGIN > ") for row in rows)


def test_unknown_strategy_is_bad_request(api_client: TestClient):
    response = api_client.post("/api/routing/calculate", json=_payload(strategy="Scenic"))

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "STRATEGY_NOT_FOUND"


def test_same_origin_and_destination_is_bad_request(api_client: TestClient):
    response = api_client.post("/api/routing/calculate", json=_payload(destination=SHANGHAI, strategy="Cheapest"))

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "VALIDATION_ERROR"
    assert detail["message"]


def test_unknown_service_level_is_bad_request(api_client: TestClient):
    response = api_client.post("/api/routing/compare", json=_payload(service_level="Overnight"))

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "VALIDATION_ERROR"


def test_out_of_range_coordinate_is_rejected_by_schema(api_client: TestClient):
    response = api_client.post(
        "/api/routing/calculate",
        json=_payload(origin={"latitude": "95", "longitude": "121"}, strategy="Fastest"),
    )

    assert response.status_code == 422


def test_unexpected_failure_is_internal_error(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.hubroute.api.routes import routing as routing_routes

    def explode(request):
        raise RuntimeError("graph unavailable")

    monkeypatch.setattr(routing_routes, "compare_routes", explode)
    response = api_client.post("/api/routing/compare", json=_payload())

    assert response.status_code == 500
    assert response.json()["detail"]["code"] == "INTERNAL_ERROR"

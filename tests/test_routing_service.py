from decimal import Decimal

import pytest

from src.hubroute.models.domain import Coordinate, ServiceLevel, Weight
from src.hubroute.services.routing import dispatcher
from src.hubroute.services.routing import service as routing_service
from src.hubroute.services.routing.dispatcher import RouteStrategyRegistry, build_registry
from src.hubroute.services.routing.errors import InvalidRouteRequestError, StrategyNotFoundError
from src.hubroute.services.routing.models import RouteRequest
from src.hubroute.services.routing.strategies import (
    BalancedRouteStrategy,
    CheapestRouteStrategy,
    FastestRouteStrategy,
)


def _request(origin=("31.2304", "121.4737"), destination=("39.9042", "116.4074")) -> RouteRequest:
    return RouteRequest(
        origin=Coordinate(*origin),
        destination=Coordinate(*destination),
        package_weight=Weight.kilograms("2.5"),
        service_level=ServiceLevel.STANDARD,
    )


@pytest.fixture
def registry() -> RouteStrategyRegistry:
    return build_registry()


def test_registry_lookup_is_case_insensitive(registry):
    assert registry.create("fastest").name == "Fastest"
    assert registry.create("CHEAPEST").name == "Cheapest"
    assert registry.create(" Balanced ").name == "Balanced"
    assert "balanced" in registry
    assert len(registry) == 3


def test_registry_lists_names_in_registration_order(registry):
    assert registry.available() == ["Fastest", "Cheapest", "Balanced"]


@pytest.mark.parametrize("name", ["Scenic", "", "   "])
def test_unknown_strategy_raises(registry, name):
    with pytest.raises(StrategyNotFoundError) as excinfo:
        registry.create(name)
    assert excinfo.value.code == "STRATEGY_NOT_FOUND"


def test_duplicate_strategy_names_are_rejected():
    with pytest.raises(ValueError):
        RouteStrategyRegistry([FastestRouteStrategy(), FastestRouteStrategy()])


def test_registry_without_stages_holds_bare_strategies():
    strategies = [FastestRouteStrategy(), CheapestRouteStrategy(), BalancedRouteStrategy()]
    registry = build_registry(strategies, stages=[])

    assert registry.create("Cheapest") is strategies[1]


def test_calculate_shanghai_to_beijing_fastest(registry):
    route = routing_service.calculate_route("Fastest", _request(), registry)

    assert route.strategy_used == "Fastest"
    assert route.waypoint_node_ids[0] == "ORIGIN"
    assert route.waypoint_node_ids[-1] == "DESTINATION"
    assert len(route.waypoint_node_ids) >= 3
    assert route.distance_km > 0
    assert route.estimated_duration.total_seconds() > 0
    assert route.estimated_cost.amount > 0
    assert route.estimated_cost.currency == "CNY"


def test_identical_requests_produce_identical_routes():
    first = routing_service.calculate_route("Balanced", _request(), build_registry())
    second = routing_service.calculate_route("balanced", _request(), build_registry())

    assert first == second


def test_calculate_unknown_strategy(registry):
    with pytest.raises(StrategyNotFoundError):
        routing_service.calculate_route("Teleport", _request(), registry)


def test_calculate_rejects_same_origin_and_destination(registry):
    with pytest.raises(InvalidRouteRequestError):
        routing_service.calculate_route("Cheapest", _request(destination=("31.2304", "121.4737")), registry)


def test_compare_runs_every_strategy(registry):
    routes = routing_service.compare_routes(_request(), registry)

    assert [route.strategy_used for route in routes] == ["Fastest", "Cheapest", "Balanced"]
    fastest, cheapest, balanced = routes
    assert fastest.distance_km <= cheapest.distance_km
    assert cheapest.estimated_cost.amount <= fastest.estimated_cost.amount
    assert balanced.waypoint_node_ids in (fastest.waypoint_node_ids, cheapest.waypoint_node_ids)


def test_list_strategies(registry):
    assert routing_service.list_strategies(registry) == ["Fastest", "Cheapest", "Balanced"]


def test_default_route_always_uses_fastest(registry, monkeypatch):
    monkeypatch.setenv("HUBROUTE_DEFAULT_STRATEGY", "Cheapest")

    route = routing_service.calculate_default_route(_request(), registry)

    assert route.strategy_used == "Fastest"
    assert route == routing_service.calculate_route("Fastest", _request(), registry)


def test_service_falls_back_to_process_registry(monkeypatch):
    shared = build_registry()
    monkeypatch.setattr(routing_service, "get_registry", lambda: shared)

    assert routing_service.list_strategies() == ["Fastest", "Cheapest", "Balanced"]
    assert routing_service.calculate_route("Fastest", _request()).distance_km > Decimal("0")


def test_process_registry_is_shared():
    dispatcher.get_registry.cache_clear()
    try:
        assert dispatcher.get_registry() is dispatcher.get_registry()
    finally:
        dispatcher.get_registry.cache_clear()

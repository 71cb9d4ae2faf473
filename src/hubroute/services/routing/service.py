"""Routing orchestration service."""

from __future__ import annotations

from ...models.domain import RouteOptimization
from .dispatcher import RouteStrategyRegistry, get_registry
from .models import Route, RouteRequest


def _resolve(registry: RouteStrategyRegistry | None) -> RouteStrategyRegistry:
    return registry if registry is not None else get_registry()


def calculate_route(
    strategy_name: str,
    request: RouteRequest,
    registry: RouteStrategyRegistry | None = None,
) -> Route:
    """Calculate a route with the named strategy.

    Raises ``StrategyNotFoundError`` for unregistered names and
    ``InvalidRouteRequestError`` for malformed requests. An unreachable
    destination is not an error: check ``route.is_empty``.
    """

    strategy = _resolve(registry).create(strategy_name)
    return strategy.calculate(request)


def compare_routes(request: RouteRequest, registry: RouteStrategyRegistry | None = None) -> list[Route]:
    """Run every registered strategy against the same request, in registration order."""

    registry = _resolve(registry)
    return [registry.create(name).calculate(request) for name in registry.available()]


def list_strategies(registry: RouteStrategyRegistry | None = None) -> list[str]:
    return _resolve(registry).available()


def calculate_default_route(request: RouteRequest, registry: RouteStrategyRegistry | None = None) -> Route:
    """Entry point for order fulfillment; always uses the Fastest strategy."""

    return calculate_route(RouteOptimization.FASTEST.value, request, registry)

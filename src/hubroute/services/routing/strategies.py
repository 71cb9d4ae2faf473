"""Named routing policies binding the network builder to one or both searches."""

from __future__ import annotations

from decimal import Decimal

from ...config import settings
from ...models.domain import Money, RouteOptimization, to_decimal
from .astar import AStarPathfinder
from .base import Pathfinder, RouteStrategy
from .dijkstra import DijkstraPathfinder
from .models import DESTINATION_NODE_ID, ORIGIN_NODE_ID, Route, RouteRequest
from .network import HubNetworkBuilder
from .scoring import build_baseline, select_best


class FastestRouteStrategy(RouteStrategy):
    """Shortest distance path via A*."""

    def __init__(self, pathfinder: Pathfinder | None = None, network: HubNetworkBuilder | None = None) -> None:
        self.pathfinder = pathfinder or AStarPathfinder()
        self.network = network or HubNetworkBuilder()

    @property
    def name(self) -> str:
        return RouteOptimization.FASTEST.value

    def calculate(self, request: RouteRequest) -> Route:
        graph = self.network.build_graph(request.origin, request.destination)
        path = self.pathfinder.find_path(graph, ORIGIN_NODE_ID, DESTINATION_NODE_ID)
        return Route.from_path(self.name, path)


class CheapestRouteStrategy(RouteStrategy):
    """Lowest cost path via Dijkstra."""

    def __init__(self, pathfinder: Pathfinder | None = None, network: HubNetworkBuilder | None = None) -> None:
        self.pathfinder = pathfinder or DijkstraPathfinder()
        self.network = network or HubNetworkBuilder()

    @property
    def name(self) -> str:
        return RouteOptimization.CHEAPEST.value

    def calculate(self, request: RouteRequest) -> Route:
        graph = self.network.build_graph(request.origin, request.destination)
        path = self.pathfinder.find_path(graph, ORIGIN_NODE_ID, DESTINATION_NODE_ID)
        return Route.from_path(self.name, path)


class BalancedRouteStrategy(RouteStrategy):
    """Run both searches on one graph and keep the better time/cost trade-off.

    The winner is reported under the ``Balanced`` name whichever search found it.
    Equal scores resolve to the time-optimised path.
    """

    def __init__(
        self,
        *,
        time_pathfinder: Pathfinder | None = None,
        cost_pathfinder: Pathfinder | None = None,
        network: HubNetworkBuilder | None = None,
        time_weight: Decimal | float | None = None,
        cost_weight: Decimal | float | None = None,
    ) -> None:
        self.time_pathfinder = time_pathfinder or AStarPathfinder()
        self.cost_pathfinder = cost_pathfinder or DijkstraPathfinder()
        self.network = network or HubNetworkBuilder()
        self.time_weight = to_decimal(time_weight if time_weight is not None else settings.balanced_time_weight)
        self.cost_weight = to_decimal(cost_weight if cost_weight is not None else settings.balanced_cost_weight)

    @property
    def name(self) -> str:
        return RouteOptimization.BALANCED.value

    def calculate(self, request: RouteRequest) -> Route:
        graph = self.network.build_graph(request.origin, request.destination)
        fastest = self.time_pathfinder.find_path(graph, ORIGIN_NODE_ID, DESTINATION_NODE_ID)
        cheapest = self.cost_pathfinder.find_path(graph, ORIGIN_NODE_ID, DESTINATION_NODE_ID)

        if fastest.is_empty and cheapest.is_empty:
            return Route(strategy_used=self.name, estimated_cost=Money.zero(self.network.currency))
        if fastest.is_empty:
            return Route.from_path(self.name, cheapest)
        if cheapest.is_empty:
            return Route.from_path(self.name, fastest)

        candidates = [fastest, cheapest]
        best = select_best(candidates, build_baseline(candidates), self.time_weight, self.cost_weight)
        return Route.from_path(self.name, best or fastest)

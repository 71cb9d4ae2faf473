"""Base classes for path search and route strategy implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from decimal import Decimal
from typing import Callable, Sequence

from ...models.domain import Money
from .models import Edge, Graph, PathResult, Route, RouteRequest

EdgeWeight = Callable[[Edge], Decimal]


class Pathfinder(ABC):
    """Contract for single-pair shortest path solvers.

    Implementations never raise for an unreachable target or an unknown node id;
    they return ``PathResult.empty()`` instead.
    """

    @abstractmethod
    def find_path(self, graph: Graph, from_node_id: str, to_node_id: str) -> PathResult:
        raise NotImplementedError


class RouteStrategy(ABC):
    """Contract for named routing policies and the stages that wrap them."""

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def calculate(self, request: RouteRequest) -> Route:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def build_edge_lookup(graph: Graph, weight: EdgeWeight) -> dict[tuple[str, str], Edge]:
    """Map (from, to) to the edge a search would relax, i.e. the lightest one."""

    lookup: dict[tuple[str, str], Edge] = {}
    for edge in graph.edges:
        key = (edge.from_node_id, edge.to_node_id)
        current = lookup.get(key)
        if current is None or weight(edge) < weight(current):
            lookup[key] = edge
    return lookup


def path_metrics(path: Sequence[str], graph: Graph, weight: EdgeWeight, currency: str = "CNY") -> PathResult:
    """Sum distance, duration and cost by replaying the edges along ``path``.

    Totals are accumulated in path order so the same path always yields identical values.
    """

    lookup = build_edge_lookup(graph, weight)
    total_distance = Decimal("0")
    total_duration = timedelta(0)
    total_cost: Money | None = None

    for start, end in zip(path, path[1:]):
        edge = lookup.get((start, end))
        if edge is None:
            continue
        total_distance += edge.distance_km
        total_duration += edge.duration
        total_cost = edge.cost if total_cost is None else total_cost.add(edge.cost)

    return PathResult(
        node_ids=tuple(path),
        total_distance_km=total_distance,
        total_duration=total_duration,
        total_cost=total_cost if total_cost is not None else Money.zero(currency),
    )


def reconstruct_path(came_from: dict[str, str], current: str) -> list[str]:
    """Walk predecessor links back from ``current`` and return the forward path."""

    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path

"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping

from ...models.domain import Coordinate, Money, ServiceLevel, Weight

ORIGIN_NODE_ID = "ORIGIN"
DESTINATION_NODE_ID = "DESTINATION"


@dataclass(frozen=True, slots=True)
class Node:
    node_id: str
    name: str
    coordinate: Coordinate


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed transport link. Reverse travel needs its own edge."""

    from_node_id: str
    to_node_id: str
    distance_km: Decimal
    duration: timedelta
    cost: Money

    def __post_init__(self) -> None:
        if self.distance_km < 0:
            raise ValueError(f"Edge {self.from_node_id}->{self.to_node_id} has negative distance.")


class Graph:
    """Directed weighted snapshot of the hub network.

    Built once per calculation and never mutated afterwards.
    """

    __slots__ = ("_nodes", "_edges", "_outgoing", "_currency")

    def __init__(
        self,
        nodes: Mapping[str, Node] | Iterable[Node],
        edges: Iterable[Edge],
        currency: str = "CNY",
    ) -> None:
        if isinstance(nodes, Mapping):
            node_map = dict(nodes)
        else:
            node_map = {}
            for node in nodes:
                if node.node_id in node_map:
                    raise ValueError(f"Duplicate node id '{node.node_id}'.")
                node_map[node.node_id] = node
        edge_list = tuple(edges)
        outgoing: dict[str, list[Edge]] = {}
        for edge in edge_list:
            outgoing.setdefault(edge.from_node_id, []).append(edge)

        self._nodes = MappingProxyType(node_map)
        self._edges = edge_list
        self._outgoing = {node_id: tuple(items) for node_id, items in outgoing.items()}
        self._currency = currency.strip().upper()

    @property
    def nodes(self) -> Mapping[str, Node]:
        return self._nodes

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    @property
    def currency(self) -> str:
        """Currency of edge costs; used for the zero totals of empty and trivial paths."""
        return self._currency

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def edges_from(self, node_id: str) -> tuple[Edge, ...]:
        """Outgoing edges of ``node_id`` in insertion order."""
        return self._outgoing.get(node_id, ())


@dataclass(frozen=True, slots=True)
class PathResult:
    """Output of a path search.

    An empty ``node_ids`` means no path exists; a single id means start == end.
    """

    node_ids: tuple[str, ...]
    total_distance_km: Decimal
    total_duration: timedelta
    total_cost: Money

    @classmethod
    def empty(cls, currency: str = "CNY") -> PathResult:
        return cls((), Decimal("0"), timedelta(0), Money.zero(currency))

    @classmethod
    def trivial(cls, node_id: str, currency: str = "CNY") -> PathResult:
        return cls((node_id,), Decimal("0"), timedelta(0), Money.zero(currency))

    @property
    def is_empty(self) -> bool:
        return not self.node_ids


@dataclass(frozen=True, slots=True)
class RouteRequest:
    """Route calculation input.

    ``origin != destination`` is checked by the validation stage, not here.
    """

    origin: Coordinate
    destination: Coordinate
    package_weight: Weight
    service_level: ServiceLevel = ServiceLevel.STANDARD

    def __post_init__(self) -> None:
        object.__setattr__(self, "service_level", ServiceLevel.parse(self.service_level))


@dataclass(frozen=True, slots=True)
class Route:
    """Route calculation output exposed to callers.

    No route found is represented by empty ``waypoint_node_ids`` and zero metrics.
    """

    strategy_used: str
    waypoint_node_ids: tuple[str, ...] = field(default_factory=tuple)
    distance_km: Decimal = Decimal("0")
    estimated_duration: timedelta = timedelta(0)
    estimated_cost: Money = field(default_factory=Money.zero)

    @classmethod
    def from_path(cls, strategy_name: str, path: PathResult) -> Route:
        return cls(
            strategy_used=strategy_name,
            waypoint_node_ids=path.node_ids,
            distance_km=path.total_distance_km,
            estimated_duration=path.total_duration,
            estimated_cost=path.total_cost,
        )

    @property
    def is_empty(self) -> bool:
        return not self.waypoint_node_ids

"""Dijkstra search minimising cumulative edge cost."""

from __future__ import annotations

import heapq
import itertools
from decimal import Decimal

from .base import Pathfinder, path_metrics, reconstruct_path
from .models import Edge, Graph, PathResult

INFINITY = Decimal("Infinity")


def _cost(edge: Edge) -> Decimal:
    return edge.cost.amount


class DijkstraPathfinder(Pathfinder):
    """Uninformed search over monetary edge cost; stops once the target is settled."""

    def find_path(self, graph: Graph, from_node_id: str, to_node_id: str) -> PathResult:
        if from_node_id not in graph or to_node_id not in graph:
            return PathResult.empty(graph.currency)
        if from_node_id == to_node_id:
            return PathResult.trivial(from_node_id, graph.currency)

        distances: dict[str, Decimal] = {node_id: INFINITY for node_id in graph.nodes}
        previous: dict[str, str] = {}
        visited: set[str] = set()
        counter = itertools.count()

        distances[from_node_id] = Decimal("0")
        queue: list[tuple[Decimal, int, str]] = [(Decimal("0"), next(counter), from_node_id)]

        while queue:
            _, _, current = heapq.heappop(queue)

            # stale entry
            if current in visited:
                continue
            visited.add(current)

            if current == to_node_id:
                path = reconstruct_path(previous, current)
                if path[0] != from_node_id:
                    return PathResult.empty(graph.currency)
                return path_metrics(path, graph, _cost, graph.currency)

            for edge in graph.edges_from(current):
                neighbour = edge.to_node_id
                if neighbour in visited or neighbour not in distances:
                    continue
                alternative = distances[current] + edge.cost.amount
                if alternative < distances[neighbour]:
                    distances[neighbour] = alternative
                    previous[neighbour] = current
                    heapq.heappush(queue, (alternative, next(counter), neighbour))

        return PathResult.empty(graph.currency)

"""A* search minimising cumulative edge distance."""

from __future__ import annotations

import heapq
import itertools
from decimal import Decimal

from .base import Pathfinder, path_metrics, reconstruct_path
from .models import Edge, Graph, PathResult


def _distance(edge: Edge) -> Decimal:
    return edge.distance_km


class AStarPathfinder(Pathfinder):
    """Heuristic-guided search ordered by ``f = g + h``.

    ``g`` is the best known cumulative distance and ``h`` the straight-line
    distance to the target. The straight line never overestimates the remaining
    road distance, so the first time the target is dequeued its path is optimal.
    """

    def find_path(self, graph: Graph, from_node_id: str, to_node_id: str) -> PathResult:
        if from_node_id not in graph or to_node_id not in graph:
            return PathResult.empty(graph.currency)
        if from_node_id == to_node_id:
            return PathResult.trivial(from_node_id, graph.currency)

        target = graph.nodes[to_node_id].coordinate

        def heuristic(node_id: str) -> Decimal:
            return graph.nodes[node_id].coordinate.distance_to_km(target)

        counter = itertools.count()
        open_set: list[tuple[Decimal, int, str]] = [(heuristic(from_node_id), next(counter), from_node_id)]
        came_from: dict[str, str] = {}
        g_score: dict[str, Decimal] = {from_node_id: Decimal("0")}
        closed: set[str] = set()

        while open_set:
            _, _, current = heapq.heappop(open_set)

            if current == to_node_id:
                return path_metrics(reconstruct_path(came_from, current), graph, _distance, graph.currency)

            if current in closed:
                continue
            closed.add(current)

            for edge in graph.edges_from(current):
                neighbour = edge.to_node_id
                if neighbour in closed or neighbour not in graph:
                    continue
                tentative = g_score[current] + edge.distance_km
                if neighbour not in g_score or tentative < g_score[neighbour]:
                    came_from[neighbour] = current
                    g_score[neighbour] = tentative
                    heapq.heappush(open_set, (tentative + heuristic(neighbour), next(counter), neighbour))

        return PathResult.empty(graph.currency)

"""Synthetic logistics network built around a request's origin and destination."""

from __future__ import annotations

import hashlib
import random
from datetime import timedelta
from decimal import Decimal
from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate, Money, to_decimal
from .models import DESTINATION_NODE_ID, ORIGIN_NODE_ID, Edge, Graph, Node

# id -> (display name, latitude, longitude)
HUBS: dict[str, tuple[str, str, str]] = {
    # East China
    "SH-01": ("Shanghai Transfer Center", "31.2304", "121.4737"),
    "NJ-01": ("Nanjing Sorting Center", "32.0603", "118.7969"),
    "HZ-01": ("Hangzhou Distribution Center", "30.2741", "120.1551"),
    "SZ-02": ("Suzhou Transit Station", "31.2990", "120.5853"),
    # North China
    "BJ-01": ("Beijing Main Warehouse", "39.9042", "116.4074"),
    "TJ-01": ("Tianjin Port", "39.3434", "117.3616"),
    "SJZ-01": ("Shijiazhuang Center", "38.0428", "114.5149"),
    "JN-01": ("Jinan Node", "36.6512", "117.1201"),
    # Central China
    "WH-01": ("Wuhan Hub", "30.5928", "114.3055"),
    "ZZ-01": ("Zhengzhou Transit Station", "34.7466", "113.6253"),
    "CS-01": ("Changsha Sorting Center", "28.2282", "112.9388"),
    # Northeast China
    "SY-01": ("Shenyang Hub", "41.8057", "123.4315"),
    "CC-01": ("Changchun Station", "43.8171", "125.3235"),
    "HEB-01": ("Harbin Center", "45.8038", "126.5340"),
    # West / Southwest China
    "XA-01": ("Xi'an Sorting Center", "34.3416", "108.9398"),
    "CD-01": ("Chengdu Hub", "30.5728", "104.0668"),
    "CQ-01": ("Chongqing Center", "29.5630", "106.5516"),
    # South China
    "GZ-01": ("Guangzhou Main Warehouse", "23.1291", "113.2644"),
    "SZ-01": ("Shenzhen Station", "22.5431", "114.0579"),
}

# Each corridor becomes two directed edges with independently drawn parameters.
CORRIDORS: tuple[tuple[str, str], ...] = (
    ("SH-01", "NJ-01"),
    ("SH-01", "HZ-01"),
    ("SH-01", "SZ-02"),
    ("NJ-01", "SZ-02"),
    ("HZ-01", "NJ-01"),
    ("NJ-01", "WH-01"),
    ("WH-01", "CS-01"),
    ("NJ-01", "ZZ-01"),
    ("BJ-01", "TJ-01"),
    ("BJ-01", "SJZ-01"),
    ("SJZ-01", "ZZ-01"),
    ("TJ-01", "JN-01"),
    ("JN-01", "NJ-01"),
    ("JN-01", "ZZ-01"),
    ("BJ-01", "SY-01"),
    ("SY-01", "CC-01"),
    ("CC-01", "HEB-01"),
    ("TJ-01", "SY-01"),
    ("ZZ-01", "XA-01"),
    ("XA-01", "CD-01"),
    ("CD-01", "CQ-01"),
    ("WH-01", "CQ-01"),
    ("WH-01", "ZZ-01"),
    ("CS-01", "GZ-01"),
    ("GZ-01", "SZ-01"),
    ("HZ-01", "CS-01"),
    ("WH-01", "GZ-01"),
)

LONG_HAUL_THRESHOLD_KM = Decimal("500")
SHORT_HAUL_SPEED_KMH = Decimal("65")
LONG_HAUL_SPEED_KMH = Decimal("80")
MAX_TRANSFER_DELAY_HOURS = 2.0
MIN_COST_MULTIPLIER = 0.8
COST_MULTIPLIER_SPREAD = 0.4


def graph_seed(origin: Coordinate, destination: Coordinate) -> int:
    """Stable seed derived from the four coordinate values.

    Numerically equal coordinates (``31.23`` and ``31.230``) give the same seed.
    """

    parts = (origin.latitude, origin.longitude, destination.latitude, destination.longitude)
    payload = "|".join(format(value.normalize(), "f") for value in parts)
    digest = hashlib.sha256(payload.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class HubNetworkBuilder:
    """Build the hub graph plus synthetic ORIGIN/DESTINATION endpoints for a request."""

    def __init__(
        self,
        *,
        hubs: dict[str, tuple[str, str, str]] | None = None,
        corridors: Sequence[tuple[str, str]] | None = None,
        connection_count: int | None = None,
        cost_rate_per_km: float | None = None,
        currency: str | None = None,
    ) -> None:
        self.hubs = hubs if hubs is not None else HUBS
        self.corridors = tuple(corridors) if corridors is not None else CORRIDORS
        self.connection_count = connection_count if connection_count is not None else settings.hub_connection_count
        if self.connection_count < 1:
            raise ValueError("connection_count must be >= 1")
        self.cost_rate_per_km = to_decimal(
            cost_rate_per_km if cost_rate_per_km is not None else settings.cost_rate_per_km
        )
        self.currency = currency or settings.currency

    def build_graph(self, origin: Coordinate, destination: Coordinate) -> Graph:
        rng = random.Random(graph_seed(origin, destination))

        nodes: dict[str, Node] = {
            hub_id: Node(hub_id, name, Coordinate(lat, lon))
            for hub_id, (name, lat, lon) in self.hubs.items()
        }
        nodes[ORIGIN_NODE_ID] = Node(ORIGIN_NODE_ID, "Origin", origin)
        nodes[DESTINATION_NODE_ID] = Node(DESTINATION_NODE_ID, "Destination", destination)

        edges: list[Edge] = []
        for from_id, to_id in self.corridors:
            if from_id not in nodes or to_id not in nodes:
                continue
            edges.append(self._create_edge(nodes[from_id], nodes[to_id], rng))
            edges.append(self._create_edge(nodes[to_id], nodes[from_id], rng))

        for hub in self._nearest_hubs(nodes, origin):
            edges.append(self._create_edge(nodes[ORIGIN_NODE_ID], hub, rng))
            edges.append(self._create_edge(hub, nodes[ORIGIN_NODE_ID], rng))

        for hub in self._nearest_hubs(nodes, destination):
            edges.append(self._create_edge(hub, nodes[DESTINATION_NODE_ID], rng))
            edges.append(self._create_edge(nodes[DESTINATION_NODE_ID], hub, rng))

        return Graph(nodes, edges, self.currency)

    def _nearest_hubs(self, nodes: dict[str, Node], point: Coordinate) -> list[Node]:
        hubs = [
            node for node_id, node in nodes.items() if node_id not in (ORIGIN_NODE_ID, DESTINATION_NODE_ID)
        ]
        hubs.sort(key=lambda node: point.distance_to_km(node.coordinate))
        return hubs[: self.connection_count]

    def _create_edge(self, start: Node, end: Node, rng: random.Random) -> Edge:
        distance = start.coordinate.distance_to_km(end.coordinate)

        speed = LONG_HAUL_SPEED_KMH if distance > LONG_HAUL_THRESHOLD_KM else SHORT_HAUL_SPEED_KMH
        transfer_delay = rng.random() * MAX_TRANSFER_DELAY_HOURS
        duration = timedelta(hours=float(distance / speed) + transfer_delay)

        multiplier = Decimal(repr(MIN_COST_MULTIPLIER + rng.random() * COST_MULTIPLIER_SPREAD))
        cost = Money(distance * self.cost_rate_per_km * multiplier, self.currency)

        return Edge(start.node_id, end.node_id, distance, duration, cost)


def build_graph(origin: Coordinate, destination: Coordinate) -> Graph:
    return HubNetworkBuilder().build_graph(origin, destination)

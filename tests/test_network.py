from decimal import Decimal

from src.hubroute.models.domain import Coordinate
from src.hubroute.services.routing.models import DESTINATION_NODE_ID, ORIGIN_NODE_ID
from src.hubroute.services.routing.network import CORRIDORS, HUBS, HubNetworkBuilder, graph_seed

SHANGHAI = Coordinate("31.2304", "121.4737")
BEIJING = Coordinate("39.9042", "116.4074")
GUANGZHOU = Coordinate("23.1291", "113.2644")


def _edge_map(graph):
    return {(edge.from_node_id, edge.to_node_id): edge for edge in graph.edges}


def test_build_graph_is_deterministic():
    builder = HubNetworkBuilder()

    first = builder.build_graph(SHANGHAI, BEIJING)
    second = HubNetworkBuilder().build_graph(SHANGHAI, BEIJING)

    assert set(first.nodes) == set(second.nodes)
    assert first.edges == second.edges


def test_seed_ignores_trailing_zeroes_but_not_values():
    assert graph_seed(SHANGHAI, BEIJING) == graph_seed(Coordinate("31.23040", "121.4737"), BEIJING)
    assert graph_seed(SHANGHAI, BEIJING) != graph_seed(BEIJING, SHANGHAI)


def test_different_requests_draw_different_edge_parameters():
    builder = HubNetworkBuilder()
    first = _edge_map(builder.build_graph(SHANGHAI, BEIJING))
    second = _edge_map(builder.build_graph(SHANGHAI, GUANGZHOU))

    corridor = ("SH-01", "NJ-01")
    assert first[corridor].distance_km == second[corridor].distance_km
    assert (first[corridor].duration, first[corridor].cost) != (second[corridor].duration, second[corridor].cost)


def test_graph_contains_hubs_endpoints_and_bidirectional_corridors():
    graph = HubNetworkBuilder().build_graph(SHANGHAI, BEIJING)
    edges = _edge_map(graph)

    assert set(HUBS) <= set(graph.nodes)
    assert graph.nodes[ORIGIN_NODE_ID].coordinate == SHANGHAI
    assert graph.nodes[DESTINATION_NODE_ID].coordinate == BEIJING
    assert len(graph.nodes) == len(HUBS) + 2
    # two directed edges per corridor plus 2 x 3 per endpoint
    assert len(graph.edges) == 2 * len(CORRIDORS) + 12
    for start, end in CORRIDORS:
        assert (start, end) in edges
        assert (end, start) in edges


def test_endpoints_connect_to_three_nearest_hubs():
    graph = HubNetworkBuilder().build_graph(SHANGHAI, BEIJING)

    origin_links = {edge.to_node_id for edge in graph.edges_from(ORIGIN_NODE_ID)}
    destination_links = {edge.to_node_id for edge in graph.edges_from(DESTINATION_NODE_ID)}
    inbound = {edge.from_node_id for edge in graph.edges if edge.to_node_id == DESTINATION_NODE_ID}

    assert origin_links == {"SH-01", "SZ-02", "HZ-01"}
    assert destination_links == {"BJ-01", "TJ-01", "SJZ-01"}
    assert inbound == destination_links


def test_edge_parameters_follow_generation_rules():
    graph = HubNetworkBuilder().build_graph(SHANGHAI, BEIJING)

    for edge in graph.edges:
        start = graph.nodes[edge.from_node_id].coordinate
        end = graph.nodes[edge.to_node_id].coordinate
        assert edge.distance_km == start.distance_to_km(end)
        assert edge.distance_km >= 0

        speed = Decimal("80") if edge.distance_km > 500 else Decimal("65")
        base_hours = float(edge.distance_km / speed)
        hours = edge.duration.total_seconds() / 3600
        assert base_hours - 1e-6 <= hours <= base_hours + 2.0 + 1e-6

        base_cost = edge.distance_km * Decimal("1.5")
        assert base_cost * Decimal("0.8") - Decimal("0.01") <= edge.cost.amount <= base_cost * Decimal("1.2") + Decimal("0.01")
        assert edge.cost.currency == "CNY"


def test_connection_count_is_configurable():
    graph = HubNetworkBuilder(connection_count=1).build_graph(SHANGHAI, BEIJING)

    assert [edge.to_node_id for edge in graph.edges_from(ORIGIN_NODE_ID)] == ["SH-01"]
    assert [edge.to_node_id for edge in graph.edges_from(DESTINATION_NODE_ID)] == ["BJ-01"]

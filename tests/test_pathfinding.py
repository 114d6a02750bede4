import pytest
import pygame
from pygame.math import Vector2

from arena.ai.path_follower import PathFollower
from arena.ai.pathfinding import PathPlanner
from arena.ai.waypoints import WaypointGraph
from arena.core.events import CreatePathEvent, EventChannel
from arena.core.geometry import SceneGeometry


# --- Fixtures ---

@pytest.fixture
def triangle():
    # A-B and B-C are cheap, the direct A-C edge is expensive
    graph = WaypointGraph()
    a = graph.add_node((0, 0))
    b = graph.add_node((50, 50))
    c = graph.add_node((100, 0))
    graph.add_edge(a, b, 10)
    graph.add_edge(b, c, 10)
    graph.add_edge(a, c, 30)
    return graph, (a, b, c)


@pytest.fixture
def two_islands():
    graph = WaypointGraph()
    a = graph.add_node((0, 0))
    b = graph.add_node((100, 0))
    c = graph.add_node((1000, 0))
    d = graph.add_node((1100, 0))
    graph.add_edge(a, b)
    graph.add_edge(c, d)
    return graph, (a, b, c, d)


# --- Dijkstra ---

def test_weights_follow_cheapest_route(triangle):
    graph, (a, b, c) = triangle
    weights = PathPlanner(graph).compute_weights(a)
    assert weights == {a: 0.0, b: 10.0, c: 20.0}


def test_unreachable_nodes_have_no_weight(two_islands):
    graph, (a, b, c, d) = two_islands
    weights = PathPlanner(graph).compute_weights(a)
    assert set(weights) == {a, b}


def test_shortest_path_takes_two_cheap_hops(triangle):
    graph, (a, b, c) = triangle
    path = PathPlanner(graph).plan((0, 0), (100, 0))

    # Stored destination first
    assert [step.handle for step in path] == [c, b, a]
    assert path[0].position == Vector2(100, 0)
    assert path[-1].position == Vector2(0, 0)


def test_path_cost_matches_weight_table():
    graph = WaypointGraph()
    graph.build(bounds=(600, 600), gap=(100, 100), scale=(1, 1), offset=(0, 0))
    # Wall across the middle; the nodes buried in it get pruned
    geometry = SceneGeometry([pygame.Rect(-250, -5, 450, 10)])
    assert graph.construct_edges(geometry.static_view())

    planner = PathPlanner(graph)
    path = planner.plan((-300, -300), (-300, 200))
    assert path is not None

    cost = 0.0
    for step, prev in zip(path, path[1:]):
        cost += graph.node(step.handle).edge_to(prev.handle).distance
    assert cost == pytest.approx(planner.last_weights[path[0].handle])
    # Consecutive steps are always graph neighbours
    for step, prev in zip(path, path[1:]):
        assert graph.node(prev.handle).edge_to(step.handle) is not None


def test_source_equals_destination(triangle):
    graph, (a, b, c) = triangle
    path = PathPlanner(graph).plan((1, 1), (0, 0))
    assert [step.handle for step in path] == [a]


def test_endpoints_map_to_nearest_nodes(triangle):
    graph, (a, b, c) = triangle
    path = PathPlanner(graph).plan((48, 55), (104, -3))
    assert path[0].handle == c
    assert path[-1].handle == b


def test_equal_cost_routes_are_deterministic():
    graph = WaypointGraph()
    a = graph.add_node((0, 0))
    top = graph.add_node((50, -50))
    bottom = graph.add_node((50, 50))
    d = graph.add_node((100, 0))
    graph.add_edge(a, top, 10)
    graph.add_edge(a, bottom, 10)
    graph.add_edge(top, d, 10)
    graph.add_edge(bottom, d, 10)

    planner = PathPlanner(graph)
    first = planner.plan((0, 0), (100, 0))
    second = planner.plan((0, 0), (100, 0))
    assert [s.handle for s in first] == [s.handle for s in second]
    assert len(first) == 3


# --- Failure cases ---

def test_empty_graph_returns_none():
    assert PathPlanner(WaypointGraph()).plan((0, 0), (10, 10)) is None


def test_isolated_source_returns_none():
    graph = WaypointGraph()
    a = graph.add_node((0, 0))
    b = graph.add_node((100, 0))
    graph.add_node((500, 500))
    graph.add_edge(a, b)

    planner = PathPlanner(graph)
    assert planner.plan((500, 500), (0, 0)) is None
    # No search ran, so nothing was published
    assert dict(planner.last_weights) == {}


def test_unreachable_destination_returns_none(two_islands):
    graph, _ = two_islands
    assert PathPlanner(graph).plan((0, 0), (1100, 0)) is None


def test_weight_snapshot_is_read_only(triangle):
    graph, (a, b, c) = triangle
    planner = PathPlanner(graph)
    planner.plan((0, 0), (100, 0))

    assert planner.last_weights[c] == 20.0
    with pytest.raises(TypeError):
        planner.last_weights[c] = 0.0


# --- Request processing ---

def test_process_requests_assigns_path(triangle):
    graph, (a, b, c) = triangle
    events = EventChannel()
    follower = PathFollower(agent=1)
    planner = PathPlanner(graph)

    events.send(CreatePathEvent(Vector2(0, 0), Vector2(100, 0), 1))
    assert planner.process_requests(events, {1: follower}) == 1
    assert [s.handle for s in follower.path] == [c, b, a]
    assert events.pending(CreatePathEvent) == 0
    assert planner.requests_served == 1


def test_new_path_replaces_old(triangle):
    graph, (a, b, c) = triangle
    events = EventChannel()
    follower = PathFollower(agent=1)
    planner = PathPlanner(graph)

    events.send(CreatePathEvent(Vector2(0, 0), Vector2(100, 0), 1))
    planner.process_requests(events, {1: follower})
    events.send(CreatePathEvent(Vector2(100, 0), Vector2(50, 50), 1))
    planner.process_requests(events, {1: follower})

    assert [s.handle for s in follower.path] == [b, c]


def test_failed_request_keeps_existing_path():
    graph = WaypointGraph()
    a = graph.add_node((0, 0))
    b = graph.add_node((100, 0))
    graph.add_node((500, 500))
    graph.add_edge(a, b)

    events = EventChannel()
    follower = PathFollower(agent=1)
    planner = PathPlanner(graph)

    events.send(CreatePathEvent(Vector2(0, 0), Vector2(100, 0), 1))
    planner.process_requests(events, {1: follower})
    previous = follower.path

    events.send(CreatePathEvent(Vector2(500, 500), Vector2(0, 0), 1))
    assert planner.process_requests(events, {1: follower}) == 0
    assert follower.path == previous
    assert planner.requests_aborted == 1


def test_request_from_despawned_agent_is_dropped(triangle):
    graph, _ = triangle
    events = EventChannel()
    planner = PathPlanner(graph)

    events.send(CreatePathEvent(Vector2(0, 0), Vector2(100, 0), 42))
    assert planner.process_requests(events, {}) == 0
    assert events.pending(CreatePathEvent) == 0

"""
Path planning over the waypoint graph.

Each request runs a full single-source Dijkstra from the node nearest the
requester to every other node (stopping early once the destination is settled)
and then backtracks from the destination node to the source node. The weight
table is private to the request; a read-only copy of the last one is kept for
the debug overlay.
"""

import logging
from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Optional, Set, Tuple

from pygame.math import Vector2

from ..core.events import CreatePathEvent

logger = logging.getLogger(__name__)

INFINITY = float('inf')


class PathStep(NamedTuple):
    position: Vector2
    handle: int


# Ordered from the destination node back to the source node
ComputedPath = Tuple[PathStep, ...]


class PathPlanner:
    """Resolves path requests against a WaypointGraph."""

    def __init__(self, graph):
        self.graph = graph
        self.last_weights: Mapping[int, float] = MappingProxyType({})
        self.requests_served = 0
        self.requests_aborted = 0

    def compute_weights(self, start: int, goal: Optional[int] = None) -> Dict[int, float]:
        """
        Dijkstra from `start`. Returns the weight table {handle: distance}.

        Nodes missing from the table were never reached. When `goal` is given the
        search stops as soon as it has been settled.
        """
        nodes = self.graph.nodes
        weights: Dict[int, float] = {start: 0.0}
        visited: Set[int] = set()
        current = start

        while len(visited) < len(nodes):
            our_weight = weights[current]
            for neighbor, dist in nodes[current].edges:
                if neighbor in visited:
                    continue
                total = our_weight + dist
                if total < weights.get(neighbor, INFINITY):
                    weights[neighbor] = total

            visited.add(current)
            if current == goal:
                break

            # min() keeps the first of equal weights, so ties follow graph order
            unvisited = [h for h in nodes if h not in visited]
            if not unvisited:
                break
            current = min(unvisited, key=lambda h: weights.get(h, INFINITY))
            if current not in weights:
                # everything left is unreachable from start
                break

        return weights

    def backtrack(self, weights: Mapping[int, float], source: int, dest: int) -> Optional[ComputedPath]:
        """Walk from `dest` to `source` through each node's relaxation predecessor."""
        if dest not in weights:
            return None

        nodes = self.graph.nodes
        current = dest
        path = [PathStep(Vector2(nodes[dest].pos), dest)]
        # A shortest path never revisits a node
        for _ in range(len(nodes)):
            if current == source:
                return tuple(path)
            best = None
            best_cost = INFINITY
            for neighbor, dist in nodes[current].edges:
                cost = weights.get(neighbor, INFINITY) + dist
                if cost < best_cost:
                    best, best_cost = neighbor, cost
            if best is None:
                return None
            current = best
            path.append(PathStep(Vector2(nodes[current].pos), current))

        if current == source:
            return tuple(path)
        logger.warning("Backtrack from %s did not reach source %s", dest, source)
        return None

    def plan(self, src, dst) -> Optional[ComputedPath]:
        """
        Shortest path between two world positions.

        Args:
            src: requester position; mapped to its nearest node
            dst: target position; mapped to its nearest node

        Returns:
            Path steps from the destination node back to the source node, or None
            when the graph is empty, the source node is isolated or the
            destination cannot be reached.
        """
        wp_src = self.graph.find_nearest(src)
        wp_dst = self.graph.find_nearest(dst)
        if wp_src is None or wp_dst is None:
            logger.info("Failed to create path between %s and %s", wp_src, wp_dst)
            return None

        if not self.graph.node(wp_src).edges:
            logger.debug("Source waypoint %s has no edges", wp_src)
            return None

        weights = self.compute_weights(wp_src, goal=wp_dst)
        self.last_weights = MappingProxyType(dict(weights))

        path = self.backtrack(weights, wp_src, wp_dst)
        if path is None:
            logger.debug("No route from waypoint %s to %s", wp_src, wp_dst)
        return path

    def process_requests(self, events, followers) -> int:
        """
        Serve every pending CreatePathEvent.

        Args:
            events: EventChannel holding the requests
            followers: mapping of requester handle -> PathFollower

        Returns:
            Number of paths assigned this call.
        """
        assigned = 0
        for request in events.drain(CreatePathEvent):
            follower = followers.get(request.requester)
            if follower is None:
                # requester despawned since it asked
                continue
            path = self.plan(request.source, request.dest)
            if path is None:
                self.requests_aborted += 1
                continue
            follower.set_path(path)
            self.requests_served += 1
            assigned += 1
        return assigned

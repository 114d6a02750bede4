"""
Waypoint Graph - static navigation mesh for enemy pathing

Nodes are laid out on a regular grid around the window centre when a round
starts. Edges are added lazily, once the scene has settled, between every pair
of nodes that can see each other; nodes that end up with no edges (usually
because they sit inside an obstacle) are pruned.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from pygame.math import Vector2

from config import (
    WIDTH, HEIGHT, WAYPOINT_GAP, WAYPOINT_SCALE, WAYPOINT_OFFSET,
    EDGE_CONSTRUCTION_DELAY,
)
from ..core.geometry import VisibilityUnavailable

logger = logging.getLogger(__name__)


class WaypointEdge(NamedTuple):
    neighbor: int
    distance: float


@dataclass
class WaypointNode:
    handle: int
    pos: Vector2
    edges: List[WaypointEdge] = field(default_factory=list)

    def edge_to(self, handle: int) -> Optional[WaypointEdge]:
        for edge in self.edges:
            if edge.neighbor == handle:
                return edge
        return None


@dataclass
class WaypointParams:
    """Grid layout parameters; defaults come from config."""
    bounds: Tuple[float, float] = (WIDTH, HEIGHT)
    gap: Tuple[float, float] = WAYPOINT_GAP
    scale: Tuple[float, float] = WAYPOINT_SCALE
    offset: Tuple[float, float] = WAYPOINT_OFFSET
    construction_delay: float = EDGE_CONSTRUCTION_DELAY


def find_nearest(candidates, pos) -> Optional[Tuple[int, Vector2]]:
    """
    Return (handle, position) of the candidate closest to `pos`.

    Args:
        candidates: iterable of (handle, position) pairs
        pos: (x, y) query point

    Returns:
        The first candidate at the minimum distance, or None when empty.
    """
    nearest = None
    nearest_dist = float('inf')
    for handle, node_pos in candidates:
        dist = Vector2(pos[0], pos[1]).distance_to(node_pos)
        if nearest is None or dist < nearest_dist:
            nearest = (handle, node_pos)
            nearest_dist = dist
    return nearest


class WaypointGraph:
    """Arena of waypoint nodes keyed by stable integer handles."""

    def __init__(self, params: Optional[WaypointParams] = None):
        self.params = params or WaypointParams()
        self.nodes: Dict[int, WaypointNode] = {}
        self._next_handle = 0
        self._constructing = False
        self.pruned_count = 0

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, handle) -> bool:
        return handle in self.nodes

    def __iter__(self) -> Iterator[WaypointNode]:
        return iter(self.nodes.values())

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self.nodes.clear()
        self._next_handle = 0
        self.pruned_count = 0

    def add_node(self, pos) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.nodes[handle] = WaypointNode(handle, Vector2(pos[0], pos[1]))
        return handle

    def add_edge(self, a: int, b: int, distance: Optional[float] = None) -> None:
        """Connect two nodes in both directions; weight defaults to their Euclidean distance."""
        na, nb = self.nodes[a], self.nodes[b]
        if distance is None:
            distance = na.pos.distance_to(nb.pos)
        na.edges.append(WaypointEdge(b, distance))
        nb.edges.append(WaypointEdge(a, distance))

    def build(self, bounds=None, gap=None, scale=None, offset=None) -> None:
        """
        Lay out a fresh grid of unconnected nodes.

        For x_i in [-x_max, x_max) and y_i in [-y_max, y_max) a node is placed at
        ((x_i * gap.x, y_i * gap.y) + offset) * scale, where x_max/y_max are how
        many gaps fit in half the bounds. World origin is the window centre.
        """
        p = self.params
        width, height = p.bounds if bounds is None else bounds
        gap = Vector2(p.gap if gap is None else gap)
        scale = Vector2(p.scale if scale is None else scale)
        offset = Vector2(p.offset if offset is None else offset)

        self.clear()
        x_max = int(width / gap.x / 2.0)
        y_max = int(height / gap.y / 2.0)
        for y_i in range(-y_max, y_max):
            for x_i in range(-x_max, x_max):
                pos = Vector2(x_i * gap.x, y_i * gap.y) + offset
                self.add_node(pos.elementwise() * scale)
        logger.info("Spawned %d waypoints (%dx%d grid)", len(self.nodes), 2 * x_max, 2 * y_max)

    def has_orphans(self) -> bool:
        return any(not node.edges for node in self.nodes.values())

    def construct_edges(self, visibility) -> bool:
        """
        Cast a ray between every unordered node pair and connect the clear ones.

        Afterwards every node without edges is removed. Existing edges are
        discarded first so repeated runs never duplicate them.

        Returns:
            True if construction completed, False if the visibility backend was
            unavailable (graph left without edges, caller retries later).
        """
        if self._constructing:
            logger.debug("Edge construction already in progress, skipping")
            return False

        self._constructing = True
        try:
            for node in self.nodes.values():
                node.edges.clear()

            nodes = list(self.nodes.values())
            try:
                for i, n1 in enumerate(nodes):
                    for n2 in nodes[i + 1:]:
                        if visibility.raycast_visible(n1.pos, n2.pos):
                            dist = n2.pos.distance_to(n1.pos)
                            n1.edges.append(WaypointEdge(n2.handle, dist))
                            n2.edges.append(WaypointEdge(n1.handle, dist))
            except VisibilityUnavailable:
                logger.warning("Visibility query unavailable, edge construction deferred")
                for node in nodes:
                    node.edges.clear()
                return False

            self._prune_orphans()
            return True
        finally:
            self._constructing = False

    def _prune_orphans(self) -> None:
        orphans = [h for h, node in self.nodes.items() if not node.edges]
        for handle in orphans:
            logger.info("Orphaned node removed at %s", tuple(self.nodes[handle].pos))
            del self.nodes[handle]
        self.pruned_count += len(orphans)

    def maybe_construct_edges(self, visibility, clock) -> bool:
        """Per-tick trigger: construct edges once the start delay has passed and work remains.

        Returns True only when a construction ran to completion on this call.
        """
        if clock.seconds_since_start() < self.params.construction_delay:
            return False
        if not self.has_orphans():
            return False
        return self.construct_edges(visibility)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def node(self, handle: int) -> WaypointNode:
        return self.nodes[handle]

    def position(self, handle: int) -> Vector2:
        return self.nodes[handle].pos

    def positions(self) -> Iterator[Tuple[int, Vector2]]:
        for handle, node in self.nodes.items():
            yield handle, node.pos

    def find_nearest(self, pos) -> Optional[int]:
        """Handle of the node closest to `pos`, or None when the graph is empty."""
        found = find_nearest(self.positions(), pos)
        return found[0] if found else None

    def edges(self) -> Iterator[Tuple[int, int, float]]:
        """Each undirected edge once, as (a, b, distance) with a < b."""
        for handle, node in self.nodes.items():
            for edge in node.edges:
                if handle < edge.neighbor:
                    yield handle, edge.neighbor, edge.distance

    def edge_count(self) -> int:
        return sum(1 for _ in self.edges())

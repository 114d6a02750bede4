import math
import logging

import pygame

from config import PINK, GREEN, RED, CYAN, WAYPOINT_DEBUG_SIZE
from arena.core.geometry import VisibilityUnavailable

logger = logging.getLogger(__name__)


def weight_color(weight, max_weight):
    """Blue intensity proportional to the node's weight in the last path request."""
    if weight is None:
        return PINK
    if not max_weight or math.isinf(max_weight):
        return (0, 0, 0)
    return (0, 0, int(255 * max(0.0, min(1.0, weight / max_weight))))


class DebugOverlays:
    """Waypoint graph, last weight table, enemy paths and sight lines (F3)."""

    def __init__(self, sim):
        self.sim = sim
        self.enabled = False

    def toggle(self) -> None:
        self.enabled = not self.enabled
        logger.info("Debug overlay %s", "on" if self.enabled else "off")

    def draw(self, surf, camera) -> None:
        if not self.enabled:
            return
        self.draw_graph(surf, camera)
        self.draw_paths(surf, camera)
        self.draw_sight_lines(surf, camera)

    def draw_graph(self, surf, camera) -> None:
        graph = self.sim.graph
        weights = self.sim.planner.last_weights
        max_weight = max(weights.values(), default=float('inf'))

        for a, b, _ in graph.edges():
            pygame.draw.line(surf, PINK, camera.to_screen(graph.position(a)), camera.to_screen(graph.position(b)), 1)

        for node in graph:
            weight = weights.get(node.handle)
            col = weight_color(weight, max_weight)
            if weight is None:
                size = 5
            else:
                size = max(3, int(col[2] / 255 * WAYPOINT_DEBUG_SIZE))
            r = pygame.Rect(0, 0, size, size)
            r.center = camera.to_screen(node.pos)
            pygame.draw.rect(surf, col, r)

    def draw_paths(self, surf, camera) -> None:
        for enemy in self.sim.enemies.values():
            follower = enemy.follower
            if follower is None or not follower.path:
                continue
            points = [camera.to_screen(step.position) for step in follower.path]
            if len(points) > 1:
                pygame.draw.lines(surf, CYAN, False, points, 2)
            if follower.next_waypoint is not None:
                pygame.draw.circle(surf, CYAN, camera.to_screen(follower.next_waypoint.position), 6, width=2)

    def draw_sight_lines(self, surf, camera) -> None:
        player = self.sim.player
        if player is None:
            return
        for enemy in self.sim.enemies.values():
            try:
                visible = self.sim.scene.geometry.raycast_visible(
                    enemy.pos, player.pos, exclude=(enemy.handle, player.handle))
            except VisibilityUnavailable:
                continue
            pygame.draw.line(surf, GREEN if visible else RED,
                             camera.to_screen(enemy.pos), camera.to_screen(player.pos), 1)

"""
Arena layout: static obstacles and the line-of-sight backend built from them.

Coordinates are world space with the origin at the window centre and y growing
downward, matching Camera.to_screen.
"""

import logging
from typing import Iterable, List, Optional

import pygame

from config import WIDTH, HEIGHT, WALL_COL
from ..core.geometry import SceneGeometry

logger = logging.getLogger(__name__)


def default_obstacles() -> List[pygame.Rect]:
    """Obstacles of the standard arena, as (left, top, width, height) in world space."""
    return [
        pygame.Rect(-25, 95, 50, 10),       # small bar below the centre
        pygame.Rect(-420, -260, 40, 260),   # west pillar
        pygame.Rect(380, 0, 40, 260),       # east pillar
        pygame.Rect(-160, -220, 320, 30),   # north wall
        pygame.Rect(-160, 230, 320, 30),    # south wall
    ]


class ArenaScene:
    def __init__(self, obstacles: Optional[Iterable[pygame.Rect]] = None):
        self.bounds = pygame.Rect(-WIDTH // 2, -HEIGHT // 2, WIDTH, HEIGHT)
        self.geometry = SceneGeometry()
        self.solids: List[pygame.Rect] = []
        self._obstacles = obstacles

    def load(self) -> None:
        """Populate the solids; until this runs every ray cast is refused."""
        obstacles = self._obstacles if self._obstacles is not None else default_obstacles()
        self.solids = [pygame.Rect(o) for o in obstacles]
        self.geometry.load(self.solids)
        logger.info("Arena loaded with %d obstacles", len(self.solids))

    def teardown(self) -> None:
        self.solids = []
        self.geometry.unload()

    def blocks_rect(self, rect: pygame.Rect) -> bool:
        return rect.collidelist(self.solids) != -1

    def draw(self, surf, camera) -> None:
        for s in self.solids:
            pygame.draw.rect(surf, WALL_COL, camera.to_screen_rect(s))

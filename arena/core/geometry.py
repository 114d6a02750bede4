"""
Scene geometry and line-of-sight queries.

Everything in the AI layer that needs to know whether two points can "see" each
other goes through `SceneGeometry.raycast_visible`. Static obstacles are plain
`pygame.Rect`s; dynamic bodies (player, boss, minions) are registered by handle
and looked up each cast so they block rays as they move.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

import pygame

logger = logging.getLogger(__name__)


class VisibilityUnavailable(RuntimeError):
    """Raised when a ray is cast before the scene has been loaded."""


class SceneGeometry:
    """Static solids plus dynamic bodies that block line of sight."""

    def __init__(self, solids: Optional[Iterable[pygame.Rect]] = None):
        self.solids: List[pygame.Rect] = [pygame.Rect(s) for s in (solids or [])]
        self._bodies: Dict[int, Callable[[], Optional[pygame.Rect]]] = {}
        self.loaded = solids is not None

    def load(self, solids: Iterable[pygame.Rect]) -> None:
        self.solids = [pygame.Rect(s) for s in solids]
        self.loaded = True
        logger.debug("Scene geometry loaded with %d solids", len(self.solids))

    def unload(self) -> None:
        self.solids = []
        self._bodies.clear()
        self.loaded = False

    def register_body(self, handle: int, rect_getter: Callable[[], Optional[pygame.Rect]]) -> None:
        """Register a dynamic body; `rect_getter` returns its current rect or None once gone."""
        self._bodies[handle] = rect_getter

    def unregister_body(self, handle: int) -> None:
        self._bodies.pop(handle, None)

    def _blockers(self, exclude):
        for s in self.solids:
            yield s
        for handle, getter in self._bodies.items():
            if handle in exclude:
                continue
            rect = getter()
            if rect is not None:
                yield rect

    def raycast_visible(self, a, b, exclude: Iterable[int] = (), include_bodies: bool = True) -> bool:
        """Return True if the segment a->b does not touch any blocker.

        a, b are (x, y) world coordinates. Bodies whose handle is in `exclude`
        are ignored (an agent never blocks its own view).
        """
        if not self.loaded:
            raise VisibilityUnavailable("scene geometry not loaded")
        x1, y1 = int(round(a[0])), int(round(a[1]))
        x2, y2 = int(round(b[0])), int(round(b[1]))
        blockers = self._blockers(set(exclude)) if include_bodies else self.solids
        for rect in blockers:
            if rect.clipline(x1, y1, x2, y2):
                return False
        return True

    def static_view(self) -> "StaticView":
        return StaticView(self)

    def point_blocked(self, p) -> bool:
        """True if p lies inside a static solid."""
        x, y = int(round(p[0])), int(round(p[1]))
        return any(s.collidepoint(x, y) for s in self.solids)


class StaticView:
    """Visibility against static solids only; moving bodies are ignored.

    Waypoint edges are cast through this so the graph does not depend on where
    the player and enemies happen to stand when it is built.
    """

    def __init__(self, geometry: SceneGeometry):
        self.geometry = geometry

    def raycast_visible(self, a, b) -> bool:
        return self.geometry.raycast_visible(a, b, include_bodies=False)

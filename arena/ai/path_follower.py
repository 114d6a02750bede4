import logging
from typing import Optional

from pygame.math import Vector2

from ..core.events import NextWaypointChanged
from .waypoints import find_nearest

logger = logging.getLogger(__name__)


class PathFollower:
    """
    Per-agent path storage and look-ahead selection.

    The stored path runs from the destination (index 0) back to where the agent
    started. Each update finds the path node nearest the agent and aims at the
    node one step closer to the destination. Reaching index 0 counts as arrival.
    """

    def __init__(self, agent: int, events=None):
        self.agent = agent
        self.events = events
        self.path = None
        self.next_waypoint = None
        self.arrived = False

    @property
    def has_path(self) -> bool:
        return bool(self.path)

    def set_path(self, path) -> None:
        """Replace the current path (the previous one is dropped)."""
        self.path = tuple(path) if path else None
        self.arrived = False

    def clear(self) -> None:
        self.path = None
        self._set_next(None)
        self.arrived = False

    def update(self, agent_pos) -> Optional[Vector2]:
        """Re-evaluate the look-ahead node for `agent_pos`; returns its position or None."""
        if not self.path:
            return None

        candidates = ((i, step.position) for i, step in enumerate(self.path))
        nearest_index, _ = find_nearest(candidates, agent_pos)

        if nearest_index == 0:
            # at the destination end, direct pursuit takes over
            if not self.arrived:
                logger.debug("Agent %s reached the end of its path", self.agent)
            self.arrived = True
            self._set_next(None)
            return None

        self.arrived = False
        self._set_next(self.path[nearest_index - 1])
        return self.next_waypoint.position

    def _set_next(self, step) -> None:
        previous = self.next_waypoint
        self.next_waypoint = step
        prev_handle = previous.handle if previous is not None else None
        new_handle = step.handle if step is not None else None
        if prev_handle != new_handle and self.events is not None:
            self.events.send(NextWaypointChanged(
                self.agent,
                new_handle,
                Vector2(step.position) if step is not None else None,
            ))

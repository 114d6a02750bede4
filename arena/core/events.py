"""
Event channel shared by the simulation subsystems.

Producers `send` events during a tick; the consumer for that event type
`drain`s them later in the same tick (see Simulation.step for the order).
Events nobody drains are dropped at the end of the tick by `clear`.
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Iterator, Optional, Type

from pygame.math import Vector2


@dataclass(frozen=True)
class CreatePathEvent:
    """Ask the path planner for a route from `source` to `dest` for `requester`."""
    source: Vector2
    dest: Vector2
    requester: int


@dataclass(frozen=True)
class NextWaypointChanged:
    agent: int
    handle: Optional[int]
    position: Optional[Vector2]


@dataclass(frozen=True)
class ShootEvent:
    """Directional attack intent; `direction` is normalised."""
    origin: Vector2
    direction: Vector2
    shooter: int


@dataclass(frozen=True)
class StateChanged:
    agent: int
    old: Any
    new: Any


class EventChannel:
    def __init__(self):
        self._queues: Dict[Type, Deque] = {}

    def send(self, event) -> None:
        self._queues.setdefault(type(event), deque()).append(event)

    def drain(self, event_type: Type) -> Iterator:
        """Yield and remove every pending event of `event_type` in send order."""
        queue = self._queues.get(event_type)
        while queue:
            yield queue.popleft()

    def pending(self, event_type: Type) -> int:
        return len(self._queues.get(event_type, ()))

    def clear(self) -> None:
        self._queues.clear()

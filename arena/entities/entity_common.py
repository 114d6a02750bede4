import itertools
from typing import Dict, Iterator, Optional

import pygame
from pygame.math import Vector2

# Handles are shared by entities and are never reused within a process
_handle_counter = itertools.count(1)


def next_handle() -> int:
    return next(_handle_counter)


class Entity:
    """Something with a position and a body in the arena."""

    kind = "entity"
    team = "neutral"

    def __init__(self, x, y, width, height):
        self.handle = next_handle()
        self.pos = Vector2(x, y)
        self.size = (width, height)
        self.vel = Vector2(0, 0)
        self.facing = 0.0
        self.alive = True

    @property
    def rect(self) -> pygame.Rect:
        r = pygame.Rect(0, 0, *self.size)
        r.center = (int(round(self.pos.x)), int(round(self.pos.y)))
        return r

    def __repr__(self):
        return f"{self.__class__.__name__}#{self.handle}"


class EntityRegistry:
    """
    Handle -> entity lookup used by the AI layer.

    The AI only ever holds handles; despawned entities simply stop resolving,
    which is how a stale target is detected.
    """

    def __init__(self):
        self._entities: Dict[int, Entity] = {}

    def __len__(self):
        return len(self._entities)

    def __contains__(self, handle):
        return handle in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def add(self, entity: Entity) -> Entity:
        self._entities[entity.handle] = entity
        return entity

    def remove(self, handle: int) -> Optional[Entity]:
        return self._entities.pop(handle, None)

    def get(self, handle: int) -> Optional[Entity]:
        return self._entities.get(handle)

    def position_of(self, handle) -> Optional[Vector2]:
        entity = self._entities.get(handle)
        if entity is None or not entity.alive:
            return None
        return Vector2(entity.pos)

    def rect_of(self, handle) -> Optional[pygame.Rect]:
        entity = self._entities.get(handle)
        if entity is None or not entity.alive:
            return None
        return entity.rect

    def of_kind(self, kind: str):
        return [e for e in self._entities.values() if e.kind == kind]

    def find_player(self) -> Optional[int]:
        for entity in self._entities.values():
            if entity.kind == "player" and entity.alive:
                return entity.handle
        return None

    def clear(self) -> None:
        self._entities.clear()

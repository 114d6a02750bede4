import math
import logging
from typing import List, Optional

import pygame
from pygame.math import Vector2

from config import (
    ENEMY_SPEED, BOSS_SPAWN, BOSS_SIZE, BOSS_MAX_HP,
    MINION_SIZE, MINION_MAX_HP, MINION_SPEED_FACTOR, MINIONS_PER_LEVEL,
    ATTACK_DISTANCE, VISIBILITY_DISTANCE, ROTATION_OFFSET, RED, ACCENT,
)
from .entity_common import Entity
from .components.combat_component import CombatComponent
from ..ai.enemy_behavior import AgentBehavior, AttackThreshold
from ..ai.path_follower import PathFollower

logger = logging.getLogger(__name__)


class Enemy(Entity):
    """Base class for anything that hunts the player through the waypoint graph."""

    kind = "enemy"
    team = "enemy"
    color = RED

    def __init__(self, x, y, width, height, max_hp, speed=ENEMY_SPEED):
        super().__init__(x, y, width, height)
        self.speed = speed
        self.combat = CombatComponent(self, max_hp)
        self.follower: Optional[PathFollower] = None
        self.behavior: Optional[AgentBehavior] = None
        self.shot_cooldown = 0.0

    def attach_ai(self, visibility, registry, events,
                  attack_distance=ATTACK_DISTANCE,
                  visibility_distance=VISIBILITY_DISTANCE,
                  rotation_offset=ROTATION_OFFSET) -> None:
        """Give this enemy its own path follower and state machine."""
        self.follower = PathFollower(self.handle, events)
        self.behavior = AgentBehavior(
            self.handle,
            self.follower,
            visibility,
            registry.position_of,
            registry.find_player,
            events,
            threshold=AttackThreshold(attack_distance),
            visibility_distance=visibility_distance,
            rotation_offset=rotation_offset,
        )
        logger.debug("%s AI attached (attack %.0f, sight %.0f)", self, attack_distance, visibility_distance)

    @property
    def state(self):
        return self.behavior.state if self.behavior else None

    def tick(self, dt: float) -> None:
        self.combat.tick(dt)
        if self.shot_cooldown > 0:
            self.shot_cooldown = max(0.0, self.shot_cooldown - dt)

    def outline(self) -> List[Vector2]:
        """Body corners rotated by the current facing."""
        w, h = self.size
        corners = [Vector2(-w / 2, -h / 2), Vector2(w / 2, -h / 2),
                   Vector2(w / 2, h / 2), Vector2(-w / 2, h / 2)]
        # facing already includes the sprite rotation offset
        angle = math.degrees(self.facing - ROTATION_OFFSET)
        return [self.pos + c.rotate(angle) for c in corners]

    def draw(self, surf, camera):
        points = [camera.to_screen(p) for p in self.outline()]
        pygame.draw.polygon(surf, self.color, points)
        nose = self.pos + Vector2(max(self.size) / 2, 0).rotate(math.degrees(self.facing - ROTATION_OFFSET))
        pygame.draw.line(surf, ACCENT, camera.to_screen(self.pos), camera.to_screen(nose), 2)


class Boss(Enemy):
    kind = "boss"

    def __init__(self, x=BOSS_SPAWN[0], y=BOSS_SPAWN[1], level=1):
        super().__init__(x, y, *BOSS_SIZE, max_hp=BOSS_MAX_HP * level, speed=ENEMY_SPEED)
        self.level = level


class Minion(Enemy):
    kind = "minion"
    color = (230, 120, 90)

    def __init__(self, x, y):
        super().__init__(x, y, *MINION_SIZE, max_hp=MINION_MAX_HP,
                         speed=ENEMY_SPEED * MINION_SPEED_FACTOR)


def minion_spawn_points(center, count, radius=None) -> List[Vector2]:
    """Evenly spaced points on a ring around `center`."""
    if count <= 0:
        return []
    radius = radius if radius is not None else max(BOSS_SIZE)
    center = Vector2(center)
    step = 360.0 / count
    return [center + Vector2(radius, 0).rotate(i * step) for i in range(count)]


def minions_for_level(level: int) -> int:
    return max(0, level - 1) * MINIONS_PER_LEVEL

"""
Enemy Movement System - applies steering intents to enemy bodies
Behaviors decide *where* to go; the strategies here decide *how* the body gets there.
"""

from abc import ABC, abstractmethod
from typing import Dict

from pygame.math import Vector2

from config import WIDTH, HEIGHT
from .enemy_behavior import SteeringIntent, SteeringMode


class MovementStrategy(ABC):
    """Base class for enemy movement strategies"""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def move(self, enemy, intent: SteeringIntent, dt: float) -> None:
        """Execute movement strategy"""
        pass


def clamp_enemy_to_arena(enemy) -> bool:
    """Keep the enemy centre inside the arena; returns True if a correction was applied."""
    half_w, half_h = WIDTH / 2, HEIGHT / 2
    x = max(-half_w, min(half_w, enemy.pos.x))
    y = max(-half_h, min(half_h, enemy.pos.y))
    corrected = (x, y) != (enemy.pos.x, enemy.pos.y)
    enemy.pos.update(x, y)
    return corrected


class SteerTowardStrategy(MovementStrategy):
    """Constant-speed travel toward the intent point, never overshooting it"""

    def __init__(self):
        super().__init__("steer_toward")

    def move(self, enemy, intent: SteeringIntent, dt: float) -> None:
        if intent.move_toward is None:
            enemy.vel = Vector2(0, 0)
            return
        to_point = Vector2(intent.move_toward) - enemy.pos
        remaining = to_point.length()
        step = enemy.speed * dt
        if remaining == 0:
            enemy.vel = Vector2(0, 0)
            return
        if step >= remaining:
            enemy.vel = to_point / dt if dt > 0 else Vector2(0, 0)
            enemy.pos = Vector2(intent.move_toward)
        else:
            enemy.vel = to_point.normalize() * enemy.speed
            enemy.pos += enemy.vel * dt
        clamp_enemy_to_arena(enemy)


class HoldPositionStrategy(MovementStrategy):
    """Stand still; used while idle and while attacking"""

    def __init__(self):
        super().__init__("hold")

    def move(self, enemy, intent: SteeringIntent, dt: float) -> None:
        enemy.vel = Vector2(0, 0)


class EnemyMovement:
    """Picks the strategy for an intent and applies it, plus orientation."""

    def __init__(self):
        steer = SteerTowardStrategy()
        hold = HoldPositionStrategy()
        self.strategies: Dict[SteeringMode, MovementStrategy] = {
            SteeringMode.DIRECT: steer,
            SteeringMode.WAYPOINT: steer,
            SteeringMode.HOLD: hold,
            SteeringMode.ATTACK: hold,
        }

    def apply(self, enemy, intent: SteeringIntent, dt: float) -> None:
        if intent.facing is not None:
            enemy.facing = intent.facing
        self.strategies[intent.mode].move(enemy, intent, dt)

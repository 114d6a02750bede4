"""
Projectiles: player shots aimed at the mouse and enemy shots from ShootEvents.

Bullets travel in a straight line at a constant speed and disappear when their
lifetime runs out, when they hit a solid, or when they hit an entity of the
other team.
"""

import logging
from typing import List

import pygame
from pygame.math import Vector2

from config import (
    BULLET_SPEED, BULLET_SIZE, BULLET_LIFETIME, BULLET_DAMAGE,
    ENEMY_SHOT_COOLDOWN, WHITE, ACCENT,
)
from ..core.events import ShootEvent
from ..core.utils import direction_to

logger = logging.getLogger(__name__)


class Bullet:
    def __init__(self, origin, direction, owner: int, team: str,
                 speed=BULLET_SPEED, damage=BULLET_DAMAGE, lifetime=BULLET_LIFETIME):
        self.pos = Vector2(origin)
        self.direction = Vector2(direction)
        self.owner = owner
        self.team = team
        self.speed = speed
        self.damage = damage
        self.lifetime = lifetime
        self.alive = True

    @property
    def rect(self) -> pygame.Rect:
        r = pygame.Rect(0, 0, BULLET_SIZE, BULLET_SIZE)
        r.center = (int(round(self.pos.x)), int(round(self.pos.y)))
        return r

    def tick(self, dt: float) -> None:
        self.pos += self.direction * self.speed * dt
        self.lifetime -= dt
        if self.lifetime <= 0:
            self.alive = False

    def draw(self, surf, camera):
        col = WHITE if self.team == "player" else ACCENT
        pygame.draw.rect(surf, col, camera.to_screen_rect(self.rect))


class ShootingSystem:
    def __init__(self, registry, scene, shot_cooldown=ENEMY_SHOT_COOLDOWN):
        self.registry = registry
        self.scene = scene
        self.shot_cooldown = shot_cooldown
        self.bullets: List[Bullet] = []

    def player_shoot(self, player, aim_point) -> Bullet:
        """Fire from the player toward a world-space aim point."""
        direction = direction_to(player.pos, aim_point)
        if direction.length_squared() == 0:
            direction = Vector2(0, -1)
        bullet = Bullet(player.pos, direction, player.handle, player.team)
        self.bullets.append(bullet)
        return bullet

    def consume_shoot_events(self, events) -> int:
        """Turn enemy attack intents into bullets, honouring each shooter's cooldown."""
        fired = 0
        for ev in events.drain(ShootEvent):
            shooter = self.registry.get(ev.shooter)
            if shooter is None or not shooter.alive:
                continue
            if getattr(shooter, 'shot_cooldown', 0) > 0:
                continue
            if ev.direction.length_squared() == 0:
                continue
            self.bullets.append(Bullet(ev.origin, ev.direction, shooter.handle, shooter.team))
            shooter.shot_cooldown = self.shot_cooldown
            fired += 1
            logger.debug("%s fired toward %s", shooter, tuple(ev.direction))
        return fired

    def update(self, dt: float) -> None:
        for bullet in self.bullets:
            bullet.tick(dt)
            if not bullet.alive:
                continue
            rect = bullet.rect
            if self.scene is not None and self.scene.blocks_rect(rect):
                bullet.alive = False
                continue
            for entity in self.registry:
                if not entity.alive or entity.team in (bullet.team, "neutral"):
                    continue
                if rect.colliderect(entity.rect):
                    entity.combat.take_damage(bullet.damage, source=bullet.owner)
                    bullet.alive = False
                    break
        self.bullets = [b for b in self.bullets if b.alive]

    def clear(self) -> None:
        self.bullets.clear()

    def draw(self, surf, camera):
        for bullet in self.bullets:
            bullet.draw(surf, camera)

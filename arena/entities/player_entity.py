import pygame
from pygame.math import Vector2

from config import PLAYER_SPEED, PLAYER_SIZE, PLAYER_MAX_HP, WIDTH, HEIGHT, BLUE
from .entity_common import Entity
from .components.combat_component import CombatComponent


class Player(Entity):
    """The player's ship. Speed is in pixels / second."""

    kind = "player"
    team = "player"

    def __init__(self, x=0.0, y=0.0, speed=PLAYER_SPEED):
        super().__init__(x, y, *PLAYER_SIZE)
        self.speed = speed
        self.combat = CombatComponent(self, PLAYER_MAX_HP)

    def move(self, axis: Vector2, dt: float, scene=None) -> None:
        """Move along the (already normalised) input axis, refusing to enter solids."""
        self.vel = Vector2(axis) * self.speed
        step = self.vel * dt
        if step.length_squared() == 0:
            return

        # resolve each axis separately so the player can slide along walls
        for delta in (Vector2(step.x, 0), Vector2(0, step.y)):
            candidate = self.pos + delta
            if scene is not None and scene.blocks_rect(self._rect_at(candidate)):
                continue
            self.pos = candidate

        self.pos.x = max(-WIDTH / 2, min(WIDTH / 2, self.pos.x))
        self.pos.y = max(-HEIGHT / 2, min(HEIGHT / 2, self.pos.y))

    def _rect_at(self, pos) -> pygame.Rect:
        r = pygame.Rect(0, 0, *self.size)
        r.center = (int(round(pos.x)), int(round(pos.y)))
        return r

    def tick(self, dt: float) -> None:
        self.combat.tick(dt)

    def draw(self, surf, camera):
        pygame.draw.rect(surf, BLUE, camera.to_screen_rect(self.rect))

"""
Combat Component - health and damage shared by the player and enemies
"""

import logging

logger = logging.getLogger(__name__)


class CombatComponent:
    """Tracks hit points for an entity and flips `entity.alive` on death."""

    def __init__(self, entity, max_hp: float):
        self.entity = entity
        self.max_hp = max_hp
        self.hp = max_hp
        self.invincible_time = 0.0
        self.default_iframes = 0.1  # seconds of invulnerability after a hit

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def tick(self, dt: float) -> None:
        if self.invincible_time > 0:
            self.invincible_time = max(0.0, self.invincible_time - dt)

    def take_damage(self, amount: float, source=None) -> bool:
        """Apply damage. Returns False when the hit was ignored (i-frames or already dead)."""
        if self.invincible_time > 0 or not self.alive:
            return False

        self.hp = max(0.0, self.hp - amount)
        self.invincible_time = self.default_iframes

        if self.hp <= 0:
            self.entity.alive = False
            logger.info("%s killed by %s", self.entity, source)
        return True

    def heal(self, amount: float) -> None:
        self.hp = min(self.max_hp, self.hp + amount)

    def fraction(self) -> float:
        return self.hp / self.max_hp if self.max_hp else 0.0

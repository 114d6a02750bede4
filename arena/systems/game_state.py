"""
Round flow and scoring.

Score is how many whole seconds the player has survived, multiplied by the
current level; the level rises every LEVEL_UP_SECONDS. When the player dies the
round stops and a new one starts after RESTART_DELAY seconds.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from config import LEVEL_UP_SECONDS, RESTART_DELAY

logger = logging.getLogger(__name__)


class GameState(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class GameGlobals:
    score: int = 0
    level: int = 1
    time_started: float = 0.0
    time_stopped: float = 0.0
    time_until_restart: float = RESTART_DELAY
    best_score: int = 0


class GameFlow:
    def __init__(self, clock, level_up_seconds: float = LEVEL_UP_SECONDS,
                 restart_delay: float = RESTART_DELAY):
        self.clock = clock
        self.level_up_seconds = level_up_seconds
        self.state = GameState.PLAYING
        self.globals = GameGlobals(time_until_restart=restart_delay)

    def reset(self) -> None:
        """Entering PLAYING: restart the round clock, level and score."""
        self.clock.mark_started()
        self.globals.time_started = self.clock.time_since_startup
        self.globals.level = 1
        self.globals.score = 0
        self.state = GameState.PLAYING

    def update_score(self) -> bool:
        """Recompute level and score. Returns True when the level went up."""
        elapsed = self.clock.time_since_startup - self.globals.time_started
        level = 1 + int(elapsed // self.level_up_seconds) if self.level_up_seconds > 0 else 1
        levelled = level > self.globals.level
        if levelled:
            logger.info("Level up: %d -> %d", self.globals.level, level)
        self.globals.level = max(level, self.globals.level)
        self.globals.score = int(elapsed) * self.globals.level
        return levelled

    def check_player_death(self, player) -> bool:
        """Switch to GAME_OVER when the player is gone or out of hp."""
        if self.state != GameState.PLAYING:
            return False
        if player is not None and player.alive and player.combat.alive:
            return False
        self.state = GameState.GAME_OVER
        self.globals.time_stopped = self.clock.time_since_startup
        self.globals.best_score = max(self.globals.best_score, self.globals.score)
        logger.info("Game over, score %d (best %d)", self.globals.score, self.globals.best_score)
        return True

    def restart_due(self) -> bool:
        if self.state != GameState.GAME_OVER:
            return False
        return self.clock.time_since_startup > self.globals.time_stopped + self.globals.time_until_restart

"""
HUD drawing for the arena: player health, score/level and the game-over banner.

Guidelines:
- Accept the Game instance and read-only access its attributes.
- Keep draw-only logic here.
"""
import logging
import pygame

from config import WIDTH, HEIGHT, GREEN, RED, WHITE, ACCENT
from arena.core.utils import draw_text
from arena.systems.game_state import GameState

logger = logging.getLogger(__name__)


def draw_health_bar(screen, rect: pygame.Rect, fraction: float, col=GREEN) -> None:
    fraction = max(0.0, min(1.0, fraction))
    pygame.draw.rect(screen, (60, 60, 60), rect, border_radius=3)
    filled = pygame.Rect(rect.x, rect.y, int(rect.w * fraction), rect.h)
    pygame.draw.rect(screen, col, filled, border_radius=3)


def draw_hud(game, screen: pygame.Surface) -> None:
    """Draw HUD elements using `game`'s state."""
    sim = game.sim
    x, y = 16, 16

    player = sim.player
    if player is not None:
        draw_health_bar(screen, pygame.Rect(x, y, 200, 12), player.combat.fraction())
        y += 20

    if sim.boss is not None:
        draw_health_bar(screen, pygame.Rect(WIDTH // 2 - 150, 16, 300, 12),
                        sim.boss.combat.fraction(), col=RED)

    g = sim.flow.globals
    draw_text(screen, f"Score {g.score}   Level {g.level}   Best {g.best_score}", (x, y), WHITE, size=18)
    y += 22
    draw_text(screen, f"Enemies {len(sim.enemies)}", (x, y), WHITE, size=14)

    if sim.flow.state == GameState.GAME_OVER:
        remaining = max(0.0, g.time_stopped + g.time_until_restart - sim.clock.time_since_startup)
        draw_text(screen, "GAME OVER", (WIDTH // 2 - 90, HEIGHT // 2 - 40), ACCENT, size=36, bold=True)
        draw_text(screen, f"Score {g.score} - restarting in {remaining:.0f}s",
                  (WIDTH // 2 - 150, HEIGHT // 2 + 10), WHITE, size=18)

import sys

import pygame
import logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Per-request planner logs are noisy at 60 ticks per enemy per second
logging.getLogger('arena.ai.pathfinding').setLevel(logging.WARNING)

from config import WIDTH, HEIGHT, FPS, BG
from arena.core.input import InputHandler
from arena.debug.overlays import DebugOverlays
from arena.level.config_loader import load_arena_config
from arena.systems.camera import Camera
from arena.systems.game_state import GameState
from arena.systems.simulation import Simulation
from arena.ui.hud import draw_hud


class Game:
    def __init__(self):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Boss Arena")
        self.clock = pygame.time.Clock()
        self.camera = Camera()
        self.input = InputHandler()

        runtime = load_arena_config()
        self.sim = Simulation(runtime)
        self.debug = DebugOverlays(self.sim)
        self.debug.enabled = runtime.debug_overlay
        self.sim.start_round()

    def draw(self):
        self.screen.fill(BG)
        sim = self.sim
        sim.scene.draw(self.screen, self.camera)

        try:
            self.debug.draw(self.screen, self.camera)
        except Exception:
            logger.exception("Debug overlay draw failed")

        if sim.flow.state == GameState.PLAYING:
            for enemy in sim.enemies.values():
                enemy.draw(self.screen, self.camera)
            if sim.player is not None and sim.player.alive:
                sim.player.draw(self.screen, self.camera)
            sim.shooting.draw(self.screen, self.camera)

        try:
            draw_hud(self, self.screen)
        except Exception:
            logger.exception('HUD draw failed')

        pygame.display.flip()

    def run(self):
        while True:
            dt = self.clock.tick(FPS) / 1000.0
            frame = self.input.process_events(self)
            if frame.quit:
                break
            if frame.toggle_debug:
                self.debug.toggle()

            self.sim.step(dt, frame.move_axis, frame.aim_point, frame.fire)
            self.draw()

        pygame.quit()


def main():
    Game().run()
    sys.exit()


if __name__ == "__main__":
    main()

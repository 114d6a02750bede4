"""
Input handling for the arena.

`InputHandler.process_events(game)` drains the pygame event queue and turns
held keys / mouse state into a `FrameInput` the simulation understands.

Design:
- Use absolute imports.
- Raise no exceptions out of event handling; log errors.
"""
from dataclasses import dataclass, field
import logging

import pygame
from pygame.math import Vector2

from arena.core.utils import movement_axis

logger = logging.getLogger(__name__)


@dataclass
class FrameInput:
    move_axis: Vector2 = field(default_factory=lambda: Vector2(0, 0))
    aim_point: Vector2 = field(default_factory=lambda: Vector2(0, 0))
    fire: bool = False
    quit: bool = False
    toggle_debug: bool = False


def axis_from_keys(keys) -> Vector2:
    """WASD or arrow keys -> normalised movement axis."""
    left = keys[pygame.K_a] or keys[pygame.K_LEFT]
    right = keys[pygame.K_d] or keys[pygame.K_RIGHT]
    up = keys[pygame.K_w] or keys[pygame.K_UP]
    down = keys[pygame.K_s] or keys[pygame.K_DOWN]
    return movement_axis(left, right, up, down)


class InputHandler:
    """Centralized input/event processing.

    Usage:
        handler = InputHandler()
        frame = handler.process_events(game)
    """

    def process_events(self, game) -> FrameInput:
        frame = FrameInput()
        try:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    frame.quit = True
                elif ev.type == pygame.KEYDOWN:
                    if ev.key == pygame.K_ESCAPE:
                        frame.quit = True
                    elif ev.key == pygame.K_F3:
                        frame.toggle_debug = True
                elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                    frame.fire = True

            frame.move_axis = axis_from_keys(pygame.key.get_pressed())
            frame.aim_point = Vector2(game.camera.to_world(pygame.mouse.get_pos()))
        except Exception:
            logger.exception("Input processing failed")
        return frame

import math

import pygame
from pygame.math import Vector2

from config import WHITE


def to_vec(p) -> Vector2:
    """Coerce an (x, y) pair or Vector2 into a fresh Vector2."""
    return Vector2(p[0], p[1])


def direction_to(a, b) -> Vector2:
    """Unit vector from a to b, or a zero vector when the points coincide."""
    d = to_vec(b) - to_vec(a)
    if d.length_squared() == 0:
        return Vector2(0, 0)
    return d.normalize()


def facing_angle(direction, rotation_offset=0.0) -> float:
    """Angle in radians of `direction`, shifted so a sprite's forward axis lines up."""
    return math.atan2(direction[1], direction[0]) + rotation_offset


def movement_axis(left, right, up, down) -> Vector2:
    """Normalised movement vector from four held directions (screen y grows downward)."""
    axis = Vector2(int(right) - int(left), int(down) - int(up))
    if axis.length_squared() > 0:
        axis = axis.normalize()
    return axis


# Lazy font getter to avoid init-order issues
_fonts = {}

def get_font(size=18, bold=False):
    key = (size, bold)
    if key not in _fonts:
        _fonts[key] = pygame.font.SysFont("consolas", size, bold=bold)
    return _fonts[key]

def draw_text(surf, text, pos, col=WHITE, size=18, bold=False):
    font = get_font(size=size, bold=bold)
    surf.blit(font.render(text, True, col), pos)


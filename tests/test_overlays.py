import math

import pygame

from config import WIDTH, HEIGHT, PINK
from arena.debug.overlays import DebugOverlays, weight_color
from arena.systems.camera import Camera
from arena.systems.simulation import Simulation


def test_weight_color_scales_blue():
    assert weight_color(None, 100) == PINK
    assert weight_color(0.0, 100) == (0, 0, 0)
    assert weight_color(50.0, 100) == (0, 0, 127)
    assert weight_color(100.0, 100) == (0, 0, 255)


def test_weight_color_without_usable_max():
    assert weight_color(10.0, math.inf) == (0, 0, 0)
    assert weight_color(10.0, 0) == (0, 0, 0)


def test_camera_centres_world_origin():
    camera = Camera()
    assert camera.to_screen((0, 0)) == (WIDTH // 2, HEIGHT // 2)
    assert camera.to_world(camera.to_screen((120, -40))) == (120, -40)


def test_overlay_toggle_and_draw_headless():
    sim = Simulation()
    sim.start_round()
    for _ in range(7):
        sim.step(0.5)

    overlays = DebugOverlays(sim)
    surf = pygame.Surface((WIDTH, HEIGHT))
    camera = Camera()

    overlays.draw(surf, camera)  # disabled: nothing drawn
    assert tuple(surf.get_at((WIDTH // 2, HEIGHT // 2)))[:3] == (0, 0, 0)

    overlays.toggle()
    assert overlays.enabled
    overlays.draw(surf, camera)
    assert sim.planner.last_weights


def test_overlay_before_scene_loads():
    sim = Simulation()
    overlays = DebugOverlays(sim)
    overlays.enabled = True
    overlays.draw(pygame.Surface((64, 64)), Camera())

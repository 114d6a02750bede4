import math

import pytest
import pygame
from pygame.math import Vector2

from arena.ai.enemy_behavior import SteeringIntent, SteeringMode
from arena.ai.enemy_movement import EnemyMovement
from arena.core.input import axis_from_keys
from arena.core.utils import direction_to, facing_angle, movement_axis
from arena.entities.entity_common import EntityRegistry
from arena.entities.enemy_entities import Boss, Minion, minion_spawn_points, minions_for_level
from arena.entities.player_entity import Player


# --- Combat ---

def test_damage_and_invulnerability_window():
    player = Player()
    combat = player.combat

    assert combat.take_damage(10)
    assert combat.hp == combat.max_hp - 10
    # Still inside the i-frames
    assert not combat.take_damage(10)
    combat.tick(0.2)
    assert combat.take_damage(10)
    assert combat.hp == combat.max_hp - 20


def test_lethal_damage_marks_entity_dead():
    minion = Minion(0, 0)
    minion.combat.take_damage(1000)
    assert minion.combat.hp == 0
    assert not minion.alive
    assert minion.combat.fraction() == 0.0


def test_heal_is_capped():
    player = Player()
    player.combat.take_damage(30)
    player.combat.heal(100)
    assert player.combat.hp == player.combat.max_hp


def test_boss_health_scales_with_level():
    assert Boss(level=3).combat.max_hp == Boss(level=1).combat.max_hp * 3


# --- Registry ---

def test_registry_lookups():
    registry = EntityRegistry()
    player = registry.add(Player(5, 6))
    minion = registry.add(Minion(0, 0))

    assert registry.find_player() == player.handle
    assert registry.position_of(player.handle) == Vector2(5, 6)
    assert registry.of_kind("minion") == [minion]
    assert player.handle != minion.handle

    player.alive = False
    assert registry.find_player() is None
    assert registry.position_of(player.handle) is None
    assert registry.rect_of(player.handle) is None

    registry.remove(minion.handle)
    assert minion.handle not in registry
    assert registry.position_of(minion.handle) is None


def test_position_is_a_copy():
    registry = EntityRegistry()
    player = registry.add(Player(5, 6))
    pos = registry.position_of(player.handle)
    pos.x = 100
    assert player.pos.x == 5


# --- Minions ---

def test_minion_counts_per_level():
    assert minions_for_level(1) == 0
    assert minions_for_level(2) == 2
    assert minions_for_level(4) == 6


def test_minion_spawn_ring():
    points = minion_spawn_points((0, 0), 4, radius=50)
    assert len(points) == 4
    for p in points:
        assert p.length() == pytest.approx(50)
    assert points[0] == Vector2(50, 0)
    assert minion_spawn_points((0, 0), 0) == []


# --- Movement ---

def test_steering_does_not_overshoot():
    boss = Boss(0, 0)
    movement = EnemyMovement()
    movement.apply(boss, SteeringIntent(SteeringMode.WAYPOINT, Vector2(10, 0), 1.0), 1.0)
    assert boss.pos == Vector2(10, 0)
    assert boss.facing == 1.0


def test_steering_moves_at_speed():
    boss = Boss(0, 0)
    EnemyMovement().apply(boss, SteeringIntent(SteeringMode.DIRECT, Vector2(0, 1000)), 0.1)
    assert boss.pos.y == pytest.approx(boss.speed * 0.1)
    assert boss.pos.x == pytest.approx(0)


def test_hold_and_attack_do_not_move():
    boss = Boss(0, 0)
    movement = EnemyMovement()
    movement.apply(boss, SteeringIntent(SteeringMode.HOLD), 1.0)
    movement.apply(boss, SteeringIntent(SteeringMode.ATTACK, None, 2.0), 1.0)
    assert boss.pos == Vector2(0, 0)
    assert boss.facing == 2.0


def test_enemy_clamped_to_arena():
    boss = Boss(600, 0)
    EnemyMovement().apply(boss, SteeringIntent(SteeringMode.DIRECT, Vector2(5000, 0)), 1.0)
    assert boss.pos.x == 640


def test_shot_cooldown_counts_down():
    minion = Minion(0, 0)
    minion.shot_cooldown = 0.5
    minion.tick(0.2)
    assert minion.shot_cooldown == pytest.approx(0.3)
    minion.tick(1.0)
    assert minion.shot_cooldown == 0.0


# --- Helpers ---

def test_direction_and_facing():
    assert direction_to((0, 0), (0, 0)) == Vector2(0, 0)
    assert direction_to((0, 0), (0, 5)) == Vector2(0, 1)
    assert facing_angle(Vector2(0, 1), -math.pi / 2) == pytest.approx(0.0)


def test_movement_axis_is_normalised():
    axis = movement_axis(False, True, False, True)
    assert axis.length() == pytest.approx(1.0)
    assert axis.x > 0 and axis.y > 0
    assert movement_axis(True, True, False, False) == Vector2(0, 0)


def test_axis_from_keys():
    keys = {k: False for k in (pygame.K_a, pygame.K_d, pygame.K_w, pygame.K_s,
                               pygame.K_LEFT, pygame.K_RIGHT, pygame.K_UP, pygame.K_DOWN)}
    keys[pygame.K_w] = True
    assert axis_from_keys(keys) == Vector2(0, -1)

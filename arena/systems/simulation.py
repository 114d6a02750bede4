"""
Headless simulation of one arena round.

`Simulation.step` runs the fixed per-tick order:
    1. player input and player shots
    2. edge construction check (waypoint graph, once the scene has settled)
    3. enemy state machines (emit path requests / shots / state changes)
    4. path planning for every pending request
    5. path followers (look-ahead waypoints)
    6. enemy movement
    7. projectiles and damage
    8. despawns, boss/minion spawning, score and game-over checks

Enemy movement uses the look-ahead chosen on the previous tick, since
followers run after the state machines.
"""

import logging
from typing import Dict, List, Optional

from pygame.math import Vector2

from config import PLAYER_SPAWN, BOSS_SPAWN, ENEMY_SPEED
from ..ai.enemy_movement import EnemyMovement
from ..ai.pathfinding import PathPlanner
from ..ai.waypoints import WaypointGraph, WaypointParams
from ..core.clock import GameClock
from ..core.events import EventChannel, NextWaypointChanged, StateChanged
from ..entities.entity_common import EntityRegistry
from ..entities.enemy_entities import Boss, Enemy, Minion, minion_spawn_points, minions_for_level
from ..entities.player_entity import Player
from ..level.config_loader import default_runtime_config
from ..level.scene import ArenaScene
from .game_state import GameFlow, GameState
from .shooting import ShootingSystem

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(self, runtime=None, scene: Optional[ArenaScene] = None, clock: Optional[GameClock] = None):
        self.runtime = runtime or default_runtime_config()
        self.clock = clock or GameClock()
        self.events = EventChannel()
        self.registry = EntityRegistry()
        self.scene = scene or ArenaScene()
        self.graph = WaypointGraph(WaypointParams(
            gap=self.runtime.waypoint_gap,
            scale=self.runtime.waypoint_scale,
            offset=self.runtime.waypoint_offset,
            construction_delay=self.runtime.edge_construction_delay,
        ))
        self.planner = PathPlanner(self.graph)
        self.movement = EnemyMovement()
        self.shooting = ShootingSystem(self.registry, self.scene)
        self.flow = GameFlow(self.clock)

        self.player: Optional[Player] = None
        self.boss: Optional[Boss] = None
        self.enemies: Dict[int, Enemy] = {}
        self.state_changes: List[StateChanged] = []
        self.waypoint_changes: List[NextWaypointChanged] = []
        self._spawned_minions = 0

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def teardown(self) -> None:
        """Remove every entity, bullet and waypoint."""
        for handle in list(self.enemies):
            self.despawn(handle)
        self.registry.clear()
        self.shooting.clear()
        self.events.clear()
        self.scene.teardown()
        self.graph.clear()
        self.player = None
        self.boss = None
        self._spawned_minions = 0

    def start_round(self) -> None:
        self.teardown()
        self.flow.reset()
        self.scene.load()
        self.graph.build()

        self.player = self.registry.add(Player(*PLAYER_SPAWN))
        self.scene.geometry.register_body(self.player.handle, lambda h=self.player.handle: self.registry.rect_of(h))
        self.boss = self.spawn_enemy(Boss(*BOSS_SPAWN, level=self.flow.globals.level))
        logger.info("Round started")

    def spawn_enemy(self, enemy: Enemy) -> Enemy:
        enemy.speed = enemy.speed * (self.runtime.enemy_speed / ENEMY_SPEED)
        self.registry.add(enemy)
        enemy.attach_ai(
            self.scene.geometry, self.registry, self.events,
            attack_distance=self.runtime.attack_distance,
            visibility_distance=self.runtime.visibility_distance,
            rotation_offset=self.runtime.rotation_offset,
        )
        self.enemies[enemy.handle] = enemy
        self.scene.geometry.register_body(enemy.handle, lambda h=enemy.handle: self.registry.rect_of(h))
        return enemy

    def despawn(self, handle: int) -> None:
        enemy = self.enemies.pop(handle, None)
        if enemy is not None and enemy.follower is not None:
            enemy.follower.clear()
        self.registry.remove(handle)
        self.scene.geometry.unregister_body(handle)
        if self.boss is not None and self.boss.handle == handle:
            self.boss = None

    @property
    def followers(self):
        return {h: e.follower for h, e in self.enemies.items()}

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def step(self, dt: float, move_axis=None, aim_point=None, fire: bool = False) -> None:
        self.clock.tick(dt)
        self.state_changes = []
        self.waypoint_changes = []

        if self.flow.state == GameState.GAME_OVER:
            if self.flow.restart_due():
                self.start_round()
            return

        if self.player is not None and self.player.alive:
            if move_axis is not None:
                self.player.move(Vector2(move_axis), dt, self.scene)
            if fire and aim_point is not None:
                self.shooting.player_shoot(self.player, aim_point)

        self.graph.maybe_construct_edges(self.scene.geometry.static_view(), self.clock)

        intents = {}
        for handle, enemy in self.enemies.items():
            intents[handle] = enemy.behavior.tick(enemy.pos)

        self.planner.process_requests(self.events, self.followers)

        for enemy in self.enemies.values():
            enemy.follower.update(enemy.pos)

        for handle, intent in intents.items():
            self.movement.apply(self.enemies[handle], intent, dt)

        self.shooting.consume_shoot_events(self.events)
        self.shooting.update(dt)

        for entity in self.registry:
            entity.tick(dt)

        self._handle_deaths()
        if self.flow.update_score():
            self._spawn_minions()
        self.flow.check_player_death(self.player)

        self.state_changes = list(self.events.drain(StateChanged))
        self.waypoint_changes = list(self.events.drain(NextWaypointChanged))
        self.events.clear()

    def _handle_deaths(self) -> None:
        for handle, enemy in list(self.enemies.items()):
            if not enemy.alive:
                logger.info("%s destroyed", enemy)
                was_boss = enemy is self.boss
                self.despawn(handle)
                if was_boss:
                    self.boss = self.spawn_enemy(Boss(*BOSS_SPAWN, level=self.flow.globals.level))

    def _spawn_minions(self) -> None:
        wanted = minions_for_level(self.flow.globals.level) - self._spawned_minions
        if wanted <= 0:
            return
        center = self.boss.pos if self.boss is not None else Vector2(BOSS_SPAWN)
        for point in minion_spawn_points(center, wanted):
            if self.scene.geometry.point_blocked(point):
                continue
            self.spawn_enemy(Minion(point.x, point.y))
        self._spawned_minions += wanted
        logger.info("Spawned %d minions for level %d", wanted, self.flow.globals.level)

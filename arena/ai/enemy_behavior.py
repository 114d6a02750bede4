"""
Enemy Behavior - per-agent IDLE / CHASING / ATTACKING state machine

Each tick an agent:
- IDLE: picks up the player as a target as soon as one exists (no aggro radius)
- CHASING: requests a fresh path every tick, switches to ATTACKING when the
  target is inside the attack distance with clear line of sight, and steers
  directly at a visible nearby target or otherwise at its look-ahead waypoint
- ATTACKING: stands still, faces the target and fires every tick until the
  target moves beyond the attack distance

FLEEING is reserved. Nothing implements it; requests to enter it are logged
and ignored.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from pygame.math import Vector2

from config import ATTACK_DISTANCE, VISIBILITY_DISTANCE, ROTATION_OFFSET
from ..core.events import CreatePathEvent, ShootEvent, StateChanged
from ..core.geometry import VisibilityUnavailable
from ..core.utils import direction_to, facing_angle

logger = logging.getLogger(__name__)


class BehaviorState(Enum):
    IDLE = "idle"
    FLEEING = "fleeing"
    CHASING = "chasing"
    ATTACKING = "attacking"


@dataclass(frozen=True)
class AgentState:
    kind: BehaviorState
    target: Optional[int] = None

    @classmethod
    def idle(cls):
        return cls(BehaviorState.IDLE)

    @classmethod
    def chasing(cls, target: int):
        return cls(BehaviorState.CHASING, target)

    @classmethod
    def attacking(cls, target: int):
        return cls(BehaviorState.ATTACKING, target)

    def __str__(self):
        if self.target is None:
            return self.kind.value
        return f"{self.kind.value}({self.target})"


class AttackThreshold:
    """Attack/disengage decision. One distance for both directions, no band."""

    def __init__(self, attack_distance: float = ATTACK_DISTANCE):
        self.attack_distance = attack_distance

    def should_attack(self, dist: float) -> bool:
        return dist < self.attack_distance

    def should_disengage(self, dist: float) -> bool:
        return dist > self.attack_distance


class SteeringMode(Enum):
    HOLD = "hold"
    DIRECT = "direct"
    WAYPOINT = "waypoint"
    ATTACK = "attack"


@dataclass
class SteeringIntent:
    """What the movement collaborator should do with the agent this tick."""
    mode: SteeringMode = SteeringMode.HOLD
    move_toward: Optional[Vector2] = None
    facing: Optional[float] = None

    @property
    def moving(self) -> bool:
        return self.move_toward is not None


class AgentBehavior:
    """
    State machine for one enemy agent.

    Args:
        agent: handle of the enemy this behavior drives
        follower: the agent's PathFollower (read for the look-ahead node)
        visibility: object exposing raycast_visible(a, b, exclude=...)
        positions: callable handle -> Vector2 or None (None when despawned)
        target_provider: callable returning the handle to hunt, or None
        events: EventChannel for path requests, shots and state changes
    """

    def __init__(self, agent: int, follower, visibility, positions: Callable, target_provider: Callable,
                 events, threshold: Optional[AttackThreshold] = None,
                 visibility_distance: float = VISIBILITY_DISTANCE,
                 rotation_offset: float = ROTATION_OFFSET):
        self.agent = agent
        self.follower = follower
        self.visibility = visibility
        self.positions = positions
        self.target_provider = target_provider
        self.events = events
        self.threshold = threshold or AttackThreshold()
        self.visibility_distance = visibility_distance
        self.rotation_offset = rotation_offset

        self.state = AgentState.idle()
        self.facing = 0.0
        self.skipped_ticks = 0
        self.unhandled_transitions = 0
        self._warned_fleeing = False

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def transition(self, new_state: AgentState) -> bool:
        """Switch state. Entering FLEEING is not implemented and is refused."""
        if new_state.kind == BehaviorState.FLEEING:
            self.unhandled_transitions += 1
            logger.warning("Agent %s: transition to FLEEING is not implemented, staying %s",
                           self.agent, self.state)
            return False
        if new_state.kind in (BehaviorState.CHASING, BehaviorState.ATTACKING) and new_state.target is None:
            raise ValueError(f"{new_state.kind.value} requires a target")
        if new_state == self.state:
            return False
        old = self.state
        self.state = new_state
        logger.debug("Agent %s: %s -> %s", self.agent, old, new_state)
        self.events.send(StateChanged(self.agent, old, new_state))
        return True

    def _has_line_of_sight(self, a, b, target: int) -> bool:
        try:
            return self.visibility.raycast_visible(a, b, exclude=(self.agent, target))
        except VisibilityUnavailable:
            return False

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, agent_pos) -> SteeringIntent:
        agent_pos = Vector2(agent_pos)
        kind = self.state.kind

        if kind == BehaviorState.IDLE:
            return self._tick_idle()
        if kind == BehaviorState.FLEEING:
            if not self._warned_fleeing:
                logger.warning("Agent %s is FLEEING, which has no behavior; holding position", self.agent)
                self._warned_fleeing = True
            return SteeringIntent(SteeringMode.HOLD, facing=self.facing)

        target = self.state.target
        target_pos = self.positions(target)
        if target_pos is None:
            # stale target: skip this tick, keep the state
            self.skipped_ticks += 1
            logger.debug("Agent %s: target %s not found, skipping tick", self.agent, target)
            return SteeringIntent(SteeringMode.HOLD, facing=self.facing)
        target_pos = Vector2(target_pos)

        if kind == BehaviorState.CHASING:
            return self._tick_chasing(agent_pos, target, target_pos)
        return self._tick_attacking(agent_pos, target, target_pos)

    def _tick_idle(self) -> SteeringIntent:
        target = self.target_provider()
        if target is None:
            return SteeringIntent(SteeringMode.HOLD, facing=self.facing)
        self.transition(AgentState.chasing(target))
        return SteeringIntent(SteeringMode.HOLD, facing=self.facing)

    def _tick_chasing(self, agent_pos: Vector2, target: int, target_pos: Vector2) -> SteeringIntent:
        self.events.send(CreatePathEvent(Vector2(agent_pos), Vector2(target_pos), self.agent))

        dist = agent_pos.distance_to(target_pos)
        visible = self._has_line_of_sight(agent_pos, target_pos, target)

        if visible and self.threshold.should_attack(dist):
            self.transition(AgentState.attacking(target))
            return self._attack(agent_pos, target_pos)

        if visible and dist < self.visibility_distance:
            return self._steer(agent_pos, target_pos, SteeringMode.DIRECT)

        step = self.follower.next_waypoint if self.follower is not None else None
        if step is not None:
            return self._steer(agent_pos, step.position, SteeringMode.WAYPOINT)
        if self.follower is not None and self.follower.arrived:
            return self._steer(agent_pos, target_pos, SteeringMode.DIRECT)
        return SteeringIntent(SteeringMode.HOLD, facing=self.facing)

    def _tick_attacking(self, agent_pos: Vector2, target: int, target_pos: Vector2) -> SteeringIntent:
        dist = agent_pos.distance_to(target_pos)
        if self.threshold.should_disengage(dist):
            self.transition(AgentState.chasing(target))
            return SteeringIntent(SteeringMode.HOLD, facing=self.facing)
        return self._attack(agent_pos, target_pos)

    def _steer(self, agent_pos: Vector2, point, mode: SteeringMode) -> SteeringIntent:
        direction = direction_to(agent_pos, point)
        if direction.length_squared() > 0:
            self.facing = facing_angle(direction, self.rotation_offset)
        return SteeringIntent(mode, Vector2(point), self.facing)

    def _attack(self, agent_pos: Vector2, target_pos: Vector2) -> SteeringIntent:
        direction = direction_to(agent_pos, target_pos)
        if direction.length_squared() > 0:
            self.facing = facing_angle(direction, self.rotation_offset)
        self.events.send(ShootEvent(Vector2(agent_pos), direction, self.agent))
        return SteeringIntent(SteeringMode.ATTACK, None, self.facing)

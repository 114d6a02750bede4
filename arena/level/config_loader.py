"""Configuration loader for arena tunables."""

import json
import logging
import os
from typing import Any, Dict, NamedTuple, Tuple

import config

logger = logging.getLogger(__name__)


class ArenaRuntimeConfig(NamedTuple):
    waypoint_gap: Tuple[float, float]
    waypoint_scale: Tuple[float, float]
    waypoint_offset: Tuple[float, float]
    edge_construction_delay: float
    attack_distance: float
    visibility_distance: float
    enemy_speed: float
    rotation_offset: float
    debug_overlay: bool


def default_runtime_config() -> ArenaRuntimeConfig:
    return ArenaRuntimeConfig(
        waypoint_gap=tuple(config.WAYPOINT_GAP),
        waypoint_scale=tuple(config.WAYPOINT_SCALE),
        waypoint_offset=tuple(config.WAYPOINT_OFFSET),
        edge_construction_delay=float(config.EDGE_CONSTRUCTION_DELAY),
        attack_distance=float(config.ATTACK_DISTANCE),
        visibility_distance=float(config.VISIBILITY_DISTANCE),
        enemy_speed=float(config.ENEMY_SPEED),
        rotation_offset=float(config.ROTATION_OFFSET),
        debug_overlay=False,
    )


def _as_pair(value, fallback):
    try:
        x, y = value
        return (float(x), float(y))
    except (TypeError, ValueError):
        return fallback


def _as_float(value, fallback):
    try:
        return float(value)
    except (TypeError, ValueError):
        return fallback


def load_arena_config(config_path: str = config.ARENA_CONFIG_PATH) -> ArenaRuntimeConfig:
    """
    Load arena tunables from JSON, falling back to the constants in config.py.

    Args:
        config_path: Path to the configuration file

    Returns:
        ArenaRuntimeConfig: defaults overridden by whatever valid values the file has
    """
    defaults = default_runtime_config()
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return defaults

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading config: %s, using defaults", e)
        return defaults

    section: Dict[str, Any] = data.get('arena_config', {}) if isinstance(data, dict) else {}
    unknown = set(section) - set(ArenaRuntimeConfig._fields)
    if unknown:
        logger.warning("Ignoring unknown arena config keys: %s", ", ".join(sorted(unknown)))

    values = defaults._asdict()
    for key, default in values.items():
        if key not in section:
            continue
        raw = section[key]
        if isinstance(default, tuple):
            values[key] = _as_pair(raw, default)
        elif isinstance(default, bool):
            if isinstance(raw, bool):
                values[key] = raw
            else:
                logger.warning("Arena config %s must be true or false, got %r; using %s", key, raw, default)
        else:
            values[key] = _as_float(raw, default)
    return ArenaRuntimeConfig(**values)

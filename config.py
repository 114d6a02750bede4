import math

# === Global configuration & tuning ===
WIDTH, HEIGHT = 1280, 720
FPS = 60

# Colors
BG = (18, 20, 27)
WALL_COL = (54, 60, 78)
ACCENT = (255, 199, 95)
RED = (220, 72, 72)
GREEN = (80, 200, 120)
BLUE = (70, 110, 230)
WHITE = (240, 240, 240)
CYAN = (80, 220, 220)
PINK = (255, 105, 180)

# Player tuning (pixels / second)
PLAYER_SPEED = 300.0
PLAYER_SIZE = (13, 10)
PLAYER_MAX_HP = 100.0
PLAYER_SPAWN = (-300.0, 150.0)

# Projectiles
BULLET_SPEED = 300.0
BULLET_SIZE = 15
BULLET_LIFETIME = 3.0        # seconds before a bullet despawns
BULLET_DAMAGE = 10.0
ENEMY_SHOT_COOLDOWN = 0.75   # seconds between enemy shots

# === Waypoint graph ===
# Grid layout around the window centre; positions are ((i * gap) + offset) * scale
WAYPOINT_GAP = (100.0, 125.0)
WAYPOINT_SCALE = (1.0, 1.75)
WAYPOINT_OFFSET = (0.0, 50.0)
WAYPOINT_DEBUG_SIZE = 20.0

# Seconds of game time before edges are cast, so the scene has settled
EDGE_CONSTRUCTION_DELAY = 3.0

# === Enemy behavior ===
# Single attack/chase threshold (no hysteresis band)
ATTACK_DISTANCE = 200.0
# Direct pursuit only inside this radius, otherwise follow waypoints
VISIBILITY_DISTANCE = 400.0
ENEMY_SPEED = 300.0
# Sprites face "up", so travel direction is rotated by this much
ROTATION_OFFSET = -math.pi / 2

# Boss / minions
BOSS_SPAWN = (150.0, 0.0)
BOSS_SIZE = (100, 100)
BOSS_MAX_HP = 300.0
MINION_SIZE = (30, 30)
MINION_MAX_HP = 30.0
MINION_SPEED_FACTOR = 0.6
MINIONS_PER_LEVEL = 2

# === Game flow ===
LEVEL_UP_SECONDS = 30.0
RESTART_DELAY = 15.0

# Runtime overrides
ARENA_CONFIG_PATH = "config/arena_config.json"

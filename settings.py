"""
settings.py - Tuning constants for the isometric action controller.

All configurable values live here so they're easy to tweak
and easy to reference from any module.
"""

from types import MappingProxyType

# ── Screen ────────────────────────────────────────────────
SCREEN_WIDTH = 960
SCREEN_HEIGHT = 600
FPS = 60
TITLE = "Isometric Action Controller"
BG_COLOR = (18, 20, 26)

# ── Simulation tick ───────────────────────────────────────
PHYSICS_TICK_RATE = 60
PHYSICS_DT = 1.0 / PHYSICS_TICK_RATE
MAX_FRAME_TIME = 0.25          # seconds – clamp for the fixed-step accumulator

# ── Arena ─────────────────────────────────────────────────
ARENA_WIDTH = 1600
ARENA_HEIGHT = 1000
TILE_SIZE = 32                 # terrain-color sampling resolution

# ── Colors (R, G, B) ─────────────────────────────────────
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRAY = (60, 60, 60)
BLUE = (60, 120, 255)
CYAN = (80, 220, 255)
YELLOW = (255, 220, 60)
ORANGE = (255, 160, 40)
RED = (220, 50, 50)
GRASS = (70, 120, 60)
DIRT = (130, 100, 70)
SAND = (200, 180, 120)
DUST_DEFAULT_COLOR = (160, 150, 130)

# ── Character ─────────────────────────────────────────────
PLAYER_START_X = 800
PLAYER_START_Y = 500
PLAYER_MAX_HP = 100
PLAYER_BASE_SPEED = 200.0      # pixels/sec
PLAYER_SPRINT_MULT = 1.6
IDLE_DECELERATION = 900.0      # pixels/sec² – velocity decay while idle
HURTBOX_SIZE = (28, 20)        # ground footprint used for overlaps
CHARACTER_SPRITE_SIZE = (32, 48)

# ── Stamina system ────────────────────────────────────────
STAMINA_MAX = 100.0
STAMINA_REGEN_RATE = 20.0      # per second
STAMINA_EXHAUST_RECOVER = 0.15 # fraction of max that clears exhaustion
STAMINA_SPRINT_COST = 25.0     # per second while held
STAMINA_JUMP_COST = 20.0
STAMINA_ROLL_COST = 15.0

ACTION_COSTS = MappingProxyType({
    "sprint": STAMINA_SPRINT_COST,
    "jump": STAMINA_JUMP_COST,
    "roll": STAMINA_ROLL_COST,
})

# ── Vertical motion ───────────────────────────────────────
GRAVITY = 980.0                # pixels/sec², positive pulls toward the ground
JUMP_FORCE = 340.0             # initial upward z velocity

# ── Walk bob ──────────────────────────────────────────────
BOB_FREQUENCY = 14.0           # radians/sec
BOB_AMPLITUDE = 3.0            # pixels

# ── Roll ──────────────────────────────────────────────────
ROLL_SPEED = 460.0             # pixels/sec
ROLL_DURATION = 0.35           # seconds
ROLL_TRAIL_INTERVAL = 5        # physics ticks between ghosts

# ── Ghost trail / particles ───────────────────────────────
GHOST_START_ALPHA = 0.5
GHOST_FADE_DURATION = 0.3      # seconds
GHOST_TINT = (140, 200, 255)
PARTICLE_GRAVITY = 300.0
PARTICLE_MAX_COUNT = 300
DUST_PARTICLE_COUNT = 8

# ── Placeholder combat states ─────────────────────────────
ATTACK_STUB_DURATION = 0.3     # seconds before Attack returns to Idle

# ── Hazards (demo) ────────────────────────────────────────
HAZARD_DAMAGE = 10
HAZARD_KNOCKBACK = 380.0       # pixels/sec applied as velocity

# ── Camera ────────────────────────────────────────────────
CAMERA_FOLLOW_RATE = 6.0       # lerp factor per second
CAMERA_PAN_DISTANCE = 160.0    # max pan offset in pixels
HIT_SHAKE_INTENSITY = 5
HIT_SHAKE_DURATION = 0.15

# ── Stamina bar display ───────────────────────────────────
STAMINABAR_WIDTH = 200
STAMINABAR_HEIGHT = 12
STAMINABAR_X = 20
STAMINABAR_Y = 24
STAMINABAR_COLOR = (80, 200, 120)
STAMINABAR_EXHAUSTED_COLOR = (200, 90, 60)

# ── Font ──────────────────────────────────────────────────
FONT_SIZE = 22
SMALL_FONT_SIZE = 18

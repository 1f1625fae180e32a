"""
character_state.py – Data model for the player action controller.

ActionMode / Facing enums, the mutable CharacterState record owned by
one PlayerController, and the InputFrame sampled once per tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

import pygame

from settings import PLAYER_MAX_HP


# ══════════════════════════════════════════════════════════
#  Enums
# ══════════════════════════════════════════════════════════

class ActionMode(IntEnum):
    """Behavioural states. Exactly one is active at a time."""

    IDLE = 0
    MOVE = 1
    JUMP = 2
    ROLL = 3
    RECOVERY = 4
    ATTACK = 5
    BLOCK = 6


class Facing(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


def facing_from_input(direction: pygame.Vector2, current: Facing) -> Facing:
    """Pick a facing from the dominant axis of raw input.

    Ties go to the vertical axis; zero input keeps *current*.
    """
    if direction.x == 0 and direction.y == 0:
        return current
    if abs(direction.x) > abs(direction.y):
        return Facing.EAST if direction.x > 0 else Facing.WEST
    return Facing.NORTH if direction.y < 0 else Facing.SOUTH


# ══════════════════════════════════════════════════════════
#  Per-tick input
# ══════════════════════════════════════════════════════════

@dataclass
class InputFrame:
    """One tick of player input.

    ``jump``, ``roll`` and ``attack`` are edge-triggered (True only on the
    tick the key went down); ``sprint`` and ``block`` are held.
    """

    move: pygame.Vector2 = field(default_factory=pygame.Vector2)
    pan: pygame.Vector2 = field(default_factory=pygame.Vector2)
    jump: bool = False
    roll: bool = False
    sprint: bool = False
    attack: bool = False
    block: bool = False


# ══════════════════════════════════════════════════════════
#  Character state
# ══════════════════════════════════════════════════════════

@dataclass
class CharacterState:
    """Mutable record owned exclusively by one controller instance."""

    mode: ActionMode = ActionMode.IDLE
    velocity: pygame.Vector2 = field(default_factory=pygame.Vector2)
    facing: Facing = Facing.SOUTH

    # Vertical displacement (negative = above ground)
    z_height: float = 0.0
    z_velocity: float = 0.0

    # Roll
    roll_timer: float = 0.0
    roll_direction: pygame.Vector2 = field(default_factory=pygame.Vector2)
    roll_queued: bool = False
    trail_ticks: int = 0

    # Invincibility: roll-driven flag plus an explicit timed grant
    invincible: bool = False
    iframe_timer: float = 0.0

    health: int = PLAYER_MAX_HP
    max_health: int = PLAYER_MAX_HP

    # Reserved / placeholder timers
    recovery_timer: float = 0.0
    attack_timer: float = 0.0

    bob_phase: float = 0.0

    @property
    def is_invulnerable(self) -> bool:
        """True during roll i-frames OR an explicit grant."""
        return self.invincible or self.iframe_timer > 0

    @property
    def airborne(self) -> bool:
        return self.mode == ActionMode.JUMP or self.z_height < 0

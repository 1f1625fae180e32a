"""
roll_system.py – Dodge roll with input buffering and a ghost trail.

Rules:
- A roll needs stamina, solid ground, and some direction to roll in
  (held input or leftover momentum); standing still rejects it
- The direction is locked for the whole roll
- The character is invincible exactly while rolling
- One extra roll press during the window is buffered and honoured the
  tick the roll ends, if stamina allows – chained rolls never pass
  through Idle
- Every few physics ticks a ghost snapshot is spawned
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import pygame

from entities.character_state import ActionMode, CharacterState
from settings import ROLL_SPEED, ROLL_DURATION, ROLL_TRAIL_INTERVAL
from systems.stamina_system import StaminaComponent
from systems.vertical_motion import VerticalMotion

logger = logging.getLogger(__name__)


@dataclass
class RollConfig:
    speed: float = ROLL_SPEED
    duration: float = ROLL_DURATION
    trail_interval: int = ROLL_TRAIL_INTERVAL   # physics ticks per ghost


class RollSystem:
    """Starts, advances and chains rolls on a CharacterState."""

    def __init__(self, stamina: StaminaComponent, vertical: VerticalMotion,
                 config: RollConfig | None = None):
        self.stamina = stamina
        self.vertical = vertical
        self.cfg = config or RollConfig()

    # ── Gating ────────────────────────────────────────────

    @staticmethod
    def _pick_direction(state: CharacterState,
                        held: pygame.Vector2) -> pygame.Vector2:
        """Held input wins, then current momentum, then the last roll."""
        for candidate in (held, state.velocity, state.roll_direction):
            if candidate.length_squared() > 0:
                return pygame.Vector2(candidate).normalize()
        return pygame.Vector2()

    def rejection_reason(self, state: CharacterState,
                         held: pygame.Vector2) -> str | None:
        """Why a roll cannot start right now, or None if it can.

        Ground-only and not from a standstill. Does not check stamina.
        """
        if not self.vertical.on_ground(state):
            return "airborne"
        if held.length_squared() == 0 and state.velocity.length_squared() == 0:
            return "stationary"
        return None

    def try_start(self, state: CharacterState, held: pygame.Vector2) -> bool:
        """Gate and begin a roll. A rejected roll costs nothing."""
        reason = self.rejection_reason(state, held)
        if reason is not None:
            logger.debug("Roll rejected: %s", reason)
            return False
        if not self.stamina.try_deduct("roll"):
            return False
        self._begin(state, held)
        return True

    def _begin(self, state: CharacterState, held: pygame.Vector2):
        state.roll_direction = self._pick_direction(state, held)
        state.mode = ActionMode.ROLL
        state.roll_timer = self.cfg.duration
        state.roll_queued = False
        state.invincible = True
        state.trail_ticks = 0
        state.velocity = state.roll_direction * self.cfg.speed
        logger.debug("Roll started toward (%.2f, %.2f)",
                     state.roll_direction.x, state.roll_direction.y)

    # ── Per-tick ──────────────────────────────────────────

    def update(self, state: CharacterState, held: pygame.Vector2,
               roll_pressed: bool, dt: float,
               on_trail: Callable[[], None] | None = None) -> bool:
        """Advance the active roll by one tick.

        Returns True while the character is still (or again) rolling,
        False once it has dropped back to Idle.
        """
        if roll_pressed:
            state.roll_queued = True

        state.roll_timer -= dt
        state.velocity = state.roll_direction * self.cfg.speed

        state.trail_ticks += 1
        if on_trail is not None and state.trail_ticks % self.cfg.trail_interval == 0:
            on_trail()

        if state.roll_timer > 0:
            return True

        queued = state.roll_queued
        state.roll_queued = False
        if queued and self.stamina.try_deduct("roll"):
            logger.debug("Chaining queued roll")
            self._begin(state, held)
            return True

        self.finish(state)
        return False

    def finish(self, state: CharacterState):
        state.mode = ActionMode.IDLE
        state.roll_timer = 0.0
        state.roll_queued = False
        state.invincible = False
        state.velocity = pygame.Vector2()

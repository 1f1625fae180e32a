"""
vertical_motion.py – Jump arc and walk bob.

Height is tracked separately from the ground plane so collision never
sees it. Negative z is above the ground (screen-up), so a jump starts
with a negative z velocity and gravity pulls it back toward 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from entities.character_state import ActionMode, CharacterState
from settings import GRAVITY, JUMP_FORCE, BOB_FREQUENCY, BOB_AMPLITUDE


@dataclass
class MotionConfig:
    """Tunable knobs for the jump arc and the walk bob."""

    gravity: float = GRAVITY
    jump_force: float = JUMP_FORCE
    bob_frequency: float = BOB_FREQUENCY
    bob_amplitude: float = BOB_AMPLITUDE


class VerticalMotion:
    """Euler integration of the z axis."""

    def __init__(self, config: MotionConfig | None = None):
        self.cfg = config or MotionConfig()

    def on_ground(self, state: CharacterState) -> bool:
        return not state.airborne

    def launch(self, state: CharacterState):
        state.z_velocity = -self.cfg.jump_force

    def step(self, state: CharacterState, dt: float) -> bool:
        """Integrate one tick. Returns True on the tick the character lands."""
        state.z_velocity += self.cfg.gravity * dt
        state.z_height += state.z_velocity * dt
        if state.z_height >= 0.0:
            state.z_height = 0.0
            state.z_velocity = 0.0
            return True
        return False


class BobAnimator:
    """Walk bob: a purely visual lift applied only while moving.

    The offset is ``-|sin(phase) * amplitude|`` so it never dips below
    the baseline.
    """

    def __init__(self, config: MotionConfig | None = None):
        self.cfg = config or MotionConfig()
        self.offset = 0.0

    def update(self, state: CharacterState, dt: float) -> float:
        if state.mode != ActionMode.MOVE:
            state.bob_phase = 0.0
            self.offset = 0.0
            return self.offset
        state.bob_phase += dt * self.cfg.bob_frequency
        self.offset = -abs(math.sin(state.bob_phase) * self.cfg.bob_amplitude)
        return self.offset

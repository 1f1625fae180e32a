"""
player_controller.py – Per-tick action controller for the player character.

Owns the behavioural state machine and wires it to its collaborators:

  input → isometric projection → state handler (may transition)
        → queued hits → physics resolve → bob / UI / camera sync

States: idle, move, jump, roll, recovery, attack, block.
Attack and block are placeholders that keep the transition surface
without any combat logic; recovery is reserved and nothing enters it.

Collaborators are passed in at construction. Every one of them is
optional: a missing one is reported once at start-up and its update is
skipped from then on.
"""

from __future__ import annotations

import logging

import pygame

from entities.character_state import (
    ActionMode, CharacterState, InputFrame, facing_from_input,
)
from settings import (
    PLAYER_START_X, PLAYER_START_Y, PLAYER_MAX_HP,
    PLAYER_BASE_SPEED, PLAYER_SPRINT_MULT, IDLE_DECELERATION,
    ATTACK_STUB_DURATION, DUST_DEFAULT_COLOR,
    HIT_SHAKE_INTENSITY, HIT_SHAKE_DURATION,
)
from systems.hit_reception import HitEvent, apply_hit
from systems.roll_system import RollConfig, RollSystem
from systems.stamina_system import StaminaComponent
from systems.vertical_motion import BobAnimator, MotionConfig, VerticalMotion
from utils.iso import iso_project

logger = logging.getLogger(__name__)


class PlayerController:
    """State machine driving one player character.

    Usage:
        ctrl = PlayerController(physics=arena, ui=bar, camera=cam, vfx=vfx)
        ctrl.tick(input_frame, dt)      # once per physics tick
    """

    def __init__(self, position=(PLAYER_START_X, PLAYER_START_Y), *,
                 stamina: StaminaComponent | None = None,
                 motion_config: MotionConfig | None = None,
                 roll_config: RollConfig | None = None,
                 physics=None, hurtbox=None, ui=None, camera=None,
                 vfx=None, terrain=None,
                 base_speed: float = PLAYER_BASE_SPEED,
                 sprint_multiplier: float = PLAYER_SPRINT_MULT,
                 deceleration: float = IDLE_DECELERATION,
                 max_health: int = PLAYER_MAX_HP):
        self.position = pygame.Vector2(position)
        self.state = CharacterState(health=max_health, max_health=max_health)

        self.stamina_component = stamina or StaminaComponent()
        self.vertical = VerticalMotion(motion_config)
        self.bob = BobAnimator(motion_config)
        self.roll = RollSystem(self.stamina_component, self.vertical, roll_config)

        self.base_speed = base_speed
        self.sprint_multiplier = sprint_multiplier
        self.deceleration = deceleration

        # External collaborators
        self.physics = physics
        self.hurtbox = hurtbox
        self.ui = ui
        self.camera = camera
        self.vfx = vfx
        self.terrain = terrain

        # Current look, copied into ghost snapshots (set by the renderer)
        self.appearance: pygame.Surface | None = None

        self._handlers = {
            ActionMode.IDLE: self._tick_idle,
            ActionMode.MOVE: self._tick_move,
            ActionMode.JUMP: self._tick_jump,
            ActionMode.ROLL: self._tick_roll,
            ActionMode.RECOVERY: self._tick_recovery,
            ActionMode.ATTACK: self._tick_attack,
            ActionMode.BLOCK: self._tick_block,
        }
        self._report_missing_collaborators()

    def _report_missing_collaborators(self):
        for name in ("physics", "hurtbox", "ui", "camera", "vfx"):
            if getattr(self, name) is None:
                logger.warning("No %s collaborator configured – skipping its updates", name)
        if self.terrain is None:
            logger.info("No terrain colour service – dust uses the default tint")

    # ── Properties ────────────────────────────────────────

    @property
    def mode(self) -> ActionMode:
        return self.state.mode

    @property
    def stamina(self) -> float:
        return self.stamina_component.stamina

    @property
    def is_exhausted(self) -> bool:
        return self.stamina_component.is_exhausted

    @property
    def alive(self) -> bool:
        return self.state.health > 0

    @property
    def visual_offset(self) -> float:
        """Screen-space lift: jump height plus walk bob (both <= 0)."""
        return self.state.z_height + self.bob.offset

    # ══════════════════════════════════════════════════════
    #  Tick
    # ══════════════════════════════════════════════════════

    def tick(self, frame: InputFrame, dt: float):
        """Advance the controller by one physics tick."""
        if dt < 0:
            logger.debug("Negative dt %.4f clamped to 0", dt)
            dt = 0.0

        st = self.state
        raw = pygame.Vector2(frame.move)
        direction = iso_project(raw)
        st.facing = facing_from_input(raw, st.facing)
        if st.iframe_timer > 0:
            st.iframe_timer = max(0.0, st.iframe_timer - dt)

        self._handlers[st.mode](frame, direction, dt)

        self._process_hits()
        self._resolve_physics(dt)
        self._sync(frame, dt)

    def _enter(self, mode: ActionMode):
        if mode != self.state.mode:
            logger.debug("State %s -> %s", self.state.mode.name, mode.name)
        self.state.mode = mode

    # ── Shared helpers ────────────────────────────────────

    def _try_actions(self, frame: InputFrame, direction: pygame.Vector2) -> bool:
        """Discrete action gating shared by Idle and Move."""
        st = self.state
        if (frame.jump and self.vertical.on_ground(st)
                and self.stamina_component.try_deduct("jump")):
            self._enter(ActionMode.JUMP)
            self.vertical.launch(st)
            return True
        if frame.roll and self.roll.try_start(st, direction):
            self._kick_dust()
            return True
        if frame.attack:
            self._enter(ActionMode.ATTACK)
            st.attack_timer = ATTACK_STUB_DURATION
            st.velocity = pygame.Vector2()
            return True
        if frame.block:
            self._enter(ActionMode.BLOCK)
            st.velocity = pygame.Vector2()
            return True
        return False

    def _locomote(self, frame: InputFrame, direction: pygame.Vector2, dt: float):
        """Ground-plane speed from input, with sprint drain or regen."""
        stamina = self.stamina_component
        self.state.velocity = direction * self.base_speed
        if frame.sprint and not stamina.is_exhausted and stamina.stamina > 0:
            self.state.velocity *= self.sprint_multiplier
            stamina.drain("sprint", dt)
        else:
            stamina.regen(dt)

    def _decay(self, dt: float):
        vel = self.state.velocity
        speed = vel.length()
        if speed == 0:
            return
        new_speed = max(0.0, speed - self.deceleration * dt)
        if new_speed == 0:
            self.state.velocity = pygame.Vector2()
        else:
            vel.scale_to_length(new_speed)

    def _idle_default(self, dt: float):
        self._decay(dt)
        self.stamina_component.regen(dt)

    # ══════════════════════════════════════════════════════
    #  State handlers
    # ══════════════════════════════════════════════════════

    def _tick_idle(self, frame, direction, dt):
        if self._try_actions(frame, direction):
            return
        if direction.length_squared() > 0:
            self._enter(ActionMode.MOVE)
            self._move_default(frame, direction, dt)
            return
        self._idle_default(dt)

    def _tick_move(self, frame, direction, dt):
        if self._try_actions(frame, direction):
            return
        if direction.length_squared() == 0:
            self._enter(ActionMode.IDLE)
            self._idle_default(dt)
            return
        self._move_default(frame, direction, dt)

    def _move_default(self, frame, direction, dt):
        self._locomote(frame, direction, dt)
        self.stamina_component.update_exhaustion()

    def _tick_jump(self, frame, direction, dt):
        self._locomote(frame, direction, dt)
        if self.vertical.step(self.state, dt):
            self._enter(ActionMode.IDLE)
            self._kick_dust()

    def _tick_roll(self, frame, direction, dt):
        self.roll.update(self.state, direction, frame.roll, dt,
                         on_trail=self._spawn_trail_ghost)
        if self.state.mode != ActionMode.ROLL:
            logger.debug("State ROLL -> %s", self.state.mode.name)

    def _tick_attack(self, frame, direction, dt):
        # Placeholder: no stamina, no hitbox
        st = self.state
        st.velocity = pygame.Vector2()
        st.attack_timer -= dt
        if st.attack_timer <= 0:
            st.attack_timer = 0.0
            self._enter(ActionMode.IDLE)

    def _tick_block(self, frame, direction, dt):
        # Placeholder: held only, no damage reduction
        self.state.velocity = pygame.Vector2()
        if not frame.block:
            self._enter(ActionMode.IDLE)

    def _tick_recovery(self, frame, direction, dt):
        # Reserved: no transition leads here yet
        st = self.state
        st.velocity = pygame.Vector2()
        st.recovery_timer -= dt
        if st.recovery_timer <= 0:
            st.recovery_timer = 0.0
            self._enter(ActionMode.IDLE)

    # ══════════════════════════════════════════════════════
    #  Hits
    # ══════════════════════════════════════════════════════

    def receive_hit(self, event: HitEvent) -> bool:
        """Synchronous hit callback. Returns True if the hit landed."""
        landed = apply_hit(self.state, event)
        if landed and self.camera is not None:
            self.camera.shake(HIT_SHAKE_INTENSITY, HIT_SHAKE_DURATION)
        return landed

    def _process_hits(self):
        if self.hurtbox is None:
            return
        for event in self.hurtbox.drain():
            self.receive_hit(event)

    def grant_invincibility(self, seconds: float):
        """Explicit i-frame window on top of roll invincibility."""
        self.state.iframe_timer = max(self.state.iframe_timer, seconds)

    # ══════════════════════════════════════════════════════
    #  Physics + sync
    # ══════════════════════════════════════════════════════

    def _resolve_physics(self, dt: float):
        if self.physics is None:
            displacement = self.state.velocity * dt
        else:
            displacement = self.physics.resolve(self.position, self.state.velocity, dt)
        self.position += displacement

    def _sync(self, frame: InputFrame, dt: float):
        self.bob.update(self.state, dt)
        if self.ui is not None:
            self.ui.set_value(self.stamina, self.stamina_component.max_stamina,
                              self.is_exhausted)
        if self.camera is not None:
            self.camera.follow(self.position, frame.pan, dt)

    # ── Effects ───────────────────────────────────────────

    def _spawn_trail_ghost(self):
        if self.vfx is None:
            return
        self.vfx.spawn_ghost(self.appearance, self.position, self.state.facing)

    def _kick_dust(self):
        if self.vfx is None:
            return
        color = DUST_DEFAULT_COLOR
        if self.terrain is not None:
            color = self.terrain.get_color_at(self.position)
        self.vfx.spawn_dust(self.position.x, self.position.y, color)

    # ── Serialization helpers ─────────────────────────────

    def snapshot(self) -> dict:
        st = self.state
        return {
            "mode": st.mode.name,
            "facing": st.facing.value,
            "health": st.health,
            "stamina": round(self.stamina, 1),
            "exhausted": self.is_exhausted,
            "invincible": st.is_invulnerable,
            "roll_queued": st.roll_queued,
            "z": round(st.z_height, 1),
            "x": round(self.position.x, 1),
            "y": round(self.position.y, 1),
        }

"""
keybinds.py – Rebindable player controls with JSON persistence, plus the
per-tick sampler that turns key state into an InputFrame.

PLAYER_KEYS maps action names → pygame key constants. Actions:
    move_left, move_right, move_up, move_down,
    pan_left, pan_right, pan_up, pan_down,
    jump, roll, sprint, attack, block

Usage:
    from keybinds import InputSampler
    sampler = InputSampler()
    frame = sampler.sample(pygame.key.get_pressed())

Persistence:
    save_keybinds()   – write current bindings to controls.json
    load_keybinds()   – load from controls.json (called on import)
    reset_keybinds()  – restore factory defaults
"""

from __future__ import annotations

import json
import logging
import os

import pygame

from entities.character_state import InputFrame

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════
#  Path to persistence file
# ══════════════════════════════════════════════════════════

_CONTROLS_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)),
    "controls.json",
)

# ══════════════════════════════════════════════════════════
#  Canonical action list
# ══════════════════════════════════════════════════════════

ACTIONS: list[str] = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "pan_left",
    "pan_right",
    "pan_up",
    "pan_down",
    "jump",
    "roll",
    "sprint",
    "attack",
    "block",
]

# Actions reported only on the tick the key goes down
EDGE_ACTIONS: tuple[str, ...] = ("jump", "roll", "attack")

# Human-friendly labels for the HUD
ACTION_LABELS: dict[str, str] = {
    "move_left":  "Move Left",
    "move_right": "Move Right",
    "move_up":    "Move Up",
    "move_down":  "Move Down",
    "pan_left":   "Camera Left",
    "pan_right":  "Camera Right",
    "pan_up":     "Camera Up",
    "pan_down":   "Camera Down",
    "jump":       "Jump",
    "roll":       "Roll",
    "sprint":     "Sprint",
    "attack":     "Attack",
    "block":      "Block",
}

# ══════════════════════════════════════════════════════════
#  Default bindings (factory settings)
# ══════════════════════════════════════════════════════════

_DEFAULT_KEYS: dict[str, int] = {
    "move_left":  pygame.K_a,
    "move_right": pygame.K_d,
    "move_up":    pygame.K_w,
    "move_down":  pygame.K_s,
    "pan_left":   pygame.K_LEFT,
    "pan_right":  pygame.K_RIGHT,
    "pan_up":     pygame.K_UP,
    "pan_down":   pygame.K_DOWN,
    "jump":       pygame.K_SPACE,
    "roll":       pygame.K_LCTRL,
    "sprint":     pygame.K_LSHIFT,
    "attack":     pygame.K_j,
    "block":      pygame.K_k,
}

# Live binding dictionary (mutated at runtime)
PLAYER_KEYS: dict[str, int] = dict(_DEFAULT_KEYS)


# ══════════════════════════════════════════════════════════
#  Persistence helpers
# ══════════════════════════════════════════════════════════

def save_keybinds() -> None:
    """Persist current bindings to controls.json."""
    payload = {"player": dict(PLAYER_KEYS)}
    try:
        with open(_CONTROLS_PATH, "w", encoding="utf-8") as fp:
            json.dump(payload, fp, indent=2)
        logger.info("Keybinds saved to %s", _CONTROLS_PATH)
    except OSError as exc:
        logger.error("Failed to save keybinds: %s", exc)


def load_keybinds() -> None:
    """Load bindings from controls.json into PLAYER_KEYS.

    Missing actions are filled from defaults.  Unknown actions are
    ignored so a hand-edited JSON won't crash the game.
    """
    if not os.path.exists(_CONTROLS_PATH):
        logger.info("No controls.json found – using defaults.")
        return

    try:
        with open(_CONTROLS_PATH, "r", encoding="utf-8") as fp:
            data = json.load(fp)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read controls.json (%s) – using defaults.", exc)
        return

    raw = data.get("player", {}) if isinstance(data, dict) else {}
    for action in ACTIONS:
        try:
            PLAYER_KEYS[action] = int(raw[action])
        except (KeyError, TypeError, ValueError):
            PLAYER_KEYS[action] = _DEFAULT_KEYS[action]
    logger.info("Keybinds loaded from %s", _CONTROLS_PATH)


def reset_keybinds() -> None:
    """Restore factory defaults and save."""
    PLAYER_KEYS.update(_DEFAULT_KEYS)
    save_keybinds()
    logger.info("Keybinds reset to defaults.")


# ══════════════════════════════════════════════════════════
#  Conflict detection
# ══════════════════════════════════════════════════════════

def find_conflicts(bindings: dict[str, int]) -> list[tuple[str, str, int]]:
    """Return (action_a, action_b, key) tuples for duplicate keys."""
    seen: dict[int, str] = {}
    conflicts: list[tuple[str, str, int]] = []
    for action, key in bindings.items():
        if key in seen:
            conflicts.append((seen[key], action, key))
        else:
            seen[key] = action
    return conflicts


def rebind(action: str, new_key: int,
           bindings: dict[str, int] | None = None) -> str | None:
    """Assign *new_key* to *action* unless another action already uses it.

    Returns the conflicting action's name, or None on success.
    """
    bindings = PLAYER_KEYS if bindings is None else bindings
    for act, key in bindings.items():
        if act != action and key == new_key:
            return act
    bindings[action] = new_key
    logger.info("Rebound %s → %s", action, key_name(new_key))
    return None


def key_name(key_code: int) -> str:
    """Return a human-readable name for a pygame key constant."""
    return pygame.key.name(key_code).upper()


# ══════════════════════════════════════════════════════════
#  Per-tick sampling
# ══════════════════════════════════════════════════════════

def _axis(keys, bindings, negative: str, positive: str) -> int:
    return int(bool(keys[bindings[positive]])) - int(bool(keys[bindings[negative]]))


class InputSampler:
    """Builds one InputFrame per tick from held-key state.

    Tracks the previous tick so jump / roll / attack fire once per
    key press instead of every tick the key is held.
    """

    def __init__(self, bindings: dict[str, int] | None = None):
        self.bindings = PLAYER_KEYS if bindings is None else bindings
        self._was_down: dict[str, bool] = {a: False for a in EDGE_ACTIONS}

    def _pressed(self, keys, action: str) -> bool:
        down = bool(keys[self.bindings[action]])
        fired = down and not self._was_down[action]
        self._was_down[action] = down
        return fired

    def sample(self, keys) -> InputFrame:
        b = self.bindings
        move = pygame.Vector2(
            _axis(keys, b, "move_left", "move_right"),
            _axis(keys, b, "move_up", "move_down"),
        )
        if move.length_squared() > 1:
            move = move.normalize()
        pan = pygame.Vector2(
            _axis(keys, b, "pan_left", "pan_right"),
            _axis(keys, b, "pan_up", "pan_down"),
        )
        return InputFrame(
            move=move,
            pan=pan,
            jump=self._pressed(keys, "jump"),
            roll=self._pressed(keys, "roll"),
            attack=self._pressed(keys, "attack"),
            sprint=bool(keys[b["sprint"]]),
            block=bool(keys[b["block"]]),
        )


# ══════════════════════════════════════════════════════════
#  Auto-load on import
# ══════════════════════════════════════════════════════════

load_keybinds()

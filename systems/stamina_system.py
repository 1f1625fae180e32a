"""
stamina_system.py – Stamina resource management for the player controller.

Rules:
- Jumping and rolling cost a fixed amount, deducted atomically
- Sprinting drains stamina continuously while held
- Stamina regenerates whenever the active state allows it
- Exhaustion latches at 0 and only clears once stamina climbs back
  past a recovery fraction of the maximum
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from settings import (
    ACTION_COSTS, STAMINA_MAX, STAMINA_REGEN_RATE, STAMINA_EXHAUST_RECOVER,
)

logger = logging.getLogger(__name__)


class StaminaComponent:
    """Stamina pool + cost table + exhaustion latch.

    Costs for discrete actions (``jump``, ``roll``) are flat amounts;
    continuous actions (``sprint``) are per second.
    """

    def __init__(self, max_stamina: float = STAMINA_MAX,
                 costs: Mapping[str, float] = ACTION_COSTS,
                 regen_rate: float = STAMINA_REGEN_RATE,
                 exhaust_recover: float = STAMINA_EXHAUST_RECOVER):
        self.max_stamina = max_stamina
        self.stamina = max_stamina
        self.regen_rate = regen_rate
        self.exhaust_recover = exhaust_recover
        self.costs = MappingProxyType(dict(costs))
        self.is_exhausted = False

    # ── Queries ───────────────────────────────────────────

    @property
    def fraction(self) -> float:
        return self.stamina / max(1.0, self.max_stamina)

    @property
    def is_empty(self) -> bool:
        return self.stamina <= 0.0

    def cost(self, action: str) -> float:
        return self.costs[action]

    def has_enough(self, action: str) -> bool:
        return self.stamina >= self.costs[action]

    # ── Modifiers ─────────────────────────────────────────

    def try_deduct(self, action: str) -> bool:
        """Deduct the cost of *action* if affordable. Returns False otherwise,
        leaving stamina untouched."""
        cost = self.costs[action]
        if self.stamina < cost:
            logger.debug("Not enough stamina for %s (%.1f < %.1f)",
                         action, self.stamina, cost)
            return False
        self.stamina = max(0.0, self.stamina - cost)
        return True

    def drain(self, action: str, dt: float):
        """Continuous per-second cost, clamped at 0."""
        self.stamina = max(0.0, self.stamina - self.costs[action] * dt)

    def regen(self, dt: float):
        self.stamina = min(self.max_stamina,
                           self.stamina + self.regen_rate * dt)

    def update_exhaustion(self) -> bool:
        """Advance the exhaustion latch. Returns the new flag."""
        if self.stamina <= 0.0:
            if not self.is_exhausted:
                logger.debug("Stamina exhausted")
            self.is_exhausted = True
        elif (self.is_exhausted
              and self.stamina >= self.max_stamina * self.exhaust_recover):
            logger.debug("Recovered from exhaustion at %.1f", self.stamina)
            self.is_exhausted = False
        return self.is_exhausted

    def reset(self):
        self.stamina = self.max_stamina
        self.is_exhausted = False

"""
hit_reception.py – Turns detector overlaps into damage + knockback.

Pipeline:
- A Hurtbox watches damage zones and queues one HitEvent per new overlap
- The controller drains the queue once per tick, in arrival order
- apply_hit() discards the event during i-frames, otherwise it takes
  health and replaces the current velocity with the knockback

There is no post-hit invulnerability: repeated hits outside a roll all
land.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pygame

from entities.character_state import CharacterState
from settings import HURTBOX_SIZE, HAZARD_DAMAGE, HAZARD_KNOCKBACK

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HitEvent:
    """A single qualifying overlap reported by the detector."""

    damage: int
    knockback: pygame.Vector2 = field(default_factory=pygame.Vector2)


def apply_hit(state: CharacterState, event: HitEvent) -> bool:
    """Resolve one hit against *state*. Returns True if it landed.

    Health is not floored and may go negative; use ``health > 0`` for
    liveness.
    """
    if state.is_invulnerable:
        logger.debug("Hit for %d discarded (invulnerable)", event.damage)
        return False
    state.health -= int(event.damage)
    # Knockback replaces velocity, it does not add to it
    state.velocity = pygame.Vector2(event.knockback)
    logger.debug("Health reduced to %d (took %d)", state.health, event.damage)
    return True


# ══════════════════════════════════════════════════════════
#  Detector
# ══════════════════════════════════════════════════════════

class DamageZone:
    """A damage-capable area on the ground plane."""

    __slots__ = ("rect", "damage", "knockback")

    def __init__(self, rect: pygame.Rect, damage: int = HAZARD_DAMAGE,
                 knockback: float = HAZARD_KNOCKBACK):
        self.rect = pygame.Rect(rect)
        self.damage = damage
        self.knockback = knockback

    def knockback_toward(self, position: pygame.Vector2) -> pygame.Vector2:
        """Knockback vector pushing *position* away from the zone centre."""
        away = pygame.Vector2(position) - pygame.Vector2(self.rect.center)
        if away.length_squared() == 0:
            away = pygame.Vector2(0, 1)
        return away.normalize() * self.knockback


class Hurtbox:
    """Detector + message channel feeding the hit pipeline.

    Call ``scan(position, zones)`` after physics each tick (or ``push``
    events from any other source). The controller drains the queue.
    """

    def __init__(self, size: tuple[int, int] = HURTBOX_SIZE):
        self.rect = pygame.Rect(0, 0, *size)
        self._pending: list[HitEvent] = []
        self._overlapping: set[int] = set()  # id(zone) currently touching

    @property
    def pending(self) -> int:
        return len(self._pending)

    def push(self, event: HitEvent):
        self._pending.append(event)

    def drain(self) -> list[HitEvent]:
        """Return queued events in arrival order and empty the queue."""
        events, self._pending = self._pending, []
        return events

    def scan(self, position: pygame.Vector2, zones) -> int:
        """Queue a HitEvent for every zone the hurtbox starts overlapping.

        Returns the number of events queued.
        """
        self.rect.center = (int(position[0]), int(position[1]))
        touching: set[int] = set()
        queued = 0
        for zone in zones:
            if not self.rect.colliderect(zone.rect):
                continue
            key = id(zone)
            touching.add(key)
            if key in self._overlapping:
                continue
            self.push(HitEvent(zone.damage, zone.knockback_toward(position)))
            queued += 1
        self._overlapping = touching
        return queued

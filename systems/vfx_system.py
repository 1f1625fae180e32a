"""
vfx_system.py – Transient visual effects for the player controller.

Implements:
- Roll ghost trail (fading snapshots of the character)
- Dust puffs on landing / roll start, tinted by the terrain underfoot

Every effect owns its own timer. The system keeps one flat list that is
ticked and pruned each frame; whoever spawns an effect never hears
about it again.
"""

from __future__ import annotations

import math
import random
import pygame
from settings import (
    PARTICLE_GRAVITY, PARTICLE_MAX_COUNT, DUST_PARTICLE_COUNT,
    GHOST_START_ALPHA, GHOST_FADE_DURATION, GHOST_TINT,
    CHARACTER_SPRITE_SIZE,
)


# ══════════════════════════════════════════════════════════
#  Base Particle
# ══════════════════════════════════════════════════════════

class Particle:
    """Physics-based particle with velocity, gravity, and fade."""

    __slots__ = (
        "x", "y", "vx", "vy", "color", "size",
        "lifetime", "timer", "gravity", "drag",
    )

    def __init__(self, x: float, y: float, vx: float, vy: float,
                 color: tuple, size: float = 3.0,
                 lifetime: float = 0.5, gravity: float = PARTICLE_GRAVITY,
                 drag: float = 0.92):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.color = color
        self.size = size
        self.lifetime = lifetime
        self.timer = lifetime
        self.gravity = gravity
        self.drag = drag

    @property
    def alive(self) -> bool:
        return self.timer > 0 and self.size > 0.2

    def update(self, dt: float):
        self.timer -= dt
        self.vy += self.gravity * dt
        self.vx *= self.drag
        self.vy *= self.drag
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.size = max(0.0, self.size * (1.0 - dt * 2.0))

    def draw(self, surface: pygame.Surface, offset=(0, 0)):
        if not self.alive:
            return
        alpha = int(255 * max(0.0, self.timer / self.lifetime))
        sz = max(1, int(self.size))
        ps = pygame.Surface((sz * 2, sz * 2), pygame.SRCALPHA)
        pygame.draw.circle(ps, (*self.color[:3], alpha), (sz, sz), sz)
        surface.blit(ps, (int(self.x - offset[0]) - sz,
                          int(self.y - offset[1]) - sz))


# ══════════════════════════════════════════════════════════
#  Ghost (roll trail snapshot)
# ══════════════════════════════════════════════════════════

class GhostEffect:
    """A frozen snapshot of the character that fades out and dies.

    Holds no reference back to whoever spawned it – only the appearance
    data copied at creation.
    """

    __slots__ = ("surface", "x", "y", "facing", "start_alpha",
                 "duration", "timer")

    def __init__(self, surface: pygame.Surface | None, x: float, y: float,
                 facing=None, start_alpha: float = GHOST_START_ALPHA,
                 duration: float = GHOST_FADE_DURATION):
        self.surface = surface
        self.x = x
        self.y = y
        self.facing = facing
        self.start_alpha = start_alpha
        self.duration = duration
        self.timer = duration

    @property
    def alive(self) -> bool:
        return self.timer > 0

    @property
    def progress(self) -> float:
        """0.0 → 1.0 over lifetime."""
        return 1.0 - max(0.0, self.timer / self.duration)

    @property
    def alpha(self) -> float:
        """Opacity in [0, 1], eased out toward zero."""
        remaining = 1.0 - self.progress
        return self.start_alpha * remaining * remaining

    def update(self, dt: float):
        self.timer -= dt

    def draw(self, surface: pygame.Surface, offset=(0, 0)):
        if not self.alive:
            return
        a = int(255 * self.alpha)
        sx = int(self.x - offset[0])
        sy = int(self.y - offset[1])
        if self.surface is not None:
            img = self.surface.copy()
            img.set_alpha(a)
            surface.blit(img, (sx - img.get_width() // 2,
                               sy - img.get_height()))
            return
        # No sprite: draw the character silhouette outline
        w, h = CHARACTER_SPRITE_SIZE
        ghost = pygame.Surface((w, h), pygame.SRCALPHA)
        points = [(w // 2, 0), (w - 1, h // 2), (w // 2, h - 1), (0, h // 2)]
        pygame.draw.polygon(ghost, (*GHOST_TINT, a), points, 2)
        surface.blit(ghost, (sx - w // 2, sy - h))


# ══════════════════════════════════════════════════════════
#  VFX Manager
# ══════════════════════════════════════════════════════════

class VFXSystem:
    """Central list of transient effects.

    Call ``update(dt)`` and ``draw(surface, offset)`` each frame.
    """

    def __init__(self, max_particles: int = PARTICLE_MAX_COUNT):
        self._ghosts: list[GhostEffect] = []
        self._particles: list[Particle] = []
        self.max_particles = max_particles

    @property
    def active_count(self) -> int:
        return len(self._ghosts) + len(self._particles)

    @property
    def ghosts(self) -> tuple[GhostEffect, ...]:
        return tuple(self._ghosts)

    # ── Spawners ──────────────────────────────────────────

    def spawn_ghost(self, surface: pygame.Surface | None, position,
                    facing=None) -> None:
        """Fire-and-forget fading snapshot at *position*.

        The surface is copied so later redraws of the live sprite leave
        the ghost untouched.
        """
        snapshot = surface.copy() if surface is not None else None
        self._ghosts.append(
            GhostEffect(snapshot, float(position[0]), float(position[1]), facing)
        )

    def spawn_dust(self, x: float, y: float, color: tuple,
                   count: int = DUST_PARTICLE_COUNT):
        """Small puff of ground-coloured dust kicked outward."""
        for _ in range(count):
            angle = random.uniform(0, math.pi * 2)
            speed = random.uniform(30, 90)
            self._add_particle(Particle(
                x, y,
                math.cos(angle) * speed,
                math.sin(angle) * speed * 0.5 - random.uniform(20, 60),
                color,
                size=random.uniform(1.5, 3.5),
                lifetime=random.uniform(0.25, 0.5),
            ))

    def _add_particle(self, particle: Particle):
        if len(self._particles) >= self.max_particles:
            self._particles.pop(0)
        self._particles.append(particle)

    # ── Per-frame ─────────────────────────────────────────

    def update(self, dt: float):
        for ghost in self._ghosts:
            ghost.update(dt)
        for p in self._particles:
            p.update(dt)
        self._ghosts = [g for g in self._ghosts if g.alive]
        self._particles = [p for p in self._particles if p.alive]

    def draw(self, surface: pygame.Surface, offset=(0, 0)):
        for ghost in self._ghosts:
            ghost.draw(surface, offset)
        for p in self._particles:
            p.draw(surface, offset)

    def clear(self):
        self._ghosts.clear()
        self._particles.clear()

"""arena_physics.py - Minimal collision resolver: keeps bodies inside the arena.

Stands in for a full physics engine. The controller only relies on
``resolve(position, velocity, dt) -> displacement``.
"""

import pygame


class ArenaPhysics:
    """Clamp movement to a rectangular arena, stopping the blocked axis."""

    def __init__(self, bounds: pygame.Rect, margin: int = 0):
        self.bounds = pygame.Rect(bounds).inflate(-2 * margin, -2 * margin)

    def resolve(self, position: pygame.Vector2, velocity: pygame.Vector2,
                dt: float) -> pygame.Vector2:
        """Return the displacement actually achieved this tick.

        Zeroes the velocity component that ran into a wall.
        """
        target = position + velocity * dt
        clamped = pygame.Vector2(
            min(max(target.x, self.bounds.left), self.bounds.right),
            min(max(target.y, self.bounds.top), self.bounds.bottom),
        )
        if clamped.x != target.x:
            velocity.x = 0
        if clamped.y != target.y:
            velocity.y = 0
        return clamped - position

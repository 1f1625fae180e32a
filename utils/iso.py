"""iso.py - 2:1 isometric projection helpers.

Pure functions only, so replays reproduce bit-for-bit.
"""

import pygame


def iso_project(direction) -> pygame.Vector2:
    """Project raw input onto the isometric ground plane.

    ``(x, y) -> (x - y, (x + y) * 0.5)``
    """
    x, y = direction[0], direction[1]
    return pygame.Vector2(x - y, (x + y) * 0.5)


def world_to_screen(pos, camera_offset=(0, 0), z: float = 0.0) -> tuple[int, int]:
    """World position (plus z lift) to integer screen coordinates."""
    return (
        int(pos[0] - camera_offset[0]),
        int(pos[1] - camera_offset[1] + z),
    )

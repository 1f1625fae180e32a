"""helpers.py - Reusable HUD drawing functions."""

import pygame
from settings import WHITE, FONT_SIZE, SMALL_FONT_SIZE


def draw_text(surface, text, x, y, color=WHITE, size=FONT_SIZE):
    """Render a single line of text at (x, y)."""
    font = pygame.font.SysFont(None, size)
    rendered = font.render(text, True, color)
    surface.blit(rendered, (x, y))


def format_snapshot(snapshot: dict) -> list[str]:
    """Turn a controller snapshot into ``key: value`` HUD lines."""
    lines = []
    for key, value in snapshot.items():
        if isinstance(value, bool):
            value = "yes" if value else "no"
        lines.append(f"{key}: {value}")
    return lines


def draw_debug_panel(surface, snapshot: dict, x: int, y: int,
                     color=WHITE, line_height: int = 16):
    """Draw the controller snapshot as a column of small text lines."""
    for i, line in enumerate(format_snapshot(snapshot)):
        draw_text(surface, line, x, y + i * line_height, color, SMALL_FONT_SIZE)

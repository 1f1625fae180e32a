"""stamina_bar.py - Smoothly animated stamina bar (display only)."""

import pygame
from settings import (
    WHITE, GRAY, SMALL_FONT_SIZE,
    STAMINABAR_WIDTH, STAMINABAR_HEIGHT, STAMINABAR_X, STAMINABAR_Y,
    STAMINABAR_COLOR, STAMINABAR_EXHAUSTED_COLOR,
)

_LERP_SPEED = 10.0     # per second
_FLASH_PERIOD = 0.4    # seconds – blink period while exhausted


class StaminaBar:
    """UI sink for the controller: ``set_value(value, maximum, exhausted)``.

    Reading is one-way; nothing here feeds back into the game.
    """

    def __init__(self, x: int = STAMINABAR_X, y: int = STAMINABAR_Y,
                 width: int = STAMINABAR_WIDTH, height: int = STAMINABAR_HEIGHT):
        self.rect = pygame.Rect(x, y, width, height)
        self.value = 0.0
        self.maximum = 1.0
        self.exhausted = False
        self.displayed = None   # smoothed value, snaps on first update
        self._timer = 0.0

    def set_value(self, value: float, maximum: float, exhausted: bool = False):
        self.value = value
        self.maximum = max(1e-6, maximum)
        self.exhausted = exhausted
        if self.displayed is None:
            self.displayed = value

    @property
    def fraction(self) -> float:
        if self.displayed is None:
            return 0.0
        return max(0.0, min(1.0, self.displayed / self.maximum))

    def update(self, dt: float):
        self._timer += dt
        if self.displayed is None:
            return
        step = min(1.0, _LERP_SPEED * dt)
        self.displayed += (self.value - self.displayed) * step

    def draw(self, surface: pygame.Surface):
        pygame.draw.rect(surface, GRAY, self.rect, border_radius=3)

        color = STAMINABAR_COLOR
        if self.exhausted and (self._timer % _FLASH_PERIOD) < _FLASH_PERIOD / 2:
            color = STAMINABAR_EXHAUSTED_COLOR
        fill_w = int(self.rect.width * self.fraction)
        if fill_w > 0:
            fill = pygame.Rect(self.rect.x, self.rect.y, fill_w, self.rect.height)
            pygame.draw.rect(surface, color, fill, border_radius=3)

        pygame.draw.rect(surface, WHITE, self.rect, width=1, border_radius=3)
        font = pygame.font.SysFont(None, SMALL_FONT_SIZE)
        label = font.render("Stamina", True, WHITE)
        surface.blit(label, (self.rect.x, self.rect.y - 16))

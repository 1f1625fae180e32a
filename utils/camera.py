"""
camera.py  –  Follow camera with pan offset and screen shake.

Rendering-only: the controller pushes its position and the pan input
here every tick and never reads anything back.
"""

from __future__ import annotations

import random

import pygame

from settings import (
    SCREEN_WIDTH, SCREEN_HEIGHT, CAMERA_FOLLOW_RATE, CAMERA_PAN_DISTANCE,
)


class Camera:
    """Smoothly follows a target, offset by the pan stick.

    Usage:
        camera.follow(player_pos, pan_vector, dt)   # each tick
        camera.shake(intensity=6, duration=0.15)    # on impact
        offset = camera.offset                      # top-left in world space
    """

    def __init__(self, view_size: tuple[int, int] = (SCREEN_WIDTH, SCREEN_HEIGHT),
                 follow_rate: float = CAMERA_FOLLOW_RATE,
                 pan_distance: float = CAMERA_PAN_DISTANCE):
        self.view_w, self.view_h = view_size
        self.follow_rate = follow_rate
        self.pan_distance = pan_distance
        self.center = pygame.Vector2()
        self._shake_timer = 0.0
        self._shake_intensity = 0
        self._shake_offset = (0, 0)

    def snap_to(self, target):
        self.center = pygame.Vector2(target)

    def follow(self, target, pan, dt: float):
        """Move toward *target* plus the pan offset."""
        pan = pygame.Vector2(pan)
        if pan.length_squared() > 1:
            pan = pan.normalize()
        goal = pygame.Vector2(target) + pan * self.pan_distance
        step = min(1.0, self.follow_rate * dt)
        self.center += (goal - self.center) * step

        if self._shake_timer > 0:
            self._shake_timer -= dt
            self._shake_offset = (
                random.randint(-self._shake_intensity, self._shake_intensity),
                random.randint(-self._shake_intensity, self._shake_intensity),
            )
        else:
            self._shake_offset = (0, 0)

    def shake(self, intensity: int = 5, duration: float = 0.15):
        """Start a new shake (overwrites any current one)."""
        self._shake_intensity = intensity
        self._shake_timer = duration

    @property
    def offset(self) -> tuple[float, float]:
        return (
            self.center.x - self.view_w / 2 + self._shake_offset[0],
            self.center.y - self.view_h / 2 + self._shake_offset[1],
        )

"""
terrain_color.py – Ground colour lookup for cosmetic particle tinting.

Samples a terrain surface at tile resolution and memoises the result per
tile, so repeated lookups while standing on the same tile are free.
Callers must work without it: it is an optional collaborator.
"""

from __future__ import annotations

import logging

import pygame

from settings import TILE_SIZE, DUST_DEFAULT_COLOR

logger = logging.getLogger(__name__)


class TerrainColorSampler:
    """``get_color_at(world_pos) -> (r, g, b)`` backed by a Surface."""

    def __init__(self, terrain: pygame.Surface, tile_size: int = TILE_SIZE,
                 fallback: tuple = DUST_DEFAULT_COLOR):
        self.terrain = terrain
        self.tile_size = max(1, tile_size)
        self.fallback = fallback
        self._cache: dict[tuple[int, int], tuple[int, int, int]] = {}

    def tile_of(self, world_pos) -> tuple[int, int]:
        return (int(world_pos[0] // self.tile_size),
                int(world_pos[1] // self.tile_size))

    def get_color_at(self, world_pos) -> tuple[int, int, int]:
        tile = self.tile_of(world_pos)
        color = self._cache.get(tile)
        if color is None:
            color = self._sample(tile)
            self._cache[tile] = color
        return color

    def _sample(self, tile: tuple[int, int]) -> tuple[int, int, int]:
        # Sample the tile centre
        half = self.tile_size // 2
        px = tile[0] * self.tile_size + half
        py = tile[1] * self.tile_size + half
        w, h = self.terrain.get_size()
        if not (0 <= px < w and 0 <= py < h):
            return self.fallback
        c = self.terrain.get_at((px, py))
        return (c.r, c.g, c.b)

    def invalidate(self):
        """Drop the cache after the terrain surface is repainted."""
        logger.debug("Terrain colour cache cleared (%d tiles)", len(self._cache))
        self._cache.clear()

    @property
    def cached_tiles(self) -> int:
        return len(self._cache)

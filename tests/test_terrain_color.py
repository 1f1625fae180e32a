"""
test_terrain_color.py
---------------------
Per-tile colour lookup, memoisation and dust tinting.
"""

import pygame
import pytest

from conftest import DT, frame
from entities.player_controller import PlayerController
from systems.terrain_color import TerrainColorSampler
from systems.vfx_system import VFXSystem

GRASS = (60, 140, 60)
SAND = (210, 190, 130)
FALLBACK = (9, 9, 9)


@pytest.fixture
def terrain():
    surf = pygame.Surface((64, 32))
    surf.fill(GRASS)
    surf.fill(SAND, pygame.Rect(32, 0, 32, 32))
    return surf


@pytest.fixture
def sampler(terrain):
    return TerrainColorSampler(terrain, tile_size=32, fallback=FALLBACK)


class TestTerrainColorSampler:

    def test_lookup_by_tile(self, sampler):
        assert sampler.get_color_at((5, 5)) == GRASS
        assert sampler.get_color_at((40, 20)) == SAND

    def test_tile_of(self, sampler):
        assert sampler.tile_of((31.9, 0)) == (0, 0)
        assert sampler.tile_of((32, 33)) == (1, 1)
        assert sampler.tile_of((-1, -1)) == (-1, -1)

    def test_out_of_bounds_uses_fallback(self, sampler):
        assert sampler.get_color_at((-10, 5)) == FALLBACK
        assert sampler.get_color_at((500, 500)) == FALLBACK

    def test_memoised_until_invalidated(self, sampler, terrain):
        assert sampler.get_color_at((5, 5)) == GRASS
        terrain.fill(SAND)
        assert sampler.get_color_at((10, 10)) == GRASS
        assert sampler.cached_tiles == 1

        sampler.invalidate()
        assert sampler.cached_tiles == 0
        assert sampler.get_color_at((10, 10)) == SAND


def test_roll_dust_uses_terrain_colour(stamina, sampler):
    vfx = VFXSystem()
    ctrl = PlayerController(position=(40, 10), stamina=stamina,
                            vfx=vfx, terrain=sampler)
    ctrl.tick(frame((1, 0)), DT)
    ctrl.tick(frame((1, 0), roll=True), DT)
    colors = {p.color for p in vfx._particles}
    assert colors == {SAND}

"""
conftest.py
-----------
Shared pytest configuration and fixtures for the controller tests.

Contains:
- Headless SDL setup so pygame never opens a window or audio device
- Builders for controllers wired to recording collaborators
- Input frame helpers
"""

import os
import sys

# Must be set before pygame is imported anywhere
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pygame
import pytest

from entities.character_state import InputFrame
from entities.player_controller import PlayerController
from systems.hit_reception import Hurtbox
from systems.stamina_system import StaminaComponent
from systems.vfx_system import VFXSystem

DT = 1.0 / 60.0


# ===========================================================
# Recording collaborators
# ===========================================================


class RecordingUI:
    """UI sink that remembers every value pushed to it."""

    def __init__(self):
        self.values = []

    def set_value(self, value, maximum, exhausted=False):
        self.values.append((value, maximum, exhausted))


class RecordingCamera:
    def __init__(self):
        self.follows = []
        self.shakes = []

    def follow(self, target, pan, dt):
        self.follows.append((pygame.Vector2(target), pygame.Vector2(pan)))

    def shake(self, intensity, duration):
        self.shakes.append((intensity, duration))


# ===========================================================
# Helpers
# ===========================================================


def frame(move=(0, 0), **actions) -> InputFrame:
    """Build an InputFrame; keyword flags map to action fields."""
    return InputFrame(move=pygame.Vector2(move), **actions)


def run_ticks(controller, input_frame, count, dt=DT):
    for _ in range(count):
        controller.tick(input_frame, dt)


# ===========================================================
# Fixtures
# ===========================================================


@pytest.fixture(scope="session", autouse=True)
def pygame_headless():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def stamina():
    return StaminaComponent(
        max_stamina=100.0,
        costs={"sprint": 25.0, "jump": 20.0, "roll": 15.0},
        regen_rate=20.0,
    )


@pytest.fixture
def ui():
    return RecordingUI()


@pytest.fixture
def camera():
    return RecordingCamera()


@pytest.fixture
def vfx():
    return VFXSystem()


@pytest.fixture
def hurtbox():
    return Hurtbox()


@pytest.fixture
def controller(stamina, ui, camera, vfx, hurtbox):
    """Controller with every optional collaborator wired, no physics."""
    return PlayerController(
        position=(100, 100),
        stamina=stamina,
        hurtbox=hurtbox,
        ui=ui,
        camera=camera,
        vfx=vfx,
    )


@pytest.fixture
def bare_controller(stamina):
    """Controller with no optional collaborators at all."""
    return PlayerController(position=(0, 0), stamina=stamina)


# Pytest configuration
def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


def pytest_collection_modifyitems(config, items):
    """Tag tests automatically by location."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)

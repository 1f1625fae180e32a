"""
test_keybinds.py
----------------
Input sampling, rebinding and controls.json persistence.
"""

import json

import pygame
import pytest

import keybinds
from keybinds import InputSampler, find_conflicts, rebind


class FakeKeys:
    """Stand-in for pygame.key.get_pressed()."""

    def __init__(self, *down):
        self.down = set(down)

    def __getitem__(self, key):
        return key in self.down


@pytest.fixture
def bindings():
    return dict(keybinds._DEFAULT_KEYS)


@pytest.fixture
def controls_file(tmp_path, monkeypatch):
    path = tmp_path / "controls.json"
    monkeypatch.setattr(keybinds, "_CONTROLS_PATH", str(path))
    saved = dict(keybinds.PLAYER_KEYS)
    yield path
    keybinds.PLAYER_KEYS.clear()
    keybinds.PLAYER_KEYS.update(saved)


class TestInputSampler:

    def test_move_axes(self, bindings):
        sampler = InputSampler(bindings)
        f = sampler.sample(FakeKeys(pygame.K_d))
        assert f.move == pygame.Vector2(1, 0)
        f = sampler.sample(FakeKeys(pygame.K_a, pygame.K_d))
        assert f.move == pygame.Vector2(0, 0)

    def test_diagonal_is_normalised(self, bindings):
        f = InputSampler(bindings).sample(FakeKeys(pygame.K_w, pygame.K_d))
        assert f.move.length() == pytest.approx(1.0)
        assert f.move.x > 0 and f.move.y < 0

    def test_pan_is_separate_from_move(self, bindings):
        f = InputSampler(bindings).sample(FakeKeys(pygame.K_DOWN))
        assert f.pan == pygame.Vector2(0, 1)
        assert f.move == pygame.Vector2()

    def test_discrete_actions_fire_once_per_press(self, bindings):
        sampler = InputSampler(bindings)
        held = FakeKeys(pygame.K_SPACE, pygame.K_LCTRL, pygame.K_j)
        first = sampler.sample(held)
        assert (first.jump, first.roll, first.attack) == (True, True, True)
        second = sampler.sample(held)
        assert (second.jump, second.roll, second.attack) == (False, False, False)

        sampler.sample(FakeKeys())
        again = sampler.sample(FakeKeys(pygame.K_LCTRL))
        assert again.roll is True

    def test_held_actions(self, bindings):
        sampler = InputSampler(bindings)
        keys = FakeKeys(pygame.K_LSHIFT, pygame.K_k)
        for _ in range(3):
            f = sampler.sample(keys)
            assert f.sprint is True
            assert f.block is True


class TestRebinding:

    def test_defaults_have_no_conflicts(self, bindings):
        assert find_conflicts(bindings) == []

    def test_find_conflicts(self, bindings):
        bindings["roll"] = pygame.K_SPACE
        conflicts = find_conflicts(bindings)
        assert conflicts == [("jump", "roll", pygame.K_SPACE)]

    def test_rebind_refuses_taken_key(self, bindings):
        assert rebind("roll", pygame.K_SPACE, bindings) == "jump"
        assert bindings["roll"] == pygame.K_LCTRL

    def test_rebind_free_key(self, bindings):
        assert rebind("roll", pygame.K_l, bindings) is None
        assert bindings["roll"] == pygame.K_l
        f = InputSampler(bindings).sample(FakeKeys(pygame.K_l))
        assert f.roll is True


class TestPersistence:

    def test_save_then_load(self, controls_file):
        keybinds.PLAYER_KEYS["roll"] = pygame.K_l
        keybinds.save_keybinds()
        assert json.loads(controls_file.read_text())["player"]["roll"] == pygame.K_l

        keybinds.PLAYER_KEYS["roll"] = pygame.K_LCTRL
        keybinds.load_keybinds()
        assert keybinds.PLAYER_KEYS["roll"] == pygame.K_l

    def test_missing_entries_fall_back_to_defaults(self, controls_file):
        controls_file.write_text(json.dumps({"player": {"jump": pygame.K_z,
                                                        "roll": "nope"}}))
        keybinds.load_keybinds()
        assert keybinds.PLAYER_KEYS["jump"] == pygame.K_z
        assert keybinds.PLAYER_KEYS["roll"] == pygame.K_LCTRL
        assert keybinds.PLAYER_KEYS["sprint"] == pygame.K_LSHIFT

    def test_corrupt_file_keeps_current_bindings(self, controls_file, caplog):
        controls_file.write_text("{not json")
        before = dict(keybinds.PLAYER_KEYS)
        keybinds.load_keybinds()
        assert keybinds.PLAYER_KEYS == before
        assert "Could not read" in caplog.text

    def test_reset_restores_defaults(self, controls_file):
        keybinds.PLAYER_KEYS["jump"] = pygame.K_z
        keybinds.reset_keybinds()
        assert keybinds.PLAYER_KEYS == keybinds._DEFAULT_KEYS
        assert controls_file.exists()

"""
test_hit_reception.py
---------------------
Hurtbox detection, i-frame discards, damage and knockback override.
"""

import pygame
import pytest

from conftest import DT, frame
from entities.character_state import ActionMode, CharacterState
from systems.hit_reception import DamageZone, HitEvent, Hurtbox, apply_hit


class TestApplyHit:

    def test_damage_and_knockback_override(self):
        state = CharacterState(health=50, velocity=pygame.Vector2(200, 0))
        landed = apply_hit(state, HitEvent(10, pygame.Vector2(0, -300)))
        assert landed is True
        assert state.health == 40
        assert state.velocity == pygame.Vector2(0, -300)

    def test_knockback_is_copied(self):
        knock = pygame.Vector2(5, 5)
        state = CharacterState()
        apply_hit(state, HitEvent(1, knock))
        state.velocity.x = 99
        assert knock == pygame.Vector2(5, 5)

    def test_discarded_while_invincible(self):
        state = CharacterState(health=50, invincible=True,
                               velocity=pygame.Vector2(1, 2))
        assert apply_hit(state, HitEvent(10, pygame.Vector2(9, 9))) is False
        assert state.health == 50
        assert state.velocity == pygame.Vector2(1, 2)

    def test_repeated_hits_all_land(self):
        state = CharacterState(health=50)
        for _ in range(3):
            assert apply_hit(state, HitEvent(5)) is True
        assert state.health == 35

    def test_overkill_goes_below_zero(self):
        state = CharacterState(health=5)
        apply_hit(state, HitEvent(10))
        assert state.health == -5


class TestControllerHits:

    def test_rolling_character_takes_no_damage(self, controller, hurtbox):
        controller.tick(frame((1, 0)), DT)
        controller.tick(frame((1, 0), roll=True), DT)
        assert controller.mode == ActionMode.ROLL
        health = controller.state.health

        for _ in range(5):
            hurtbox.push(HitEvent(20, pygame.Vector2(0, 500)))
            controller.tick(frame(), DT)
            assert controller.state.health == health
        assert controller.mode == ActionMode.ROLL

    def test_multiple_hits_in_one_tick_apply_in_order(self, controller, hurtbox):
        hurtbox.push(HitEvent(3, pygame.Vector2(10, 0)))
        hurtbox.push(HitEvent(4, pygame.Vector2(0, 20)))
        hurtbox.push(HitEvent(5, pygame.Vector2(-30, 0)))
        controller.tick(frame(), DT)
        assert controller.state.health == controller.state.max_health - 12
        assert controller.state.velocity == pygame.Vector2(-30, 0)
        assert hurtbox.pending == 0

    def test_identical_events_are_not_deduplicated(self, controller, hurtbox):
        event = HitEvent(7, pygame.Vector2(1, 0))
        hurtbox.push(event)
        hurtbox.push(event)
        controller.tick(frame(), DT)
        assert controller.state.health == controller.state.max_health - 14

    def test_knockback_moves_the_character_that_tick(self, controller, hurtbox):
        start = pygame.Vector2(controller.position)
        hurtbox.push(HitEvent(1, pygame.Vector2(600, 0)))
        controller.tick(frame(), DT)
        assert controller.position.x == pytest.approx(start.x + 600 * DT)

    def test_explicit_grant_discards_then_expires(self, controller):
        controller.grant_invincibility(0.05)
        assert controller.receive_hit(HitEvent(10)) is False
        for _ in range(5):
            controller.tick(frame(), DT)
        assert controller.receive_hit(HitEvent(10)) is True
        assert controller.state.health == controller.state.max_health - 10

    def test_camera_shakes_only_on_landed_hits(self, controller, camera):
        controller.state.invincible = True
        controller.receive_hit(HitEvent(10))
        assert camera.shakes == []
        controller.state.invincible = False
        controller.receive_hit(HitEvent(10))
        assert len(camera.shakes) == 1

    def test_lethal_hit_clears_alive(self, controller):
        controller.receive_hit(HitEvent(controller.state.max_health + 10))
        assert controller.state.health == -10
        assert controller.alive is False

    def test_hits_resolve_without_hurtbox(self, bare_controller):
        assert bare_controller.receive_hit(HitEvent(10)) is True
        bare_controller.tick(frame(), DT)
        assert bare_controller.state.health == bare_controller.state.max_health - 10


class TestHurtbox:

    @pytest.fixture
    def zone(self):
        return DamageZone(pygame.Rect(100, 100, 40, 40), damage=8, knockback=200.0)

    def test_scan_emits_once_per_overlap(self, hurtbox, zone):
        assert hurtbox.scan(pygame.Vector2(110, 120), [zone]) == 1
        assert hurtbox.scan(pygame.Vector2(112, 120), [zone]) == 0
        assert hurtbox.scan(pygame.Vector2(400, 400), [zone]) == 0
        assert hurtbox.scan(pygame.Vector2(110, 120), [zone]) == 1
        assert hurtbox.pending == 2

    def test_each_zone_reports_separately(self, hurtbox, zone):
        other = DamageZone(pygame.Rect(90, 110, 40, 40), damage=3)
        assert hurtbox.scan(pygame.Vector2(115, 125), [zone, other]) == 2
        damages = [e.damage for e in hurtbox.drain()]
        assert damages == [8, 3]

    def test_knockback_points_away_from_zone(self, hurtbox, zone):
        hurtbox.scan(pygame.Vector2(105, 120), [zone])
        event = hurtbox.drain()[0]
        assert event.knockback.x < 0
        assert event.knockback.length() == pytest.approx(200.0)

    def test_knockback_at_exact_centre_is_defined(self, zone):
        knock = zone.knockback_toward(pygame.Vector2(zone.rect.center))
        assert knock.length() == pytest.approx(200.0)

    def test_drain_empties_queue(self, hurtbox):
        hurtbox.push(HitEvent(1))
        assert len(hurtbox.drain()) == 1
        assert hurtbox.drain() == []

"""
main.py - Entry point for the isometric action controller demo.

Integrates all systems:
- Player action state machine (entities/player_controller.py)
- Stamina economy (systems/stamina_system.py)
- Dodge roll + ghost trail (systems/roll_system.py, systems/vfx_system.py)
- Jump arc + walk bob (systems/vertical_motion.py)
- Hurtbox → hit reception (systems/hit_reception.py)
- Arena physics, stamina bar, terrain tint, follow camera

Run:  python main.py
"""
VERSION = "1.0.0"

import logging
import random
import sys

import pygame

logger = logging.getLogger(__name__)

# ── Project imports ───────────────────────────────────────
from settings import (
    SCREEN_WIDTH, SCREEN_HEIGHT, FPS, TITLE, BG_COLOR, WHITE,
    PHYSICS_DT, MAX_FRAME_TIME,
    ARENA_WIDTH, ARENA_HEIGHT, TILE_SIZE,
    GRASS, DIRT, SAND, RED, CYAN, BLUE,
    CHARACTER_SPRITE_SIZE,
)
from entities.player_controller import PlayerController
from entities.character_state import ActionMode, Facing
from keybinds import InputSampler, save_keybinds
from systems import (
    ArenaPhysics, DamageZone, Hurtbox, StaminaBar,
    TerrainColorSampler, VFXSystem,
)
from utils import Camera, draw_debug_panel, draw_text, world_to_screen


# ══════════════════════════════════════════════════════════
#  World building
# ══════════════════════════════════════════════════════════

def build_terrain(width: int = ARENA_WIDTH, height: int = ARENA_HEIGHT,
                  seed: int = 7) -> pygame.Surface:
    """Paint a grass field with dirt and sand patches on a 2:1 tile grid."""
    rng = random.Random(seed)
    terrain = pygame.Surface((width, height))
    terrain.fill(GRASS)

    for color, count in ((DIRT, 10), (SAND, 6)):
        for _ in range(count):
            cx = rng.randrange(0, width)
            cy = rng.randrange(0, height)
            rx = rng.randrange(60, 180)
            pygame.draw.ellipse(terrain, color,
                                pygame.Rect(cx - rx, cy - rx // 2, rx * 2, rx))

    # Isometric grid lines (2:1 slope)
    line = (0, 0, 0)
    step = TILE_SIZE * 2
    for x in range(-height * 2, width + height * 2, step):
        pygame.draw.line(terrain, line, (x, 0), (x + height * 2, height), 1)
        pygame.draw.line(terrain, line, (x, 0), (x - height * 2, height), 1)
    return terrain


def build_character_sprite(color=BLUE) -> pygame.Surface:
    """Simple diamond body with a lighter head, drawn procedurally."""
    w, h = CHARACTER_SPRITE_SIZE
    surf = pygame.Surface((w, h), pygame.SRCALPHA)
    light = tuple(min(255, c + 60) for c in color)
    body = [(w // 2, h // 3), (w - 2, h * 2 // 3), (w // 2, h - 1), (2, h * 2 // 3)]
    pygame.draw.polygon(surf, color, body)
    pygame.draw.circle(surf, light, (w // 2, h // 4), w // 4)
    return surf


def build_hazards() -> list[DamageZone]:
    return [
        DamageZone(pygame.Rect(500, 300, 120, 60)),
        DamageZone(pygame.Rect(1000, 650, 160, 80), damage=15),
        DamageZone(pygame.Rect(300, 750, 90, 90)),
    ]


_FACING_FLIP = {Facing.WEST: True, Facing.NORTH: True}


# ══════════════════════════════════════════════════════════
#  GAME CLASS
# ══════════════════════════════════════════════════════════

class Game:
    """Top-level demo.  Owns the loop, events, and rendering."""

    def __init__(self):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.running = True
        self.show_debug = True

        self.terrain = build_terrain()
        self.sprite = build_character_sprite()
        self.hazards = build_hazards()
        self.sampler = InputSampler()
        self._accumulator = 0.0
        self._reset()

    def _reset(self):
        """(Re)build the controller and its collaborators."""
        self.vfx = VFXSystem()
        self.camera = Camera()
        self.stamina_bar = StaminaBar()
        self.hurtbox = Hurtbox()
        self.player = PlayerController(
            physics=ArenaPhysics(pygame.Rect(0, 0, ARENA_WIDTH, ARENA_HEIGHT), margin=16),
            hurtbox=self.hurtbox,
            ui=self.stamina_bar,
            camera=self.camera,
            vfx=self.vfx,
            terrain=TerrainColorSampler(self.terrain),
        )
        self.player.appearance = self.sprite
        self.camera.snap_to(self.player.position)
        logger.info("Demo reset (v%s)", VERSION)

    # ── Main loop ─────────────────────────────────────────

    def run(self):
        """Start the game loop."""
        while self.running:
            frame_time = min(self.clock.tick(FPS) / 1000.0, MAX_FRAME_TIME)
            self._handle_events()
            self._accumulator += frame_time
            while self._accumulator >= PHYSICS_DT:
                self._fixed_update(PHYSICS_DT)
                self._accumulator -= PHYSICS_DT
            self._frame_update(frame_time)
            self._draw()

        save_keybinds()
        pygame.quit()
        sys.exit()

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self._reset()
                elif event.key == pygame.K_F3:
                    self.show_debug = not self.show_debug

    def _fixed_update(self, dt: float):
        frame = self.sampler.sample(pygame.key.get_pressed())
        self.player.appearance = self._oriented_sprite()
        self.player.tick(frame, dt)
        # Detector runs after physics; its events are drained next tick
        self.hurtbox.scan(self.player.position, self.hazards)

    def _frame_update(self, dt: float):
        self.vfx.update(dt)
        self.stamina_bar.update(dt)

    def _oriented_sprite(self) -> pygame.Surface:
        flip = _FACING_FLIP.get(self.player.state.facing, False)
        return pygame.transform.flip(self.sprite, flip, False) if flip else self.sprite

    # ── Drawing ───────────────────────────────────────────

    def _draw(self):
        """Render everything to the screen."""
        self.screen.fill(BG_COLOR)
        offset = self.camera.offset
        self.screen.blit(self.terrain, (-int(offset[0]), -int(offset[1])))

        for zone in self.hazards:
            r = zone.rect.move(-int(offset[0]), -int(offset[1]))
            pygame.draw.rect(self.screen, RED, r, 2)

        self.vfx.draw(self.screen, offset)
        self._draw_player(offset)

        self.stamina_bar.draw(self.screen)
        draw_text(self.screen, f"HP {self.player.state.health}", 240, 18, WHITE)
        if self.show_debug:
            draw_debug_panel(self.screen, self.player.snapshot(),
                             SCREEN_WIDTH - 170, 12, CYAN)
        pygame.display.flip()

    def _draw_player(self, offset):
        player = self.player
        x, y = world_to_screen(player.position, offset)

        # Shadow stays on the ground
        shadow = pygame.Surface((30, 10), pygame.SRCALPHA)
        pygame.draw.ellipse(shadow, (0, 0, 0, 90), shadow.get_rect())
        self.screen.blit(shadow, (x - 15, y - 5))

        sprite = self._oriented_sprite()
        if player.mode == ActionMode.ROLL:
            sprite = sprite.copy()
            sprite.set_alpha(170)
        lift = int(player.visual_offset)
        self.screen.blit(sprite, (x - sprite.get_width() // 2,
                                  y - sprite.get_height() + lift))


# ── Run ───────────────────────────────────────────────────
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    Game().run()

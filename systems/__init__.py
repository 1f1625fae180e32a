"""systems package – Stamina, vertical motion, roll, hit reception, VFX, arena physics, stamina bar, terrain colour."""

from .stamina_system import StaminaComponent
from .vertical_motion import VerticalMotion, BobAnimator, MotionConfig
from .roll_system import RollSystem, RollConfig
from .hit_reception import HitEvent, Hurtbox, DamageZone, apply_hit
from .vfx_system import VFXSystem, GhostEffect, Particle
from .arena_physics import ArenaPhysics
from .stamina_bar import StaminaBar
from .terrain_color import TerrainColorSampler

"""utils package – Isometric projection, camera, and HUD helpers."""

from .iso import iso_project, world_to_screen
from .camera import Camera
from .helpers import draw_text, draw_debug_panel, format_snapshot

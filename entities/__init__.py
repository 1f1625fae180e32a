"""entities package – Character data model and the player action controller.

``PlayerController`` lives in ``entities.player_controller``; it is not
re-exported here because the systems it drives import this package's
data model.
"""

from .character_state import (
    ActionMode, CharacterState, Facing, InputFrame, facing_from_input,
)

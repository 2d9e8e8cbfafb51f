"""Action system: player intents and bump-to-attack movement."""

from delve.actions.base import MeleeIntent, MoveIntent
from delve.actions.move import PlayerMoveAction

__all__ = ["MeleeIntent", "MoveIntent", "PlayerMoveAction"]

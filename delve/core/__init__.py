"""Core data models and dungeon representation."""

from delve.core.enums import AIState, Domain, SessionStatus, TileKind
from delve.core.models import CombatStats, Entity, Rect, Vector2, Viewshed
from delve.core.grid import Grid
from delve.core.world_state import MissingPlayerError, WorldState
from delve.core.snapshot import Snapshot

__all__ = [
    "AIState",
    "CombatStats",
    "Domain",
    "Entity",
    "Grid",
    "MissingPlayerError",
    "Rect",
    "SessionStatus",
    "Snapshot",
    "TileKind",
    "Vector2",
    "Viewshed",
    "WorldState",
]

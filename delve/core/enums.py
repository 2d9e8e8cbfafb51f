"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class AIState(IntEnum):
    """Finite-state-machine states for monster AI."""

    IDLE = 0
    PURSUING = 1
    ATTACKING = 2


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0


@unique
class TileKind(IntEnum):
    """Cell kinds on the grid."""

    FLOOR = 0
    WALL = 1


@unique
class SessionStatus(IntEnum):
    """Lifecycle of a simulation session as seen by the outer frame."""

    PLAYING = 0
    PLAYER_DEFEATED = 1

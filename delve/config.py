"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for a simulation session."""

    # World
    world_seed: int = 42
    grid_cols: int = 64
    grid_rows: int = 48

    # Dungeon generation
    max_rooms: int = 20
    room_min_size: int = 6
    room_max_size: int = 10    # exclusive

    # Timing (fixed step, simulated seconds)
    max_ticks: int = 50000
    tick_seconds: float = 0.05
    monster_interval_seconds: float = 0.5

    # Vision
    vision_range: int = 8

    # Player
    player_max_hp: int = 30
    player_defense: int = 2
    player_power: int = 5

    # Monsters
    monster_max_hp: int = 16
    monster_defense: int = 1
    monster_power: int = 3

    # Pathfinding
    orthogonal_cost: float = 1.0
    diagonal_cost: float = 1.45    # above sqrt(2) so ties prefer straight moves
    melee_range: float = 1.5

    # Input
    input_queue_size: int = 16    # pending player intents; 0 = unbounded

    # Logging
    log_level: str = "INFO"
    event_log_size: int = 500

"""Engine systems: RNG, dungeon generation, occupancy, field of view."""

from delve.systems.rng import DeterministicRNG
from delve.systems.dungeon import build_level, generate, populate
from delve.systems.occupancy import index_actors
from delve.systems.visibility import field_of_view, update_viewsheds

__all__ = [
    "DeterministicRNG",
    "build_level",
    "field_of_view",
    "generate",
    "index_actors",
    "populate",
    "update_viewsheds",
]

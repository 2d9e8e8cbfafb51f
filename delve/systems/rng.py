"""Keyed random draws for level generation.

A draw is addressed by ``(domain, key, slot)`` under a world seed, e.g.
``(MAP_GEN, attempt, _SLOT_W)`` for a room width. Two generators with the
same seed agree on every address, and reading one address never shifts
another, so adding a new kind of draw cannot reshuffle existing maps.
"""

from __future__ import annotations

import struct

import xxhash

from delve.core.enums import Domain

_ADDRESS = struct.Struct("<IqI")
_SEED_MASK = (1 << 64) - 1
_UNIT = 1.0 / (1 << 64)


class DeterministicRNG:
    """Stateless generator: every method is a pure function of the address."""

    __slots__ = ("_seed", "_hash_seed")

    def __init__(self, seed: int) -> None:
        self._seed = seed
        # xxh3 takes an unsigned 64-bit seed; negative world seeds wrap
        self._hash_seed = seed & _SEED_MASK

    @property
    def seed(self) -> int:
        return self._seed

    def raw(self, domain: Domain, key: int, slot: int) -> int:
        """The unsigned 64-bit hash behind the address."""
        payload = _ADDRESS.pack(int(domain), key, slot)
        return xxhash.xxh3_64_intdigest(payload, seed=self._hash_seed)

    def next_float(self, domain: Domain, key: int, slot: int) -> float:
        """Uniform in [0.0, 1.0)."""
        return min(self.raw(domain, key, slot) * _UNIT, 1.0 - 2 ** -53)

    def next_int(self, domain: Domain, key: int, slot: int, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends included."""
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")
        return low + int(self.next_float(domain, key, slot) * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, slot: int, probability: float = 0.5) -> bool:
        """True with *probability*; used for corridor orientation."""
        return self.next_float(domain, key, slot) < probability

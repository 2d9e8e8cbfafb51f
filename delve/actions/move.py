"""Player movement — validates and applies one movement intent per tick.

A move into a free cell relocates the player. A move into a blocked cell
turns into a melee intent against every combat-capable occupant
(bump-to-attack); occupants without combat stats are plain obstacles.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.actions.base import MeleeIntent, MoveIntent

if TYPE_CHECKING:
    from delve.core.world_state import WorldState

logger = logging.getLogger(__name__)


class PlayerMoveAction:
    """Stateless handler for player MOVE intents."""

    @staticmethod
    def apply(intent: MoveIntent | None, world: WorldState) -> list[MeleeIntent]:
        """Move the player or produce bump-to-attack intents.

        Returns the melee intents generated (empty when the player moved,
        stood still, or hit a wall).
        """
        if intent is None:
            return []

        if not intent.valid:
            logger.warning("Tick %d: dropping malformed movement intent %r", world.tick, intent)
            return []

        player = world.player()
        grid = world.grid
        target = player.pos + intent.delta
        if not grid.in_bounds(target):
            logger.debug("Tick %d: player move to %s out of bounds", world.tick, target)
            return []

        idx = grid.pos_to_index(target)
        if not grid.blocked[idx]:
            world.move_entity(player.id, target)
            return []

        intents: list[MeleeIntent] = []
        for occupant_id in grid.tile_content[idx]:
            occupant = world.entities.get(occupant_id)
            if occupant is None or occupant.stats is None or occupant_id == player.id:
                continue
            intents.append(MeleeIntent(attacker_id=player.id, target_id=occupant_id))

        if not intents:
            logger.debug("Tick %d: player blocked at %s", world.tick, target)
        return intents

"""MonsterBrain — pursuit/attack state machine for non-player actors.

State machine (evaluated each time the monster timer fires):
  * -> ATTACKING  player visible and within melee range: melee intent, no move
  * -> PURSUING   player visible but farther: one A* step toward the player
  * -> IDLE       player not visible: stay put

Monsters are evaluated in handle order. A monster that commits to a step
claims the destination cell in ``blocked`` at once, so monsters evaluated
later in the same pass route around it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.actions.base import MeleeIntent
from delve.ai.pathfinding import Pathfinder
from delve.core.enums import AIState

if TYPE_CHECKING:
    from delve.config import SimulationConfig
    from delve.core.models import Entity
    from delve.core.world_state import WorldState

logger = logging.getLogger(__name__)


class MonsterBrain:
    """Decides and applies one AI step for every monster."""

    __slots__ = ("_config",)

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config

    def think(self, world: WorldState) -> list[MeleeIntent]:
        """Run one AI pass. Returns the melee intents produced."""
        player = world.player()
        pathfinder = Pathfinder(
            world.grid,
            orthogonal_cost=self._config.orthogonal_cost,
            diagonal_cost=self._config.diagonal_cost,
        )

        intents: list[MeleeIntent] = []
        for monster in list(world.monsters()):
            if not monster.alive:
                continue
            intent = self._decide(monster, player, world, pathfinder)
            if intent is not None:
                intents.append(intent)
        return intents

    def _decide(
        self,
        monster: Entity,
        player: Entity,
        world: WorldState,
        pathfinder: Pathfinder,
    ) -> MeleeIntent | None:
        viewshed = monster.viewshed
        if viewshed is None or player.pos not in viewshed.visible_tiles:
            monster.ai_state = AIState.IDLE
            # If the monster cannot see the player, the player cannot see it either
            if monster.shown:
                monster.mark_dirty()
            return None

        if monster.pos.distance(player.pos) < self._config.melee_range:
            monster.ai_state = AIState.ATTACKING
            return MeleeIntent(attacker_id=monster.id, target_id=player.id)

        monster.ai_state = AIState.PURSUING
        grid = world.grid
        path = pathfinder.find_path(grid.pos_to_index(monster.pos), grid.pos_to_index(player.pos))
        if path.success and len(path.steps) > 1:
            next_idx = path.steps[1]
            world.move_entity(monster.id, grid.index_to_pos(next_idx))
            grid.blocked[next_idx] = True
            logger.debug("Tick %d: %s steps to %s", world.tick, monster.name, monster.pos)
        return None

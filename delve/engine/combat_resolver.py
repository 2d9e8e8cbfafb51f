"""Melee resolution: damage aggregation, application, and the death sweep.

All melee intents of a tick are resolved together. Damage from several
attackers on the same target is summed and subtracted in one mutation,
so no stage ever observes a partially damaged target.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from delve.actions.base import MeleeIntent
    from delve.core.models import Entity
    from delve.core.world_state import WorldState

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CombatReport:
    """What happened in one resolution pass, for the event feed."""

    damage: dict[int, int] = field(default_factory=dict)
    harmless: list[tuple[int, int]] = field(default_factory=list)
    dropped: int = 0
    dead: list[Entity] = field(default_factory=list)
    player_defeated: bool = False


class CombatResolver:
    """Turns a tick's melee intents into HP changes and removals."""

    __slots__ = ()

    def resolve(self, intents: list[MeleeIntent], world: WorldState) -> CombatReport:
        report = CombatReport()
        pending = self.collect_damage(intents, world, report)
        self.apply_damage(pending, world, report)
        self.delete_the_dead(world, report)
        return report

    # -- stages --

    @staticmethod
    def collect_damage(
        intents: list[MeleeIntent],
        world: WorldState,
        report: CombatReport | None = None,
    ) -> dict[int, list[int]]:
        """Build the pending-damage map: target id -> damage amounts."""
        pending: dict[int, list[int]] = {}
        for intent in intents:
            attacker = world.entities.get(intent.attacker_id)
            target = world.entities.get(intent.target_id)
            if (
                attacker is None or target is None
                or attacker.stats is None or target.stats is None
                or not attacker.alive or not target.alive
            ):
                logger.debug("Tick %d: dropping stale %r", world.tick, intent)
                if report is not None:
                    report.dropped += 1
                continue

            damage = max(0, attacker.stats.power - target.stats.defense)
            if damage > 0:
                pending.setdefault(target.id, []).append(damage)
            else:
                logger.info("Tick %d: %s is unable to hurt %s", world.tick, attacker.name, target.name)
                if report is not None:
                    report.harmless.append((attacker.id, target.id))
        return pending

    @staticmethod
    def apply_damage(
        pending: dict[int, list[int]],
        world: WorldState,
        report: CombatReport | None = None,
    ) -> None:
        """Subtract each target's summed damage in a single mutation."""
        for target_id, amounts in pending.items():
            target = world.entities.get(target_id)
            if target is None or target.stats is None:
                continue
            total = sum(amounts)
            target.stats.hp -= total
            logger.info(
                "Tick %d: %s is damaged for %d hp [HP: %d/%d]",
                world.tick, target.name, total, max(target.stats.hp, 0), target.stats.max_hp,
            )
            if report is not None:
                report.damage[target_id] = total

    @staticmethod
    def delete_the_dead(world: WorldState, report: CombatReport | None = None) -> list[Entity]:
        """Remove every actor at or below zero HP from the directory."""
        dead_ids = [
            eid for eid in sorted(world.entities)
            if world.entities[eid].stats is not None and world.entities[eid].stats.hp <= 0
        ]
        removed: list[Entity] = []
        for eid in dead_ids:
            entity = world.remove_entity(eid)
            if entity is None:
                continue
            removed.append(entity)
            if entity.is_player:
                logger.info("Tick %d: %s has been defeated", world.tick, entity.name)
            else:
                logger.info("Tick %d: %s dies", world.tick, entity.name)

        if report is not None:
            report.dead.extend(removed)
            report.player_defeated = report.player_defeated or any(e.is_player for e in removed)
        return removed

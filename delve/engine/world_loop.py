"""WorldLoop — the authoritative fixed-step tick engine.

Stage order within a tick:
  1. Occupancy — rebuild ``blocked`` and ``tile_content``
  2. Player movement — apply this tick's input intent (may bump-to-attack)
  3. Visibility — recompute dirty viewsheds, refresh revealed/visible
  4. Monster AI — on the monster timer: attack or take one path step
  5. Combat — aggregate melee intents, apply damage, sweep the dead
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from delve.actions.move import PlayerMoveAction
from delve.ai.brain import MonsterBrain
from delve.core.snapshot import Snapshot
from delve.engine.action_queue import InputQueue
from delve.engine.combat_resolver import CombatReport, CombatResolver
from delve.systems.occupancy import index_actors
from delve.systems.visibility import update_viewsheds
from delve.utils.event_log import SimEvent

if TYPE_CHECKING:
    from delve.actions.base import MeleeIntent, MoveIntent
    from delve.config import SimulationConfig
    from delve.core.world_state import WorldState

logger = logging.getLogger(__name__)


class RepeatingTimer:
    """Fires once every *interval* of accumulated time, keeping the remainder."""

    __slots__ = ("interval", "_elapsed")

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval}")
        self.interval = interval
        self._elapsed = 0.0

    def tick(self, delta: float) -> bool:
        self._elapsed += delta
        # Tolerance keeps fixed steps like 10 x 0.05 from missing 0.5
        if self._elapsed + 1e-9 >= self.interval:
            self._elapsed = max(0.0, self._elapsed - self.interval)
            return True
        return False

    def reset(self) -> None:
        self._elapsed = 0.0


class WorldLoop:
    """The heartbeat of the simulation.

    Single-threaded mutation of WorldState; every stage receives the
    session explicitly and runs to completion before the next starts.
    """

    __slots__ = (
        "_config",
        "_world",
        "_input_queue",
        "_brain",
        "_combat_resolver",
        "_monster_timer",
        "_last_report",
        "_tick_events",
    )

    def __init__(
        self,
        config: SimulationConfig,
        world: WorldState,
        input_queue: InputQueue | None = None,
        brain: MonsterBrain | None = None,
        combat_resolver: CombatResolver | None = None,
    ) -> None:
        self._config = config
        self._world = world
        self._input_queue = input_queue if input_queue is not None else InputQueue(config.input_queue_size)
        self._brain = brain or MonsterBrain(config)
        self._combat_resolver = combat_resolver or CombatResolver()
        self._monster_timer = RepeatingTimer(config.monster_interval_seconds)
        self._last_report = CombatReport()
        self._tick_events: list[SimEvent] = []

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def input_queue(self) -> InputQueue:
        return self._input_queue

    @property
    def last_report(self) -> CombatReport:
        """Combat outcome of the most recent tick."""
        return self._last_report

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent tick."""
        return self._tick_events

    def _emit(self, category: str, message: str, entity_ids: tuple[int, ...] = ()) -> None:
        self._tick_events.append(SimEvent(
            tick=self._world.tick,
            category=category,
            message=message,
            entity_ids=entity_ids,
        ))

    def tick_once(self, intent: MoveIntent | None = None) -> bool:
        """Execute a single tick. Returns False if the simulation should stop.

        When *intent* is None the oldest queued input intent (if any) is used.
        """
        tick = self._world.tick

        if self._world.player_defeated:
            logger.info("Tick %d: player defeated — simulation ended.", tick)
            return False

        if tick >= self._config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", tick)
            return False

        if intent is None:
            intent = self._input_queue.pop()

        self._step(intent)
        self._world.tick += 1
        return True

    def create_snapshot(self) -> Snapshot:
        """Create an immutable snapshot of the current world state."""
        return Snapshot.from_world(self._world)

    def run(self) -> None:
        """Execute until max_ticks or the player is defeated."""
        logger.info("=== Simulation started (seed=%d) ===", self._world.seed)

        while self._world.tick < self._config.max_ticks:
            if not self.tick_once():
                break

            if self._world.tick % 200 == 0:
                player = self._world.find_player()
                logger.info(
                    "Tick %d: %d actors alive, player HP %s",
                    self._world.tick,
                    len(self._world.entities),
                    f"{player.stats.hp}/{player.stats.max_hp}" if player and player.stats else "-",
                )

        logger.info("=== Simulation finished at tick %d (%s) ===", self._world.tick, self._world.status.name)

    def _step(self, intent: MoveIntent | None) -> None:
        """Execute one complete tick cycle."""
        self._tick_events = []
        world = self._world
        tick = world.tick
        t0 = time.perf_counter()

        # --- Stage 1: Occupancy ---
        index_actors(world)

        # --- Stage 2: Player movement ---
        melee: list[MeleeIntent] = PlayerMoveAction.apply(intent, world)

        # --- Stage 3: Visibility ---
        t1 = time.perf_counter()
        update_viewsheds(world)

        # --- Stage 4: Monster AI ---
        t2 = time.perf_counter()
        ai_ran = self._monster_timer.tick(self._config.tick_seconds)
        if ai_ran:
            melee.extend(self._brain.think(world))

        # --- Stage 5: Combat ---
        t3 = time.perf_counter()
        report = self._combat_resolver.resolve(melee, world)
        self._last_report = report
        self._emit_combat_events(report)

        t4 = time.perf_counter()
        if melee or ai_ran:
            logger.debug(
                "Tick %d: move=%.4fs vis=%.4fs ai=%.4fs combat=%.4fs total=%.4fs intents=%d",
                tick, t1 - t0, t2 - t1, t3 - t2, t4 - t3, t4 - t0, len(melee),
            )

    def _emit_combat_events(self, report: CombatReport) -> None:
        entities = self._world.entities
        dead_names = {e.id: e.name for e in report.dead}

        def name(eid: int) -> str:
            if eid in entities:
                return entities[eid].name
            return dead_names.get(eid, f"#{eid}")

        for attacker_id, target_id in report.harmless:
            self._emit("combat", f"{name(attacker_id)} is unable to hurt {name(target_id)}",
                       (attacker_id, target_id))
        for target_id, amount in report.damage.items():
            self._emit("combat", f"{name(target_id)} is damaged for {amount} hp", (target_id,))
        for entity in report.dead:
            if entity.is_player:
                self._emit("session", f"{entity.name} has been defeated", (entity.id,))
            else:
                self._emit("death", f"{entity.name} dies", (entity.id,))

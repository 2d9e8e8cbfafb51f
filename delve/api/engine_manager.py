"""EngineManager — singleton wrapper that runs the WorldLoop on a background thread.

The API reads from an atomically-swapped immutable Snapshot and feeds
player input through the loop's InputQueue; the WorldLoop mutates the
WorldState exclusively on its own thread (single writer).
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from delve.actions.base import MoveIntent
from delve.core.snapshot import Snapshot
from delve.engine.world_loop import WorldLoop
from delve.systems.dungeon import build_level
from delve.utils.event_log import EventLog

if TYPE_CHECKING:
    from delve.config import SimulationConfig
    from delve.core.world_state import WorldState

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the simulation lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - player input (queue drained one intent per tick)
      - control commands (start / pause / resume / step / reset)
    """

    def __init__(self, config: SimulationConfig) -> None:
        self.config = config
        self._tick_rate: float = config.tick_seconds  # wall-clock seconds between ticks

        self._loop: WorldLoop | None = None

        # Thread-safe shared state
        self._snapshot_lock = threading.Lock()
        self._tick_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog(maxlen=config.event_log_size)

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- input --

    def submit_input(self, dx: int, dy: int) -> bool:
        """Queue a movement intent. Returns False once the session is over.

        Raises InputQueueFull when too many intents are already pending.
        """
        snap = self.get_snapshot()
        if snap is not None and snap.player_id is None:
            return False
        assert self._loop is not None
        self._loop.input_queue.push(MoveIntent(dx, dy))
        return True

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick synchronously (pauses the background loop)."""
        if not self._paused.is_set():
            self.pause()
        self._advance()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild the level, and leave the engine stopped."""
        self.stop()
        self._event_log.clear()
        self._build()
        logger.info("EngineManager reset.")

    # -- internals --

    def _build(self) -> None:
        """Construct the level and the loop from config."""
        world: WorldState = build_level(self.config)
        self._loop = WorldLoop(config=self.config, world=world)
        self._publish()

    def _publish(self) -> None:
        assert self._loop is not None
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _current_tick(self) -> int:
        snap = self.get_snapshot()
        return snap.tick if snap else 0

    def _advance(self) -> bool:
        """Run one tick and publish its snapshot and events."""
        assert self._loop is not None
        with self._tick_lock:
            alive = self._loop.tick_once()
            if alive:
                self._event_log.append_many(self._loop.tick_events)
                self._publish()
        return alive

    def _run_loop(self) -> None:
        logger.info("Engine loop thread started.")
        while not self._stop_requested.is_set():
            if self._paused.is_set():
                time.sleep(0.01)
                continue

            t0 = time.perf_counter()
            if not self._advance():
                logger.info("Engine loop finished at tick %d.", self._current_tick())
                self._running.clear()
                break
            elapsed = time.perf_counter() - t0
            remaining = self._tick_rate - elapsed
            if remaining > 0:
                time.sleep(remaining)

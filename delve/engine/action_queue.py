"""Thread-safe input queue connecting the input collaborator to the WorldLoop."""

from __future__ import annotations

import queue
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from delve.actions.base import MoveIntent


class InputQueueFull(RuntimeError):
    """The backlog of unconsumed player intents hit its limit."""


class InputQueue:
    """MPSC (multiple-producer, single-consumer) queue of player MoveIntents.

    API handlers push intents; the WorldLoop takes at most one per tick.
    A *maxsize* of 0 means unbounded.
    """

    __slots__ = ("_queue", "_maxsize")

    def __init__(self, maxsize: int = 0) -> None:
        self._maxsize = maxsize
        self._queue: queue.Queue[MoveIntent] = queue.Queue(maxsize=maxsize)

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def push(self, intent: MoveIntent) -> None:
        """Thread-safe enqueue. Raises InputQueueFull when the backlog is at its limit."""
        try:
            self._queue.put_nowait(intent)
        except queue.Full:
            raise InputQueueFull(f"{self._maxsize} intents already pending") from None

    def pop(self) -> MoveIntent | None:
        """Take the oldest pending intent, or None if there is none."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    @property
    def empty(self) -> bool:
        return self._queue.empty()

    def __len__(self) -> int:
        return self._queue.qsize()

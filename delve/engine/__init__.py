"""Engine layer: world loop, input queue, combat resolution."""

from delve.engine.action_queue import InputQueue, InputQueueFull
from delve.engine.combat_resolver import CombatReport, CombatResolver
from delve.engine.world_loop import RepeatingTimer, WorldLoop

__all__ = ["CombatReport", "CombatResolver", "InputQueue", "InputQueueFull", "RepeatingTimer", "WorldLoop"]

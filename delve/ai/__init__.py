"""AI layer: monster decision-making and A* navigation."""

from delve.ai.brain import MonsterBrain
from delve.ai.pathfinding import NavigationPath, Pathfinder, find_path

__all__ = ["MonsterBrain", "NavigationPath", "Pathfinder", "find_path"]

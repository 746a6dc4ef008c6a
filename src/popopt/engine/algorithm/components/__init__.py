from .records import Attractor, PositionRecord
from .selection import binary_tournament, select_fittest
from .termination import ExitCondition, any_of, max_iterations, target_reached

__all__ = [
    "Attractor",
    "PositionRecord",
    "binary_tournament",
    "select_fittest",
    "ExitCondition",
    "any_of",
    "max_iterations",
    "target_reached",
]

from .base import Problem, Solution
from .two_opt import SearchReport, TwoOptSearch, neighbour_moves, reverse_segment

__all__ = [
    "Problem",
    "Solution",
    "SearchReport",
    "TwoOptSearch",
    "neighbour_moves",
    "reverse_segment",
]

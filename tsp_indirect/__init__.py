"""
Indirect (random-key) permutation encoding, tour evaluation and 2-opt local
search for the TSP, exposed through a Problem/Solution contract for
continuous metaheuristics.
"""

from .context import LocalSearchConfig, TourContext
from .errors import (
    DecisionVectorError,
    EmptyInstanceError,
    InstanceShapeError,
    InvalidPermutationError,
    TSPError,
)
from .problem import TravellingSalesmanProblem
from .solution import TSPSolution

__all__ = [
    "DecisionVectorError",
    "EmptyInstanceError",
    "InstanceShapeError",
    "InvalidPermutationError",
    "LocalSearchConfig",
    "TSPError",
    "TSPSolution",
    "TourContext",
    "TravellingSalesmanProblem",
]

import logging
from typing import List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from .context import LocalSearchConfig, TourContext
from .distance import Coordinates, build_distance_matrix
from .encoding import UPPER_BOUND, DecisionVector, Tour, decode
from .errors import DecisionVectorError
from .evaluation import tour_length
from .solution import TSPSolution


log = logging.getLogger(__name__)


class TravellingSalesmanProblem:
    """
    Symmetric Euclidean TSP under the indirect (random-key) encoding.

    Solvers see only the continuous side: ``dimension``, the per-variable
    bounds and ``construct``, which turns a decision vector into an
    evaluated ``TSPSolution``. ``tried_solutions`` counts successful
    ``construct`` calls on this instance; local-search neighbours are not
    counted.
    """

    def __init__(
        self,
        coords: Coordinates,
        config: Optional[LocalSearchConfig] = None,
        name: str = "tsp",
    ):
        distances = build_distance_matrix(coords)
        self.name = name
        self.context = TourContext(distances=distances, config=config or LocalSearchConfig())
        self._lower = [0.0] * self.dimension
        self._upper = [UPPER_BOUND] * self.dimension
        self.tried_solutions = 0
        log.info("built %s with %d nodes (backend=%s)", name, self.dimension, self.context.config.backend)

    @classmethod
    def from_graph(cls, graph: nx.Graph, **kwargs) -> "TravellingSalesmanProblem":
        """Build from a graph whose nodes carry a ``coord`` attribute, taken in node order."""
        coords = []
        for node, data in graph.nodes(data=True):
            if data.get("coord") is None:
                raise ValueError(f"node {node!r} has no 'coord' attribute")
            coords.append(tuple(data["coord"]))
        return cls(coords, **kwargs)

    @classmethod
    def from_instance(cls, instance, **kwargs) -> "TravellingSalesmanProblem":
        kwargs.setdefault("name", instance.name)
        return cls(instance.coords, **kwargs)

    @property
    def dimension(self) -> int:
        return self.context.dimension

    @property
    def distances(self) -> np.ndarray:
        return self.context.distances

    @property
    def lower_bounds(self) -> List[float]:
        return list(self._lower)

    @property
    def upper_bounds(self) -> List[float]:
        return list(self._upper)

    def bounds(self) -> Tuple[List[float], List[float]]:
        return self.lower_bounds, self.upper_bounds

    def decode(self, decision_vector: Sequence[float]) -> Tour:
        return decode(decision_vector)

    def evaluate_fitness(self, tour: Sequence[int]) -> int:
        return tour_length(self.distances, tour)

    def validate(self, decision_vector: Sequence[float]) -> None:
        values = np.asarray(decision_vector, dtype=float)
        if values.shape != (self.dimension,):
            raise DecisionVectorError(
                f"Decision vector length mismatch: expected {self.dimension}, got shape {values.shape}"
            )
        if not np.all(np.isfinite(values)):
            raise DecisionVectorError("Decision vector contains non-finite values")
        if np.any(values < self._lower) or np.any(values > self._upper):
            raise DecisionVectorError("Decision vector values must lie in [0, 1)")

    def construct(self, decision_vector: Sequence[float]) -> TSPSolution:
        self.validate(decision_vector)
        solution = TSPSolution(decision_vector, self.context)
        self.tried_solutions += 1
        log.debug("constructed solution #%d fitness=%d", self.tried_solutions, solution.fitness)
        return solution

    def random_decision_vector(self, rng: np.random.Generator) -> DecisionVector:
        return rng.random(self.dimension).tolist()

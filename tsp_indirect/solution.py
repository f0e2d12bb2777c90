import logging
import sys
from typing import Sequence

from .context import TourContext
from .encoding import DecisionVector, Tour, encode
from .errors import DecisionVectorError
from .evaluation import TourState, materialize
from .search.two_opt import TwoOptSearch


log = logging.getLogger(__name__)


class TSPSolution:
    """
    A decision vector, the tour it decodes to and that tour's cyclic length.

    The three fields live in a single frozen TourState. Local search swaps
    in a fully evaluated state, so readers never see a half-updated solution.
    """

    def __init__(self, decision_vector: Sequence[float], context: TourContext):
        if len(decision_vector) != context.dimension:
            raise DecisionVectorError(
                f"Decision vector length mismatch: expected {context.dimension}, got {len(decision_vector)}"
            )
        self._context = context
        self._state = materialize(decision_vector, context.distances)

    @classmethod
    def from_permutation(cls, tour: Sequence[int], context: TourContext) -> "TSPSolution":
        return cls(encode(tour), context)

    @property
    def state(self) -> TourState:
        return self._state

    @property
    def dimension(self) -> int:
        return self._state.dimension

    @property
    def decision_vector(self) -> DecisionVector:
        return list(self._state.decision_vector)

    @property
    def permutation(self) -> Tour:
        return list(self._state.permutation)

    @property
    def fitness(self) -> int:
        return self._state.fitness

    def replace_with(self, state: TourState) -> None:
        if state.dimension != self.dimension:
            raise ValueError(f"Tour length mismatch: expected {self.dimension}, got {state.dimension}")
        self._state = state

    def local_search(self) -> None:
        report = TwoOptSearch(self._context).search(self)
        log.debug(
            "2-opt: %d -> %d in %d sweeps (%d improvements)",
            report.initial_fitness,
            report.final_fitness,
            report.sweeps,
            report.improvements,
        )

    def path(self) -> str:
        return "Path: { " + "->".join(str(node + 1) for node in self._state.permutation) + " }"

    def print(self, file=None) -> None:
        print(self.path(), file=file or sys.stdout)

    def __str__(self) -> str:
        return self.path()

    def __repr__(self) -> str:
        return f"TSPSolution(fitness={self.fitness}, permutation={self.permutation})"

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

import torch

from ..context import TourContext
from ..encoding import Tour, encode
from ..evaluation import TourState, batch_tour_lengths, materialize


log = logging.getLogger(__name__)

Move = Tuple[int, int]


def reverse_segment(tour: Sequence[int], start: int, end: int) -> Tour:
    """Reverse the direction of the path between positions start and end (inclusive)."""
    if not 0 <= start <= end < len(tour):
        raise IndexError(f"invalid segment [{start}, {end}] for tour of length {len(tour)}")
    new_tour = list(tour)
    new_tour[start : end + 1] = reversed(new_tour[start : end + 1])
    return new_tour


def neighbour_moves(n: int) -> Iterator[Move]:
    for i in range(n - 1):
        for j in range(i + 1, n):
            yield i, j


@dataclass
class SearchReport:
    initial_fitness: int
    final_fitness: int
    sweeps: int = 0
    improvements: int = 0

    @property
    def improved(self) -> bool:
        return self.final_fitness < self.initial_fitness


class TwoOptSearch:
    """
    Best-improvement 2-opt over the indirect encoding.

    Every neighbour is a segment reversal of the current tour, re-encoded to
    a decision vector and evaluated. The strictly best neighbour of a sweep
    wins; ties keep the first move in (i, j) order.
    """

    def __init__(self, context: TourContext):
        self.context = context
        self.config = context.config

    def best_neighbour(self, state: TourState) -> Optional[TourState]:
        if state.dimension < 2:
            return None
        if self.config.backend == "torch":
            return self._best_neighbour_torch(state)
        return self._best_neighbour_python(state)

    def _best_neighbour_python(self, state: TourState) -> Optional[TourState]:
        best = None
        for i, j in neighbour_moves(state.dimension):
            tour = reverse_segment(state.permutation, i, j)
            candidate = materialize(encode(tour), self.context.distances)
            if best is None or candidate.fitness < best.fitness:
                best = candidate
        return best

    def _best_neighbour_torch(self, state: TourState) -> Optional[TourState]:
        dist = self.context.distance_tensor
        n = state.dimension
        tour = torch.tensor(state.permutation, device=dist.device, dtype=torch.long)
        positions = torch.arange(n, device=dist.device)
        # Row-major, so moves come out in the same (i, j) order as neighbour_moves().
        moves = torch.triu_indices(n, n, offset=1, device=dist.device).t()
        best_len = None
        best_move = None
        for chunk in moves.split(self.config.batch_size):
            starts = chunk[:, :1]
            ends = chunk[:, 1:]
            inside = (positions >= starts) & (positions <= ends)
            index = torch.where(inside, starts + ends - positions, positions)
            lengths = batch_tour_lengths(dist, tour[index])
            k = int(torch.argmin(lengths))
            if best_len is None or int(lengths[k]) < best_len:
                best_len = int(lengths[k])
                best_move = (int(chunk[k, 0]), int(chunk[k, 1]))
        i, j = best_move
        return materialize(encode(reverse_segment(state.permutation, i, j)), self.context.distances)

    def sweep(self, solution) -> bool:
        """One full neighbourhood scan; replaces the solution's state if a neighbour is strictly better."""
        best = self.best_neighbour(solution.state)
        if best is not None and best.fitness < solution.fitness:
            solution.replace_with(best)
            return True
        return False

    def search(self, solution) -> SearchReport:
        report = SearchReport(initial_fitness=solution.fitness, final_fitness=solution.fitness)
        while self.config.max_sweeps is None or report.sweeps < self.config.max_sweeps:
            improved = self.sweep(solution)
            report.sweeps += 1
            log.debug("sweep %d: fitness=%d improved=%s", report.sweeps, solution.fitness, improved)
            if not improved:
                break
            report.improvements += 1
        report.final_fitness = solution.fitness
        return report

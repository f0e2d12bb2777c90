from typing import List, Protocol, Sequence, runtime_checkable

from ..encoding import Tour


@runtime_checkable
class Solution(Protocol):
    """What a generic solver may rely on for a candidate solution."""

    @property
    def fitness(self) -> float: ...

    @property
    def permutation(self) -> Tour: ...

    def local_search(self) -> None: ...

    def print(self) -> None: ...


@runtime_checkable
class Problem(Protocol):
    """What a generic solver may rely on for a problem: bounds, decoding and construction."""

    @property
    def dimension(self) -> int: ...

    @property
    def lower_bounds(self) -> List[float]: ...

    @property
    def upper_bounds(self) -> List[float]: ...

    def decode(self, decision_vector: Sequence[float]) -> Tour: ...

    def evaluate_fitness(self, tour: Sequence[int]) -> float: ...

    def construct(self, decision_vector: Sequence[float]) -> Solution: ...

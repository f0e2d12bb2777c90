"""
Indirect permutation encoding.

Solvers manipulate decision vectors in [0, 1)^n; a tour is recovered by
ranking the vector. Encoding goes the other way and places the node at
rank k in its own bucket ``EPSILON + k / n`` so ranking it back is exact.
"""

from typing import List, Sequence

import numpy as np

from .errors import DecisionVectorError, InvalidPermutationError


Tour = List[int]
DecisionVector = List[float]

EPSILON = float(np.nextafter(0.0, 1.0))
UPPER_BOUND = float(np.nextafter(1.0, 0.0))


def is_permutation(tour: Sequence[int]) -> bool:
    return sorted(tour) == list(range(len(tour)))


def encode(permutation: Sequence[int]) -> DecisionVector:
    if not is_permutation(permutation):
        raise InvalidPermutationError("Tour must be a permutation of 0..n-1")
    n = len(permutation)
    values = [0.0] * n
    for rank, node in enumerate(permutation):
        values[node] = EPSILON + rank / n
    return values


def decode(decision_vector: Sequence[float]) -> Tour:
    values = np.asarray(decision_vector, dtype=float)
    if values.ndim != 1:
        raise DecisionVectorError(f"Decision vector must be 1-D, got shape {values.shape}")
    # A stable sort orders equal values by ascending index.
    return np.argsort(values, kind="stable").tolist()

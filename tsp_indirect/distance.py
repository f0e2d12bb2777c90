from typing import Sequence, Tuple

import numpy as np

from .errors import EmptyInstanceError, InstanceShapeError


Coordinates = Sequence[Tuple[float, float]]


def round_half_up(value):
    # Distances are non-negative, so this is round-half-away-from-zero
    # (C round / TSPLIB nint), not numpy's round-half-to-even.
    return np.floor(np.asarray(value, dtype=float) + 0.5).astype(np.int64)


def build_distance_matrix(coords: Coordinates) -> np.ndarray:
    """
    Pairwise rounded Euclidean distances for a list of (x, y) nodes.

    The returned matrix is int64, symmetric with a zero diagonal, and
    read-only: it is built once per instance and shared by every solution.
    """
    points = np.asarray(coords, dtype=float)
    if points.size == 0:
        raise EmptyInstanceError("Zero nodes were given as input")
    if points.ndim != 2 or points.shape[1] != 2:
        raise InstanceShapeError(f"coords must be shape (n, 2), got {points.shape}")
    diff = points[:, None, :] - points[None, :, :]
    dist = round_half_up(np.sqrt(np.sum(diff ** 2, axis=2)))
    dist.setflags(write=False)
    return dist

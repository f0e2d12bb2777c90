from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import torch

from .encoding import decode


@dataclass(frozen=True)
class TourState:
    decision_vector: Tuple[float, ...]
    permutation: Tuple[int, ...]
    fitness: int

    @property
    def dimension(self) -> int:
        return len(self.permutation)


def tour_length(distances: np.ndarray, tour: Sequence[int]) -> int:
    dist = 0
    n = len(tour)
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dist += int(distances[a, b])
    return dist


def materialize(decision_vector: Sequence[float], distances: np.ndarray) -> TourState:
    """Decode and evaluate a decision vector into a frozen tour state."""
    tour = decode(decision_vector)
    return TourState(
        decision_vector=tuple(float(v) for v in decision_vector),
        permutation=tuple(tour),
        fitness=tour_length(distances, tour),
    )


def gap(length: float, optimum: Optional[float]) -> float:
    if optimum is None or np.isclose(optimum, 0.0):
        return float("inf")
    return (length - optimum) / optimum


def resolve_device(device: Optional[str] = None) -> torch.device:
    if device is not None:
        return torch.device(device)
    return torch.device("cuda:0") if torch.cuda.is_available() else torch.device("cpu")


def distance_tensor(distances: np.ndarray, device: Optional[str] = None) -> torch.Tensor:
    # int64 keeps batched tour lengths exact and equal to tour_length().
    mat = torch.from_numpy(np.array(distances, dtype=np.int64))
    return mat.to(resolve_device(device))


def batch_tour_lengths(dist: torch.Tensor, tours: torch.Tensor) -> torch.Tensor:
    # tours: [B, n] long tensor of node indices on dist.device
    return dist[tours, tours.roll(-1, dims=1)].sum(dim=1)

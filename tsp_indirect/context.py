from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

import numpy as np
import torch

from .evaluation import distance_tensor


BACKENDS = ("python", "torch")


@dataclass(frozen=True)
class LocalSearchConfig:
    # None sweeps until no neighbour improves (a 2-opt local optimum);
    # 1 accepts at most one improving move and stops.
    max_sweeps: Optional[int] = None
    backend: str = "python"
    device: Optional[str] = None
    batch_size: int = 4096

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.max_sweeps is not None and self.max_sweeps < 1:
            raise ValueError(f"max_sweeps must be >= 1 or None, got {self.max_sweeps}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")


@dataclass(frozen=True, eq=False)
class TourContext:
    """
    Read-only state shared by every solution of one problem instance.

    Passed by reference into decode/evaluate/search calls instead of living
    in module globals.
    """

    distances: np.ndarray
    config: LocalSearchConfig = field(default_factory=LocalSearchConfig)

    @property
    def dimension(self) -> int:
        return int(self.distances.shape[0])

    @cached_property
    def distance_tensor(self) -> torch.Tensor:
        return distance_tensor(self.distances, self.config.device)

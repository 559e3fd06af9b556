"""
Core data structures for the stepmeans clustering engine.

This module provides the containers handed to event subscribers and the
per-dimension bookkeeping computed from the dataset.
"""

from typing import List, Sequence
from dataclasses import dataclass
from enum import Enum
import torch
from torch import Tensor


@dataclass(frozen=True)
class Extent:
    """Minimum and maximum of a single data dimension."""

    min: float
    max: float

    @property
    def range(self) -> float:
        return self.max - self.min


class EngineStatus(Enum):
    """Lifecycle of a refinement loop."""

    IDLE = 'idle'
    RUNNING = 'running'
    CONVERGED = 'converged'


@dataclass(frozen=True, eq=False)
class EngineState:
    """Snapshot of the engine taken right after a pass.

    Means, assignments and ranges are copies, so subscribers may keep or
    modify them without affecting the engine. The data tensor is shared.
    """

    data: Tensor          # (n, d) points, shared with the engine
    means: Tensor         # (k, d) centroids
    assignments: Tensor   # (n,) centroid index per point, empty before the first pass
    extents: List[Extent]
    ranges: Tensor        # (d,)
    iterations: int
    k: int

    @property
    def n_points(self) -> int:
        return self.data.shape[0]

    @property
    def dimension(self) -> int:
        return self.data.shape[1]

    def cluster_indices(self, cluster_idx: int) -> Tensor:
        """Indices of the points currently assigned to a cluster."""
        return torch.where(self.assignments == cluster_idx)[0]

    def cluster_sizes(self) -> Tensor:
        """(k,) number of points assigned to each cluster."""
        if self.assignments.numel() == 0:
            return torch.zeros(self.k, dtype=torch.long)
        return torch.bincount(self.assignments, minlength=self.k)


def compute_extents(data: Tensor) -> List[Extent]:
    """Per-dimension minimum and maximum of a non-empty (n, d) tensor.

    Example:
        >>> compute_extents(torch.tensor([[2., 5.], [4., 7.], [3., 1.]]))
        [Extent(min=2.0, max=4.0), Extent(min=1.0, max=7.0)]
    """
    mins = data.min(dim=0).values
    maxs = data.max(dim=0).values
    return [Extent(min=lo, max=hi) for lo, hi in zip(mins.tolist(), maxs.tolist())]


def compute_ranges(extents: Sequence[Extent]) -> Tensor:
    """Per-dimension span (max - min) of the given extents."""
    return torch.tensor([extent.range for extent in extents], dtype=torch.float64)

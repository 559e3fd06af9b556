"""
Damped mean update for centroid relocation.

Each pass moves every centroid towards the (rounded) mean of its assigned
points, but only a tenth of the way while the remaining distance is large.
Centroids that lost all their points are re-seeded inside the data extents.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater, InitializationStrategy
from ..initialization.random import UniformBoxInit
from ..utils.numeric import round_half_up


class DampedMeanUpdater(ParameterUpdater):
    """Moves centroids a fraction of the way towards their cluster means.

    Per dimension, with ``diff = target - previous``:

    - ``|diff| > snap_threshold``: ``previous + diff / steps_per_iteration``,
      rounded to ``decimals`` places
    - otherwise: snap to the target

    Args:
        mins: (d,) per-dimension minimum of the data, for re-seeding
        ranges: (d,) per-dimension range of the data, for re-seeding
        generator: Optional torch generator used for re-seeding
        initializer: Strategy used to re-seed empty clusters
    """

    steps_per_iteration = 10
    snap_threshold = 0.1
    decimals = 2

    def __init__(self, mins: Tensor, ranges: Tensor,
                 generator: Optional[torch.Generator] = None,
                 initializer: Optional[InitializationStrategy] = None):
        self.mins = mins
        self.ranges = ranges
        self.generator = generator
        self.initializer = initializer if initializer is not None else UniformBoxInit()

        # Mask of clusters that were empty during the last update
        self.empty_clusters_: Optional[Tensor] = None

    def compute_targets(self, points: Tensor, centroids: Tensor,
                        assignments: Tensor) -> Tensor:
        """Rounded cluster means, with fresh random positions for empty clusters.

        Args:
            points: (n, d) data points
            centroids: (k, d) current centroids (only the shape is used)
            assignments: (n,) cluster indices

        Returns:
            (k, d) tensor of target positions
        """
        n_clusters = centroids.shape[0]

        counts = torch.bincount(assignments, minlength=n_clusters)
        sums = torch.zeros_like(centroids).index_add_(0, assignments, points)

        denominators = counts.clamp(min=1).unsqueeze(1).to(centroids.dtype)
        targets = round_half_up(sums / denominators, self.decimals)

        empty = counts == 0
        n_empty = int(empty.sum())
        if n_empty > 0:
            targets[empty] = self.initializer.initialize(
                self.mins, self.ranges, n_empty, generator=self.generator
            )

        self.empty_clusters_ = empty
        return targets

    def step_towards(self, centroids: Tensor, targets: Tensor) -> Tensor:
        """Damped move of ``centroids`` towards ``targets`` (not in place)."""
        diff = targets - centroids
        stepped = round_half_up(centroids + diff / self.steps_per_iteration,
                                self.decimals)
        return torch.where(diff.abs() > self.snap_threshold, stepped, targets)

    def update(self, points: Tensor, centroids: Tensor,
               assignments: Tensor) -> bool:
        """Relocate centroids in place.

        Args:
            points: (n, d) data points
            centroids: (k, d) centroids, modified in place
            assignments: (n,) cluster indices from the assignment step

        Returns:
            True if any coordinate of any centroid differs from its target
        """
        targets = self.compute_targets(points, centroids, assignments)

        # Exact comparison; a re-seeded empty cluster almost always counts
        # as movement.
        moved = not torch.equal(centroids, targets)

        if moved:
            relocated = self.step_towards(centroids, targets)
            empty = self.empty_clusters_
            relocated[empty] = targets[empty]
            centroids.copy_(relocated)

        return moved

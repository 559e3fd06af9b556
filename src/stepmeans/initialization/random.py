"""
Random initialization strategy for the clustering engine.

Draws centroids uniformly inside the bounding box of the dataset.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


class UniformBoxInit(InitializationStrategy):
    """Uniform initialization within the per-dimension extents of the data.

    Dimension i of every centroid is drawn independently from
    [min_i, min_i + range_i].
    """

    def initialize(self, mins: Tensor, ranges: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None) -> Tensor:
        """Draw ``n_clusters`` random centroids.

        Args:
            mins: (d,) per-dimension minimum
            ranges: (d,) per-dimension range
            n_clusters: Number of centroids
            generator: Optional torch generator

        Returns:
            (n_clusters, d) tensor of centroids
        """
        dimension = mins.shape[0]
        unit = torch.rand(n_clusters, dimension, generator=generator,
                          dtype=mins.dtype, device=mins.device)
        return mins.unsqueeze(0) + unit * ranges.unsqueeze(0)

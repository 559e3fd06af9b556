"""
Euclidean distance metric for clustering.

d(p, m) = sqrt((p1 - m1)^2 + ... + (pd - md)^2)
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """Euclidean distance metric.

    Computes ||x - μ|| for every point/centroid pair.
    """

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                    If False (default), return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, points: Tensor, centroids: Tensor) -> Tensor:
        """Compute distances from points to centroids.

        Args:
            points: (n, d) tensor of points
            centroids: (k, d) tensor of centroids

        Returns:
            (n, k) tensor of distances
        """
        # Explicit difference rather than torch.cdist so that equal
        # coordinates give bitwise equal distances.
        diff = points.unsqueeze(1) - centroids.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

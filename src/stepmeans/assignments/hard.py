"""
Hard assignment strategy for the clustering engine.

Assigns each point to its nearest centroid based on the distance metric.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, DistanceMetric
from ..distances.euclidean import EuclideanDistance


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest centroid.

    Each point is assigned to exactly one cluster based on minimum distance.
    When several centroids are equally close the lowest index wins.
    """

    def __init__(self, metric: Optional[DistanceMetric] = None):
        """
        Args:
            metric: Distance metric, Euclidean by default
        """
        super().__init__()
        self.metric = metric if metric is not None else EuclideanDistance()

    def compute_assignments(self, points: Tensor, centroids: Tensor) -> Tensor:
        """Assign each point to nearest centroid.

        Args:
            points: (n, d) data points
            centroids: (k, d) centroids

        Returns:
            (n,) int64 tensor of cluster indices
        """
        if points.shape[0] == 0:
            return torch.empty(0, dtype=torch.long, device=points.device)

        distances = self.metric.compute(points, centroids)

        # A centroid beats the current best only when strictly closer,
        # so ties keep the first (lowest) index.
        best = torch.zeros(points.shape[0], dtype=torch.long, device=points.device)
        best_distances = distances[:, 0].clone()
        for k in range(1, centroids.shape[0]):
            closer = distances[:, k] < best_distances
            best[closer] = k
            best_distances[closer] = distances[closer, k]

        return best

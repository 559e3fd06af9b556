"""
Core interfaces for the stepmeans clustering engine.

This module defines the abstract base classes for the pluggable pieces of a
refinement pass, so the engine can stay a thin driver around them.
"""

from abc import ABC, abstractmethod
from typing import Optional
import torch
from torch import Tensor


class DistanceMetric(ABC):
    """Abstract base class for point-to-centroid distance computations."""

    @abstractmethod
    def compute(self, points: Tensor, centroids: Tensor) -> Tensor:
        """Compute distances from every point to every centroid.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of centroids

        Returns:
            (n, k) tensor of distances
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centroids: Tensor) -> Tensor:
        """Compute cluster assignments for points.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of centroids

        Returns:
            (n,) tensor of cluster indices
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for centroid initialization strategies."""

    @abstractmethod
    def initialize(self, mins: Tensor, ranges: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None) -> Tensor:
        """Draw initial centroids.

        Args:
            mins: (d,) per-dimension minimum of the data
            ranges: (d,) per-dimension range of the data
            n_clusters: Number of centroids to draw
            generator: Optional torch generator for reproducibility

        Returns:
            (n_clusters, d) tensor of centroids
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid relocation strategies."""

    @abstractmethod
    def update(self, points: Tensor, centroids: Tensor,
               assignments: Tensor) -> bool:
        """Relocate centroids in place given the current assignments.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of centroids, modified in place
            assignments: (n,) tensor of cluster indices

        Returns:
            True if any centroid moved
        """
        pass

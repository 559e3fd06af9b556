"""Clustering engines."""

from .engine import ClusteringEngine, Scheduler

__all__ = [
    'ClusteringEngine',
    'Scheduler'
]

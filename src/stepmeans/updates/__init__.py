"""Centroid update strategies."""

from .damped import DampedMeanUpdater

__all__ = [
    'DampedMeanUpdater'
]

"""Initialization strategies for the clustering engine."""

from .random import UniformBoxInit

__all__ = [
    'UniformBoxInit'
]

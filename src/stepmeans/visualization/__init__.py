"""Visualization utilities for engine states."""

from .plot_state import (
    plot_state,
    animate,
    default_colors
)

__all__ = [
    'plot_state',
    'animate',
    'default_colors'
]

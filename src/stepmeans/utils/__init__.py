"""Utility functions for the stepmeans engine."""

from .numeric import round_half_up

from .validation import (
    validate_data,
    check_n_clusters,
    check_max_iter,
    check_random_state,
    check_delay
)

__all__ = [
    'round_half_up',
    'validate_data',
    'check_n_clusters',
    'check_max_iter',
    'check_random_state',
    'check_delay'
]

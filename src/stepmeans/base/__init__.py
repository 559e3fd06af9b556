"""Base classes and interfaces for the stepmeans clustering engine."""

from .interfaces import (
    DistanceMetric,
    AssignmentStrategy,
    InitializationStrategy,
    ParameterUpdater
)

from .data_structures import (
    Extent,
    EngineState,
    EngineStatus,
    compute_extents,
    compute_ranges
)

from .observable import Observable, Subscription

__all__ = [
    # Interfaces
    'DistanceMetric',
    'AssignmentStrategy',
    'InitializationStrategy',
    'ParameterUpdater',

    # Data structures
    'Extent',
    'EngineState',
    'EngineStatus',
    'compute_extents',
    'compute_ranges',

    # Events
    'Observable',
    'Subscription'
]

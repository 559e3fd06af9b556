"""
stepmeans: k-means clustering that reports every refinement pass.

The engine moves centroids a tenth of the way towards their cluster means
on every pass and emits an event after each one, which makes it easy to
animate or log convergence.

Example usage:
    >>> from stepmeans import ClusteringEngine
    >>>
    >>> data = [[6, 5], [9, 10], [10, 1], [5, 5], [7, 7], [4, 1]]
    >>> engine = ClusteringEngine(data=data, k=3)
    >>>
    >>> engine.on('iteration', lambda state: print(state.means))
    >>> engine.on('end', lambda state: print(state.iterations))
    >>>
    >>> # Blocking loop; use engine.run(delay=...) inside an asyncio loop
    >>> engine.fit()
"""

__version__ = '0.1.0'

from .algorithms.engine import ClusteringEngine

from .base import (
    Extent,
    EngineState,
    EngineStatus,
    Observable,
    Subscription
)

# Import visualization
from .visualization import plot_state, animate

from .sample_data import (
    generate_sample_data,
    generate_cluster_colors,
    random_int
)

__all__ = [
    # Engine
    'ClusteringEngine',

    # Core data structures
    'Extent',
    'EngineState',
    'EngineStatus',

    # Events
    'Observable',
    'Subscription',

    # Visualization
    'plot_state',
    'animate',

    # Sample data
    'generate_sample_data',
    'generate_cluster_colors',
    'random_int',

    # Version
    '__version__'
]

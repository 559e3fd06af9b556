"""
Rendering of engine states.

Draws a line from every point to its centroid, the points colored by
cluster, and the centroids as larger translucent discs. Only the first two
dimensions are shown.
"""

from typing import Optional, List
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.collections import LineCollection
import numpy as np

from ..base.data_structures import EngineState


def default_colors(n_clusters: int) -> List:
    cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
    return [cmap(i % cmap.N) for i in range(n_clusters)]


def plot_state(state: EngineState,
               colors: Optional[List] = None,
               ax: Optional[plt.Axes] = None,
               line_alpha: float = 0.1,
               point_size: int = 50,
               center_size: int = 200,
               title: Optional[str] = None) -> plt.Axes:
    """Plot one engine state.

    Args:
        state: Snapshot emitted by the engine
        colors: One color per cluster
        ax: Matplotlib axes (created if None)
        line_alpha: Transparency of the point-to-centroid lines
        point_size: Size of data points
        center_size: Size of centroid markers
        title: Plot title, defaults to the iteration count

    Returns:
        Matplotlib axes
    """
    if state.dimension < 2:
        raise ValueError(f"Need at least 2 dimensions to plot, got {state.dimension}")

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    if colors is None:
        colors = default_colors(state.k)

    X_np = state.data[:, :2].cpu().numpy()
    means_np = state.means[:, :2].cpu().numpy()
    labels_np = state.assignments.cpu().numpy()

    if len(labels_np) > 0:
        segments = np.stack([X_np, means_np[labels_np]], axis=1)
        ax.add_collection(LineCollection(segments, colors='black', alpha=line_alpha,
                                         linewidths=1))
        point_colors = [colors[label] for label in labels_np]
    else:
        point_colors = ['gray'] * len(X_np)

    ax.scatter(X_np[:, 0], X_np[:, 1],
               facecolors='none',
               edgecolors=point_colors,
               s=point_size,
               linewidth=1.0)

    ax.scatter(means_np[:, 0], means_np[:, 1],
               c=[colors[i] for i in range(state.k)],
               s=center_size,
               alpha=0.5,
               zorder=10)

    # Pad by one unit on every side
    ax.set_xlim(state.extents[0].min - 1, state.extents[0].max + 1)
    ax.set_ylim(state.extents[1].min - 1, state.extents[1].max + 1)
    ax.set_title(title if title is not None else f'Iteration {state.iterations}')

    return ax


def animate(engine,
            colors: Optional[List] = None,
            interval: int = 20,
            ax: Optional[plt.Axes] = None) -> FuncAnimation:
    """Animate an engine until convergence.

    Frames come from ``engine.iterate()``, so the animation drives the
    passes; the engine should not be running already.

    Args:
        engine: ClusteringEngine to refine
        colors: One color per cluster
        interval: Milliseconds between frames
        ax: Matplotlib axes (created if None)

    Returns:
        The FuncAnimation; keep a reference to it while it plays
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))
    fig = ax.figure

    if colors is None:
        colors = default_colors(engine.k)

    def draw(state):
        ax.clear()
        plot_state(state, colors=colors, ax=ax)
        return []

    return FuncAnimation(fig, draw, frames=engine.iterate(), interval=interval,
                         repeat=False, cache_frame_data=False)

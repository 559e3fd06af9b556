# tests/data_gen.py
"""
Tiny datasets reused across the stepmeans test suite.

- SMALL_2D: the 10-point reference dataset with known extents.
- CANVAS_2D: the 25-point dataset used by the canvas demo.
- make_blobs_2d: well-separated Gaussian blobs with integer-ish spread.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
import numpy as np

SMALL_2D = [
    [6, 5], [9, 10], [10, 1], [5, 5], [7, 7],
    [4, 1], [10, 7], [6, 8], [10, 2], [9, 4],
]

CANVAS_2D = SMALL_2D + [
    [2, 5], [9, 1], [10, 9], [2, 8], [1, 1],
    [6, 10], [3, 8], [2, 3], [7, 9], [7, 7],
    [3, 6], [5, 8], [7, 5], [10, 9], [10, 9],
]


def make_blobs_2d(
    centers: Sequence[Tuple[float, float]] = ((0.0, 0.0), (10.0, 10.0)),
    n_per: int = 30,
    spread: float = 0.5,
    seed: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Isotropic Gaussian blobs around the given centers.

    Returns
    -------
    X : (len(centers) * n_per, 2) ndarray, float64
    y : (len(centers) * n_per,) ndarray, int64 ground-truth blob index
    """
    rng = np.random.default_rng(seed)
    X = np.concatenate([
        rng.normal(loc=center, scale=spread, size=(n_per, 2))
        for center in centers
    ])
    y = np.repeat(np.arange(len(centers)), n_per)
    return X.astype(np.float64), y.astype(np.int64)

"""
Input validation utilities.

Provides functions for validating the dataset and parameters handed to the
clustering engine, failing fast with a descriptive error.
"""

from typing import Optional, Union, Sequence
import numbers
import torch
from torch import Tensor
import numpy as np


def validate_data(X: Union[Tensor, np.ndarray, Sequence[Sequence[float]]],
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None,
                  ensure_2d: bool = True,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  ensure_min_features: int = 1) -> Tensor:
    """Validate and convert input data to tensor.

    Args:
        X: Input data (tensor, numpy array, or sequence of points)
        dtype: Target data type
        device: Target device
        ensure_2d: Whether to ensure 2D shape
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required

    Returns:
        Validated tensor. A tensor that already has the right dtype and
        device is returned as is, not copied.

    Raises:
        TypeError: If X is not array-like
        ValueError: If validation fails
    """
    # Convert to tensor
    if isinstance(X, Tensor):
        if X.dtype != dtype or (device is not None and X.device != device):
            X = X.to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(X).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        try:
            X = torch.tensor(X, dtype=dtype, device=device)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Cannot convert data to a numeric tensor; all points "
                             f"must be numeric and share one dimensionality ({e})") from e
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    # Ensure 2D
    if ensure_2d:
        if X.dim() == 1:
            X = X.unsqueeze(1)
        elif X.dim() != 2:
            raise ValueError(f"Expected 2D array, got {X.dim()}D")

    # Check shape
    if ensure_2d:
        n_samples, n_features = X.shape

        if n_samples < ensure_min_samples:
            raise ValueError(f"Found {n_samples} samples, but need at least "
                             f"{ensure_min_samples}")

        if n_features < ensure_min_features:
            raise ValueError(f"Found {n_features} features, but need at least "
                             f"{ensure_min_features}")

    # Check for finite values
    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        TypeError: If not an integer
        ValueError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, numbers.Integral):
        raise TypeError(f"k must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ValueError(f"k must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise ValueError(f"k ({n_clusters}) cannot be larger than "
                         f"the number of points ({n_samples})")


def check_max_iter(max_iter: Optional[int]) -> None:
    """Validate the pass limit; None means unbounded.

    Raises:
        TypeError: If not an integer or None
        ValueError: If not positive
    """
    if max_iter is None:
        return
    if isinstance(max_iter, bool) or not isinstance(max_iter, numbers.Integral):
        raise TypeError(f"max_iter must be int or None, got {type(max_iter)}")
    if max_iter <= 0:
        raise ValueError(f"max_iter must be positive, got {max_iter}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> Optional[torch.Generator]:
    """Create generator from random state.

    Args:
        random_state: Seed or generator

    Returns:
        Generator or None
    """
    if random_state is None:
        return None
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, numbers.Integral) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def check_delay(delay: float) -> float:
    """Validate the pause between two passes, in seconds."""
    if isinstance(delay, bool) or not isinstance(delay, numbers.Real):
        raise TypeError(f"delay must be a number, got {type(delay)}")
    if delay < 0 or delay != delay:
        raise ValueError(f"delay must be non-negative, got {delay}")
    return float(delay)

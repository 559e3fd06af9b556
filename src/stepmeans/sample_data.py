"""
Sample data and color generators for demos.

Points have integer coordinates so that clusters are easy to read on a plot.
"""

from __future__ import annotations

from typing import List, Optional

import torch
from torch import Tensor


def random_int(start: int, end: int, generator: Optional[torch.Generator] = None) -> int:
    """Uniform random integer in ``[start + 1, end]``."""
    if end <= start:
        raise ValueError(f"end ({end}) must be greater than start ({start})")
    return int(torch.randint(start + 1, end + 1, (1,), generator=generator).item())


def generate_sample_data(points: int = 10,
                         low: int = 0,
                         high: int = 10,
                         dimension: int = 2,
                         generator: Optional[torch.Generator] = None) -> Tensor:
    """Random points with integer coordinates in ``[low + 1, high]``.

    Example:
        >>> generate_sample_data(points=2)
        tensor([[2., 5.],
                [9., 4.]], dtype=torch.float64)
    """
    if points <= 0:
        raise ValueError(f"points must be positive, got {points}")
    if high <= low:
        raise ValueError(f"high ({high}) must be greater than low ({low})")
    X = torch.randint(low + 1, high + 1, (points, dimension), generator=generator)
    return X.to(torch.float64)


def generate_cluster_colors(size: int, generator: Optional[torch.Generator] = None) -> List[str]:
    """One random ``#rrggbb`` color per cluster."""
    values = torch.randint(0, 1 << 24, (size,), generator=generator)
    return [f"#{int(v):06x}" for v in values]

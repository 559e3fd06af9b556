"""Small numeric helpers shared by the update step."""

import torch
from torch import Tensor


def round_half_up(x: Tensor, decimals: int = 2) -> Tensor:
    """Round to ``decimals`` places, with midpoints going towards +inf.

    torch.round uses round-half-to-even, which would make 0.125 -> 0.12.
    """
    scale = 10.0 ** decimals
    return torch.floor(x * scale + 0.5) / scale

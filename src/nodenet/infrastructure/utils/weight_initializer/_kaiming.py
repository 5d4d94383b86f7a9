"""
He initializers for weights feeding ReLU nodes.

Both variants have variance ``2 / fan_in``, where fan-in counts every
weight axis but the outermost: ``k * k * in_depth`` for convolution
kernels and ``in_features`` for fully-connected matrices.
"""

import math
from typing import Optional

import numpy as np

from ._base import WeightInitializer, _draw_normal, _draw_uniform
from ...tensor._tensor import Tensor
from ....domain.utils._weight_initialization import _calculate_fan_in


def _fan_in(tensor: Tensor) -> int:
    return max(1, int(_calculate_fan_in(tuple(tensor.shape))))


@WeightInitializer.register_initializer("kaiming")
def kaiming(tensor: Tensor, rng: Optional[np.random.Generator] = None) -> Tensor:
    """``N(0, sqrt(2 / fan_in))``; the default for convolution kernels."""
    return _draw_normal(tensor, rng, math.sqrt(2.0 / _fan_in(tensor)))


@WeightInitializer.register_initializer("kaiming_relu")
def kaiming_relu(tensor: Tensor, rng: Optional[np.random.Generator] = None) -> Tensor:
    """``U(-sqrt(6 / fan_in), sqrt(6 / fan_in))``."""
    return _draw_uniform(tensor, rng, math.sqrt(6.0 / _fan_in(tensor)))

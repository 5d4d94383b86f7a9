"""
Glorot initializers, variance ``2 / (fan_in + fan_out)``.

`xavier` is the default for fully-connected weights, whose output feeds
the softmax rather than a ReLU.
"""

import math
from typing import Optional

import numpy as np

from ._base import WeightInitializer, _draw_normal, _draw_uniform
from ...tensor._tensor import Tensor
from ....domain.utils._weight_initialization import _calculate_fan_in_and_fan_out


def _fan_sum(tensor: Tensor) -> int:
    fan_in, fan_out = _calculate_fan_in_and_fan_out(tuple(tensor.shape))
    return max(1, int(fan_in)) + max(1, int(fan_out))


@WeightInitializer.register_initializer("xavier")
def xavier(tensor: Tensor, rng: Optional[np.random.Generator] = None) -> Tensor:
    return _draw_normal(tensor, rng, math.sqrt(2.0 / _fan_sum(tensor)))


@WeightInitializer.register_initializer("xavier_uniform")
def xavier_uniform(
    tensor: Tensor, rng: Optional[np.random.Generator] = None
) -> Tensor:
    return _draw_uniform(tensor, rng, math.sqrt(6.0 / _fan_sum(tensor)))

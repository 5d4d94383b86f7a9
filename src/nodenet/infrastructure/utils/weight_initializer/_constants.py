"""
Deterministic fills. `rng` is accepted only to share the registry
signature.
"""

from typing import Optional

import numpy as np

from ._base import WeightInitializer
from ...tensor._tensor import Tensor


@WeightInitializer.register_initializer("zeros")
def zeros(tensor: Tensor, rng: Optional[np.random.Generator] = None) -> Tensor:
    tensor.zero()
    return tensor


@WeightInitializer.register_initializer("ones")
def ones(tensor: Tensor, rng: Optional[np.random.Generator] = None) -> Tensor:
    tensor.fill(1.0)
    return tensor

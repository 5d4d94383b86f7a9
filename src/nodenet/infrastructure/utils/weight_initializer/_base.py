"""
Name-keyed registry of parameter initializers.

Every initializer has the signature ``init(tensor, rng=None) -> tensor``
and fills a FLOAT parameter tensor in place. Convolution and
FullyConnected nodes look one up by name when they allocate their weights,
passing the network's ``numpy.random.Generator`` so that a seeded network
builds identical weights on every run.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Optional, TypeVar

import numpy as np

from ....domain.utils._weight_initialization import _WeightInitializer
from ...tensor._tensor import Tensor

T = TypeVar("T", bound=Callable[..., Tensor])


def _generator(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _draw_normal(
    tensor: Tensor, rng: Optional[np.random.Generator], std: float
) -> Tensor:
    tensor.copy_from_numpy(_generator(rng).normal(0.0, std, size=tensor.shape))
    return tensor


def _draw_uniform(
    tensor: Tensor, rng: Optional[np.random.Generator], bound: float
) -> Tensor:
    tensor.copy_from_numpy(_generator(rng).uniform(-bound, bound, size=tensor.shape))
    return tensor


class WeightInitializer(_WeightInitializer):
    """
    Resolve an initializer by name and apply it to parameter tensors.

    >>> WeightInitializer("xavier")(fc.weights, rng=np.random.default_rng(0))

    Raises `ValueError` from the constructor when `initializer_name` was
    never registered; the message lists the registered names.
    """

    INITIALIZERS: ClassVar[Dict[str, Callable[..., Tensor]]] = {}

    def __init__(self, initializer_name: str) -> None:
        if initializer_name not in self.INITIALIZERS:
            raise ValueError(
                f"Unsupported initializer name: {initializer_name!r}. "
                f"Available: {', '.join(self.available()) or '<none>'}"
            )
        self.name = initializer_name
        self._initializer = self.INITIALIZERS[initializer_name]

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Decorator adding a function to the registry under `name`.

        Registering a taken name raises `ValueError` unless `overwrite`.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Initializer name must be a non-empty string")

        def decorator(func: T) -> T:
            if name in cls.INITIALIZERS and not overwrite:
                raise ValueError(f"Initializer already registered: {name!r}")
            cls.INITIALIZERS[name] = func
            return func

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        return tuple(sorted(cls.INITIALIZERS))

    def __call__(self, tensor: Tensor, *args: Any, **kwargs: Any) -> Tensor:
        return self._initializer(tensor, *args, **kwargs)

"""
Abstract interfaces and utilities for weight initialization.

This module defines the abstract base class for weight initializers used
by trainable nodes, along with shared helper functions for computing
fan-in and fan-out values from parameter shapes.

Parameter layouts are channels-last:

- FullyConnected weights: ``(out_width, in_features)``
- Convolution weights:    ``(out_depth, k_h, k_w, in_depth)``

The concrete implementation and registry logic live in the infrastructure
layer.
"""

from typing import Callable, Dict, TypeVar
from abc import ABC

from .._tensor import ITensor


T = TypeVar("T", bound=Callable[..., ITensor])


class _WeightInitializer(ABC):
    """
    Abstract base class for weight initializer dispatchers.

    Design notes
    ------------
    - Initializers are identified by string names.
    - Each initializer is a callable that mutates a tensor in-place and
      returns it.
    """

    INITIALIZERS: Dict[str, Callable] = {}

    def __init__(self, initializer_name: str) -> None:
        """
        Construct a weight initializer dispatcher.

        Parameters
        ----------
        initializer_name:
            The string key identifying a registered initializer.
        """
        ...

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Register a weight initializer under a given name.
        """
        ...

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """
        Return the names of all registered initializers.
        """
        ...

    def __call__(self, tensor: ITensor, *args, **kwargs) -> ITensor:
        """
        Apply the initializer to a tensor.
        """
        ...


def _receptive_field(shape: tuple[int, ...]) -> int:
    field = 1
    for d in shape[1:-1]:
        field *= int(d)
    return field


def _calculate_fan_in(shape: tuple[int, ...]) -> int:
    """
    Compute the fan-in value for a channels-last parameter shape.

    Fan-in is the number of input connections contributing to a single
    output unit: every dimension except the outermost one.

    Parameters
    ----------
    shape:
        Shape of the weight tensor.

    Returns
    -------
    int
        The computed fan-in value.
    """
    if len(shape) == 0:
        return 1
    if len(shape) == 1:
        return int(shape[0])
    return _receptive_field(shape) * int(shape[-1])


def _calculate_fan_in_and_fan_out(shape: tuple[int, ...]) -> tuple[int, int]:
    """
    Compute both fan-in and fan-out values for a channels-last shape.

    Returns
    -------
    tuple[int, int]
        A tuple of (fan_in, fan_out).
    """
    if len(shape) == 0:
        return 1, 1
    if len(shape) == 1:
        return int(shape[0]), int(shape[0])
    field = _receptive_field(shape)
    return field * int(shape[-1]), field * int(shape[0])

"""
Concrete trainable parameter implementation.

This module defines `Parameter`, an infrastructure-level implementation of the
domain contract `IParameter`. A `Parameter` owns three FLOAT tensors of one
shape:

- `value`: the learnable values read by the forward pass
- `grad`: the gradient accumulator filled by the backward pass
- `velocity`: the momentum buffer carried across parameter updates

Design notes
------------
- The three tensors are allocated once and never reallocated, so nodes and
  optimizers may hold references to them for the network's lifetime.
- Gradients *accumulate*: every example of a minibatch adds into `grad`, and
  the training loop clears it with `zero_grad()` before the next minibatch.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..domain._element_kind import ElementKind
from ..domain._errors import ShapeMismatchError
from ..domain._parameter import IParameter
from .tensor._tensor import Tensor


class Parameter(IParameter):
    """
    Trainable value with its gradient accumulator and momentum buffer.

    Parameters
    ----------
    name : str
        Human-readable name used in logs and reprs (e.g. ``"conv1.weights"``).
    shape : Sequence[int]
        Shape shared by the value, gradient and velocity tensors.

    Notes
    -----
    All three tensors are zero-initialized; trainable nodes apply a weight
    initializer to `value` after construction.
    """

    def __init__(self, name: str, shape: Sequence[int]) -> None:
        self._name = str(name)
        self._value = Tensor(ElementKind.FLOAT, shape)
        self._grad = Tensor(ElementKind.FLOAT, shape)
        self._velocity = Tensor(ElementKind.FLOAT, shape)

    def __repr__(self) -> str:
        return f"Parameter(name={self._name!r}, shape={self.shape})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def shape(self) -> tuple[int, ...]:
        return self._value.shape

    @property
    def value(self) -> Tensor:
        """
        Return the tensor holding the parameter values.
        """
        return self._value

    @property
    def grad(self) -> Tensor:
        """
        Return the gradient accumulator.
        """
        return self._grad

    @property
    def velocity(self) -> Tensor:
        """
        Return the momentum buffer.
        """
        return self._velocity

    def zero_grad(self) -> None:
        """
        Reset the gradient accumulator to zero.
        """
        self._grad.zero()

    def accumulate_grad(self, g: np.ndarray) -> None:
        """
        Add `g` into the gradient accumulator.

        Parameters
        ----------
        g : np.ndarray
            Gradient contribution with the parameter's shape.

        Raises
        ------
        ShapeMismatchError
            If `g` does not have the parameter's shape.
        """
        if tuple(g.shape) != self.shape:
            raise ShapeMismatchError(f"{self._name} gradient", self.shape, g.shape)
        self._grad.data[...] += g

"""
Trainable parameter interface definitions.

A parameter bundles the tensors a trainable node owns for one learnable
quantity: the value itself, the gradient accumulator it is trained from,
and the momentum buffer carried between updates. All three share a shape.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._tensor import ITensor


@runtime_checkable
class IParameter(Protocol):
    """
    Domain-level interface for trainable parameters.

    Notes
    -----
    - `grad` accumulates contributions from every example of a minibatch
      and is consumed by the parameter update.
    - `velocity` persists across updates and is only written by the
      optimizer.
    """

    @property
    def name(self) -> str:
        """
        Return a human-readable name (e.g. ``"conv0.weights"``).
        """
        ...

    @property
    def value(self) -> ITensor:
        """
        Return the tensor holding the parameter values.
        """
        ...

    @property
    def grad(self) -> ITensor:
        """
        Return the gradient accumulator.
        """
        ...

    @property
    def velocity(self) -> ITensor:
        """
        Return the momentum buffer.
        """
        ...

    def zero_grad(self) -> None:
        """
        Reset the gradient accumulator to zero.
        """
        ...

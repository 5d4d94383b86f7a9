"""
Fully-connected node.

Every example is flattened to a feature vector of ``F = prod(dims[1:])``
values before the affine map ``y = W x + b`` is applied.

Parameters
----------
- weights: (width, F)
- bias:    (width,)
"""

from __future__ import annotations

from math import prod
from typing import Optional

import numpy as np

from ...domain._errors import InvalidHyperparameterError, ShapeMismatchError
from ..ops.fully_connected_cpu import fc_backward_cpu, fc_forward_cpu
from ..tensor._tensor import Tensor
from ..utils.weight_initializer import WeightInitializer
from ._base import NodeBase, require_float_input


class FullyConnectedNode(NodeBase):
    """
    Dense affine layer producing ``(N, width)``.

    Parameters
    ----------
    name : str
        Node name.
    input : NodeBase
        FLOAT predecessor of rank >= 2 whose outer dimension is the batch.
    width : int
        Number of output features.
    initializer : str, optional
        Registered weight initializer name. Defaults to ``"xavier"``.
    rng : Optional[np.random.Generator]
        Generator used by the initializer.
    """

    kind = "FullyConnected"

    def __init__(
        self,
        name: str,
        input: NodeBase,
        width: int,
        *,
        initializer: str = "xavier",
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        require_float_input(input)
        if len(input.dims) < 2:
            raise ShapeMismatchError(
                f"{self.kind} input rank (N, ...)", ">= 2", len(input.dims)
            )
        if width <= 0:
            raise InvalidHyperparameterError(self.kind, f"width must be > 0, got {width}")
        super().__init__(name, (input,), (input.dims[0], int(width)))

        flat_in = prod(input.dims[1:])
        self._weights = self._register_parameter("weights", (width, flat_in))
        self._bias = self._register_parameter("bias", (width,))
        WeightInitializer(initializer)(self._weights.value, rng=rng)

    @property
    def width(self) -> int:
        return self.dims[1]

    @property
    def weights(self) -> Tensor:
        return self._weights.value

    @property
    def bias(self) -> Tensor:
        return self._bias.value

    @property
    def weights_grad(self) -> Tensor:
        return self._weights.grad

    @property
    def bias_grad(self) -> Tensor:
        return self._bias.grad

    @property
    def weights_velocity(self) -> Tensor:
        return self._weights.velocity

    @property
    def bias_velocity(self) -> Tensor:
        return self._bias.velocity

    def forward(self) -> None:
        self.output.data[...] = fc_forward_cpu(
            self.inputs[0].output.data, self.weights.data, self.bias.data
        )

    def backward(self) -> None:
        src = self.inputs[0]
        grad_x, grad_w, grad_b = fc_backward_cpu(
            src.output.data, self.weights.data, self.grad.data
        )
        src.grad.data[...] += grad_x
        self._weights.accumulate_grad(grad_w)
        self._bias.accumulate_grad(grad_b)

"""
Convolution node (NHWC, square kernels).

Shape semantics
---------------
Input:
    x.shape == (N, H, W, C)

Output:
    y.shape == (N, H_out, W_out, depth)

with ``H_out = (H + 2*pad - kernel) / stride + 1`` (same for W), where the
quotient must be exact.

Parameters
----------
- weights: (depth, kernel, kernel, C)
- bias:    (depth,)
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._errors import InvalidHyperparameterError
from ...domain.utils._shape_inference import windowed_output_shape
from ..ops.conv2d_cpu import conv2d_backward_cpu, conv2d_forward_cpu
from ..tensor._tensor import Tensor
from ..utils.weight_initializer import WeightInitializer
from ._base import NodeBase, require_float_input


class ConvNode(NodeBase):
    """
    Sliding-window weighted sum plus bias, per output position and channel.

    Parameters
    ----------
    name : str
        Node name.
    input : NodeBase
        Predecessor producing a rank-4 FLOAT tensor.
    depth : int
        Number of output channels.
    kernel : int
        Square kernel extent.
    stride : int
        Step between windows.
    pad : int
        Zero padding on both sides of each spatial axis.
    initializer : str, optional
        Registered weight initializer name. Defaults to ``"kaiming"``.
    rng : Optional[np.random.Generator]
        Generator used by the initializer.

    Notes
    -----
    Biases start at zero.
    """

    kind = "Conv"

    def __init__(
        self,
        name: str,
        input: NodeBase,
        depth: int,
        kernel: int,
        stride: int = 1,
        pad: int = 0,
        *,
        initializer: str = "kaiming",
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        require_float_input(input)
        if depth <= 0:
            raise InvalidHyperparameterError(self.kind, f"depth must be > 0, got {depth}")
        dims = windowed_output_shape(
            input.dims,
            window=kernel,
            stride=stride,
            pad=pad,
            depth=depth,
            node_kind=self.kind,
        )
        super().__init__(name, (input,), dims)

        self._kernel = int(kernel)
        self._stride = int(stride)
        self._pad = int(pad)
        in_depth = input.dims[3]

        self._weights = self._register_parameter(
            "weights", (depth, kernel, kernel, in_depth)
        )
        self._bias = self._register_parameter("bias", (depth,))
        WeightInitializer(initializer)(self._weights.value, rng=rng)

    @property
    def depth(self) -> int:
        return self.dims[3]

    @property
    def kernel(self) -> int:
        return self._kernel

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def pad(self) -> int:
        return self._pad

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
        x = self.inputs[0].output.data
        self.output.data[...] = conv2d_forward_cpu(
            x,
            self.weights.data,
            self.bias.data,
            stride=self._stride,
            pad=self._pad,
        )

    def backward(self) -> None:
        src = self.inputs[0]
        grad_x, grad_w, grad_b = conv2d_backward_cpu(
            src.output.data,
            self.weights.data,
            self.grad.data,
            stride=self._stride,
            pad=self._pad,
        )
        src.grad.data[...] += grad_x
        self._weights.accumulate_grad(grad_w)
        self._bias.accumulate_grad(grad_b)

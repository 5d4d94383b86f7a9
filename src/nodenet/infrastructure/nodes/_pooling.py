"""
Pooling node (NHWC, square windows).

This module defines `MaxPoolNode`, which reduces each spatial window of its
input independently per channel. The reduction is selected by `PoolKind`:

- `PoolKind.MAX`: window maximum, winner-take-all backward routing
- `PoolKind.AVG`: window mean over the full window area, uniform backward

Shape semantics
---------------
Input:
    x.shape == (N, H, W, C)

Output:
    y.shape == (N, H_out, W_out, C)

Notes
-----
- MaxPool pads with `-inf` so padded positions never win.
- Padding must be smaller than the window, so no window lies in padding
  alone.
- The argmax indices of the last forward pass are kept so backward routes
  every window's gradient to the exact position that produced its output.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...domain._errors import InvalidHyperparameterError
from ...domain._pooling import IPoolingNode, PoolKind
from ...domain.utils._shape_inference import windowed_output_shape
from ..ops.pool2d_cpu import (
    avgpool2d_backward_cpu,
    avgpool2d_forward_cpu,
    maxpool2d_backward_cpu,
    maxpool2d_forward_cpu,
)
from ._base import NodeBase, require_float_input


class MaxPoolNode(NodeBase, IPoolingNode):
    """
    2D pooling node.

    Parameters
    ----------
    name : str
        Node name.
    input : NodeBase
        Predecessor producing a rank-4 FLOAT tensor.
    op : PoolKind
        Window reduction. Defaults to `PoolKind.MAX`.
    window : int
        Square window extent.
    stride : int
        Step between windows.
    pad : int
        Padding on both sides of each spatial axis.
    """

    kind = "MaxPool"

    def __init__(
        self,
        name: str,
        input: NodeBase,
        op: PoolKind = PoolKind.MAX,
        window: int = 2,
        stride: int = 2,
        pad: int = 0,
    ) -> None:
        require_float_input(input)
        if not isinstance(op, PoolKind):
            raise TypeError(f"op must be a PoolKind, got {op!r}")
        # every window must overlap the input, otherwise it pools padding only
        if pad >= window:
            raise InvalidHyperparameterError(
                self.kind, f"pad must be < window, got pad {pad} and window {window}"
            )
        dims = windowed_output_shape(
            input.dims,
            window=window,
            stride=stride,
            pad=pad,
            depth=input.dims[3] if len(input.dims) == 4 else 0,
            node_kind=self.kind,
        )
        super().__init__(name, (input,), dims)
        self._op = op
        self._window = int(window)
        self._stride = int(stride)
        self._pad = int(pad)
        self._argmax: Optional[np.ndarray] = None

    @property
    def op(self) -> PoolKind:
        return self._op

    @property
    def window(self) -> int:
        return self._window

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def pad(self) -> int:
        return self._pad

    def forward(self) -> None:
        x = self.inputs[0].output.data
        if self._op is PoolKind.MAX:
            y, self._argmax = maxpool2d_forward_cpu(
                x, window=self._window, stride=self._stride, pad=self._pad
            )
        else:
            y = avgpool2d_forward_cpu(
                x, window=self._window, stride=self._stride, pad=self._pad
            )
        self.output.data[...] = y

    def backward(self) -> None:
        src = self.inputs[0]
        if self._op is PoolKind.MAX:
            if self._argmax is None:
                raise RuntimeError(f"{self.name}: backward called before forward")
            grad_x = maxpool2d_backward_cpu(
                self.grad.data, self._argmax, x_shape=src.dims, pad=self._pad
            )
        else:
            grad_x = avgpool2d_backward_cpu(
                self.grad.data,
                x_shape=src.dims,
                window=self._window,
                stride=self._stride,
                pad=self._pad,
            )
        src.grad.data[...] += grad_x

"""
ReLU node: elementwise ``max(0, x)``.
"""

from __future__ import annotations

from ..ops.activation_cpu import relu_backward_cpu, relu_forward_cpu
from ._base import NodeBase, require_float_input


class ReLUNode(NodeBase):
    """
    Rectified linear unit. The output shape equals the input shape.

    Backward passes the gradient through where the forward input was
    strictly positive and blocks it elsewhere.
    """

    kind = "ReLU"

    def __init__(self, name: str, input: NodeBase) -> None:
        require_float_input(input)
        super().__init__(name, (input,), input.dims)

    def forward(self) -> None:
        self.output.data[...] = relu_forward_cpu(self.inputs[0].output.data)

    def backward(self) -> None:
        src = self.inputs[0]
        src.grad.data[...] += relu_backward_cpu(src.output.data, self.grad.data)

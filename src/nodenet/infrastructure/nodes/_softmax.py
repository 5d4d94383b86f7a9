"""
SoftMax node with its paired cross-entropy gradient seed.

The node normalizes each example's score vector into class probabilities.
It is also the loss node of a network: `backward()` ignores any incoming
gradient and seeds its input with ``softmax - one_hot(label)``, the
gradient of the cross-entropy loss through the softmax.
"""

from __future__ import annotations

import numpy as np

from ...domain._element_kind import ElementKind
from ...domain._errors import ElementKindError, ShapeMismatchError
from ..ops.activation_cpu import (
    cross_entropy_cpu,
    softmax_cross_entropy_grad_cpu,
    softmax_forward_cpu,
)
from ._base import NodeBase, require_float_input


class SoftMaxNode(NodeBase):
    """
    Row-wise softmax over ``(N, classes)`` scores.

    Parameters
    ----------
    name : str
        Node name.
    input : NodeBase
        FLOAT predecessor of shape ``(N, classes)``.
    expected : NodeBase
        INDEX predecessor of shape ``(N, 1)`` holding the class labels.

    Raises
    ------
    ShapeMismatchError
        If the input is not rank 2 or the label shape is not ``(N, 1)``.
    ElementKindError
        If `expected` does not produce INDEX values.
    """

    kind = "SoftMax"

    def __init__(self, name: str, input: NodeBase, expected: NodeBase) -> None:
        require_float_input(input)
        if len(input.dims) != 2:
            raise ShapeMismatchError(
                f"{self.kind} input rank (N, classes)", 2, len(input.dims)
            )
        if expected.output.element_kind is not ElementKind.INDEX:
            raise ElementKindError(ElementKind.INDEX, expected.output.element_kind)
        if expected.dims != (input.dims[0], 1):
            raise ShapeMismatchError(
                f"{self.kind} expected labels", (input.dims[0], 1), expected.dims
            )
        super().__init__(name, (input, expected), input.dims)

    @property
    def num_classes(self) -> int:
        return self.dims[1]

    @property
    def expected(self) -> NodeBase:
        return self.inputs[1]

    def forward(self) -> None:
        self.output.data[...] = softmax_forward_cpu(self.inputs[0].output.data)

    def backward(self) -> None:
        """
        Seed the input gradient with ``probabilities - one_hot(labels)``.

        Raises
        ------
        LabelRangeError
            If a bound label lies outside ``[0, num_classes)``.
        """
        src = self.inputs[0]
        src.grad.data[...] += softmax_cross_entropy_grad_cpu(
            self.output.data, self.expected.output.data
        )

    def loss(self) -> float:
        """
        Return the mean cross-entropy of the last forward pass.
        """
        return cross_entropy_cpu(self.output.data, self.expected.output.data)

    def accuracy(self) -> float:
        """
        Return the fraction of examples whose most probable class is the label.
        """
        predicted = np.argmax(self.output.data, axis=1)
        labels = self.expected.output.data.reshape(-1)
        return float(np.mean(predicted == labels))

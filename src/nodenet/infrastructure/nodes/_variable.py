"""
Variable node: the binding point for external data.
"""

from __future__ import annotations

from typing import Sequence

from ...domain._element_kind import ElementKind
from ...domain._errors import InvalidHyperparameterError
from ..tensor._tensor import Tensor
from ._base import NodeBase


class VariableNode(NodeBase):
    """
    Graph input whose output is filled by data binding.

    Parameters
    ----------
    name : str
        Node name.
    shape : Sequence[int]
        Declared shape ``(B, ...)``; the outer dimension is the minibatch
        size and must be at least 1.
    element_kind : ElementKind
        FLOAT for activations, INDEX for labels.

    Notes
    -----
    Forward and backward are no-ops: the training loop copies each
    minibatch into `output` before the forward pass, and no gradient is
    propagated past a Variable.
    """

    kind = "Variable"

    def __init__(
        self,
        name: str,
        shape: Sequence[int],
        element_kind: ElementKind = ElementKind.FLOAT,
    ) -> None:
        shape = tuple(int(d) for d in shape)
        if len(shape) == 0:
            raise InvalidHyperparameterError(
                self.kind, "shape must have an outer (minibatch) dimension"
            )
        if any(d <= 0 for d in shape):
            raise InvalidHyperparameterError(
                self.kind, f"all dimensions must be >= 1, got {shape}"
            )
        super().__init__(name, (), shape, element_kind)

    @property
    def batch_size(self) -> int:
        return self.dims[0]

    @property
    def element_kind(self) -> ElementKind:
        return self.output.element_kind

    def load_minibatch(self, data: Tensor, start: int) -> None:
        """
        Copy `batch_size` consecutive examples of `data` into `output`.

        Examples are taken from ``start`` onwards and wrap around to example
        0 past the end of `data`.
        """
        count = data.shape[0]
        start = start % count
        if start + self.batch_size <= count:
            self.output.copy_consecutive_slices(data, start)
            return
        for i in range(self.batch_size):
            self.output.copy_slice(data, (start + i) % count, i)

    def forward(self) -> None:
        pass

    def backward(self) -> None:
        pass

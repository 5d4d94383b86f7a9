"""
Shared base class for the node catalog.

`NodeBase` implements the storage half of the `INode` contract: it owns the
output tensor and the same-shaped gradient tensor, records its predecessor
nodes, and exposes trainable parameters. Concrete kinds implement
`forward()` and `backward()`.

Design notes
------------
- The output shape is passed in by the concrete kind after shape inference
  and never changes afterwards.
- `grad` is always a FLOAT tensor, also for INDEX Variables, so upstream
  kinds may add into any predecessor's gradient uniformly.
- Predecessors are referenced, never owned; the `Network` owns every node.
"""

from __future__ import annotations

from typing import ClassVar, List, Sequence, Tuple

from ...domain._element_kind import ElementKind
from ...domain._errors import ElementKindError
from ...domain._node import INode
from .._parameter import Parameter
from ..tensor._tensor import Tensor


class NodeBase(INode):
    """
    Base implementation for graph vertices.

    Parameters
    ----------
    name : str
        Unique name within the owning network (e.g. ``"conv3"``).
    inputs : Sequence[NodeBase]
        Predecessor nodes in positional order.
    dims : Sequence[int]
        Output shape, already inferred by the concrete kind.
    element_kind : ElementKind, optional
        Element kind of the output tensor. Defaults to FLOAT.
    """

    kind: ClassVar[str] = "Node"

    def __init__(
        self,
        name: str,
        inputs: Sequence["NodeBase"],
        dims: Sequence[int],
        element_kind: ElementKind = ElementKind.FLOAT,
    ) -> None:
        self._name = str(name)
        self._inputs: Tuple[NodeBase, ...] = tuple(inputs)
        self._output = Tensor(element_kind, dims)
        self._grad = Tensor(ElementKind.FLOAT, dims)
        self._params: List[Parameter] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, dims={self.dims})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def inputs(self) -> Tuple["NodeBase", ...]:
        return self._inputs

    @property
    def output(self) -> Tensor:
        return self._output

    @property
    def grad(self) -> Tensor:
        return self._grad

    @property
    def dims(self) -> Tuple[int, ...]:
        return self._output.shape

    def parameters(self) -> List[Parameter]:
        return list(self._params)

    def _register_parameter(self, suffix: str, shape: Sequence[int]) -> Parameter:
        p = Parameter(f"{self._name}.{suffix}", shape)
        self._params.append(p)
        return p

    def zero_grad(self) -> None:
        """
        Clear the output gradient and every parameter gradient.
        """
        self._grad.zero()
        for p in self._params:
            p.zero_grad()

    def forward(self) -> None:
        raise NotImplementedError

    def backward(self) -> None:
        raise NotImplementedError


def require_float_input(node: NodeBase) -> None:
    """
    Reject predecessors whose output is not a FLOAT tensor.

    Raises
    ------
    ElementKindError
        If `node` produces INDEX values.
    """
    if node.output.element_kind is not ElementKind.FLOAT:
        raise ElementKindError(ElementKind.FLOAT, node.output.element_kind)

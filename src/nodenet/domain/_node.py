"""
Graph node interface definitions.

This module defines the domain-level contract shared by every operator
kind in the node catalog. The network walks nodes through this uniform
forward/backward capability and never inspects a node's kind.

Design principles
-----------------
- A node's output shape is a pure function of its input shapes and its
  construction-time hyperparameters. It is computed once, when the node
  is created, and never recomputed.
- A node references its predecessors without owning them; the network
  owns every node.
- `forward` overwrites the node's `output`. `backward` reads the node's
  own `grad` (the gradient flowing into its output) and *adds* into the
  `grad` of its inputs and into its own parameter gradients.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, Tuple, runtime_checkable

from ._parameter import IParameter
from ._tensor import ITensor


@runtime_checkable
class INode(Protocol):
    """
    Protocol for graph vertices.

    Required members
    ----------------
    - `kind`: short operator name (e.g. ``"Conv"``).
    - `inputs`: ordered predecessor nodes.
    - `output`, `grad`: owned tensors of identical shape.
    - `forward()`, `backward()`: the per-kind math.
    - `parameters()`: trainable parameters (empty for stateless kinds).
    """

    @property
    def kind(self) -> str:
        """
        Return the operator kind name.
        """
        ...

    @property
    def inputs(self) -> Sequence["INode"]:
        """
        Return the predecessor nodes in positional order.
        """
        ...

    @property
    def output(self) -> ITensor:
        """
        Return the tensor produced by the last forward pass.
        """
        ...

    @property
    def grad(self) -> ITensor:
        """
        Return the gradient accumulated for this node's output.
        """
        ...

    @property
    def dims(self) -> Tuple[int, ...]:
        """
        Return the output shape inferred at construction.
        """
        ...

    def forward(self) -> None:
        """
        Recompute `output` from the current outputs of `inputs`.
        """
        ...

    def backward(self) -> None:
        """
        Propagate `grad` into the inputs' gradients and parameter gradients.
        """
        ...

    def parameters(self) -> Iterable[IParameter]:
        """
        Return the trainable parameters owned by this node.
        """
        ...

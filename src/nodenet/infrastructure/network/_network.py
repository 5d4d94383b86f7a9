"""
Graph container and trainer.

`Network` owns every node of a fixed feed-forward graph, in construction
order, and drives the two execution protocols:

- `train`: per minibatch, bind data, run forward over nodes ``0..loss``,
  run backward from the loss node down to node 0, then apply one momentum
  + L2 update to every trainable parameter of the visited nodes.
- `infer`: bind one minibatch, run forward over nodes ``0..target``, and
  return the target node's output tensor.

Design notes
------------
- Nodes may only reference nodes created earlier by the same network, so
  construction order is a topological order and the graph is acyclic.
- The minibatch cursor belongs to the network and persists across `train`
  calls. Each minibatch takes ``B`` consecutive examples starting at the
  cursor and wraps around to example 0 past the end of the data.
- The network performs no I/O. Progress is reported through an optional
  `ITrainingObserver` and through the standard `logging` module.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ...domain._element_kind import ElementKind
from ...domain._errors import (
    ElementKindError,
    GraphConstructionError,
    ShapeMismatchError,
)
from ...domain._optimizers import ITrainingObserver
from ...domain._pooling import PoolKind
from .._parameter import Parameter
from ..models._history import History
from ..nodes import (
    ConvNode,
    FullyConnectedNode,
    MaxPoolNode,
    NodeBase,
    ReLUNode,
    SoftMaxNode,
    VariableNode,
)
from ..optimizers import MomentumSGD, TrainingConfig
from ..tensor._tensor import Tensor

logger = logging.getLogger(__name__)


class Network:
    """
    Fixed-topology computational graph with a momentum SGD trainer.

    Parameters
    ----------
    config : Optional[TrainingConfig]
        Update hyperparameters. A default `TrainingConfig()` is created when
        omitted. The object is read at every parameter update, so mutating
        `network.config` between `train` calls takes effect immediately.
    seed : Optional[int]
        Seed of the generator used for weight initialization.

    Examples
    --------
    >>> net = Network(TrainingConfig(learning_rate=0.01))
    >>> x = net.create_variable((4, 8), ElementKind.FLOAT)
    >>> y = net.create_variable((4, 1), ElementKind.INDEX)
    >>> fc = net.create_fully_connected_node(x, 3)
    >>> sm = net.create_softmax_node(fc, y)
    """

    def __init__(
        self, config: Optional[TrainingConfig] = None, seed: Optional[int] = None
    ) -> None:
        self.config = config if config is not None else TrainingConfig()
        self._nodes: List[NodeBase] = []
        self._rng = np.random.default_rng(seed)
        self._cursor = 0

    def __repr__(self) -> str:
        return f"Network(nodes={len(self._nodes)}, config={self.config!r})"

    def __len__(self) -> int:
        return len(self._nodes)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def nodes(self) -> Tuple[NodeBase, ...]:
        """
        Return all nodes in construction order.
        """
        return tuple(self._nodes)

    @property
    def cursor(self) -> int:
        """
        Return the index of the first example of the next training minibatch.
        """
        return self._cursor

    def index_of(self, node: NodeBase) -> int:
        """
        Return the construction index of `node`.

        Raises
        ------
        GraphConstructionError
            If `node` does not belong to this network.
        """
        for i, n in enumerate(self._nodes):
            if n is node:
                return i
        raise GraphConstructionError(f"{node!r} does not belong to this network")

    def parameters(self) -> List[Parameter]:
        """
        Return every trainable parameter, in construction order.
        """
        return [p for n in self._nodes for p in n.parameters()]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def _next_name(self, kind: str) -> str:
        return f"{kind.lower()}{len(self._nodes)}"

    def _add(self, node: NodeBase) -> NodeBase:
        self._nodes.append(node)
        logger.debug("Created %s %s with output shape %s", node.kind, node.name, node.dims)
        return node

    def create_variable(
        self, shape: Sequence[int], kind: ElementKind = ElementKind.FLOAT
    ) -> VariableNode:
        """
        Create a graph input of declared shape ``(B, ...)``.
        """
        return self._add(VariableNode(self._next_name("Variable"), shape, kind))

    def create_conv_node(
        self,
        input: NodeBase,
        depth: int,
        kernel: int,
        stride: int = 1,
        pad: int = 0,
        *,
        initializer: str = "kaiming",
    ) -> ConvNode:
        """
        Create a convolution over a rank-4 NHWC input.

        Raises
        ------
        GraphConstructionError
            If `input` does not belong to this network.
        InvalidHyperparameterError
            If the configuration yields a fractional or non-positive
            output extent.
        """
        self.index_of(input)
        return self._add(
            ConvNode(
                self._next_name("Conv"),
                input,
                depth,
                kernel,
                stride,
                pad,
                initializer=initializer,
                rng=self._rng,
            )
        )

    def create_relu_node(self, input: NodeBase) -> ReLUNode:
        self.index_of(input)
        return self._add(ReLUNode(self._next_name("ReLU"), input))

    def create_max_pool_node(
        self,
        input: NodeBase,
        op: PoolKind = PoolKind.MAX,
        window: int = 2,
        stride: int = 2,
        pad: int = 0,
    ) -> MaxPoolNode:
        """
        Create a pooling node; `op` selects max or average reduction.
        """
        self.index_of(input)
        return self._add(
            MaxPoolNode(self._next_name("MaxPool"), input, op, window, stride, pad)
        )

    def create_fully_connected_node(
        self, input: NodeBase, width: int, *, initializer: str = "xavier"
    ) -> FullyConnectedNode:
        self.index_of(input)
        return self._add(
            FullyConnectedNode(
                self._next_name("FullyConnected"),
                input,
                width,
                initializer=initializer,
                rng=self._rng,
            )
        )

    def create_softmax_node(self, input: NodeBase, expected: NodeBase) -> SoftMaxNode:
        """
        Create the softmax/cross-entropy loss node.

        `expected` is an INDEX node of shape ``(B, 1)`` holding labels.
        """
        self.index_of(input)
        self.index_of(expected)
        return self._add(SoftMaxNode(self._next_name("SoftMax"), input, expected))

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------
    def _check_bindings(
        self,
        variables: Sequence[VariableNode],
        tensors: Sequence[Tensor],
        *,
        exact: bool,
    ) -> None:
        """
        Validate variable/tensor pairs before any node state is touched.

        Each tensor must have its Variable's element kind and rank and the
        same per-example dims. For `exact` bindings the outer dimension must
        equal the Variable's batch size; otherwise all tensors must hold the
        same number of examples (at least 1).
        """
        if len(variables) != len(tensors):
            raise GraphConstructionError(
                f"{len(variables)} variables bound to {len(tensors)} tensors"
            )
        for var, data in zip(variables, tensors):
            self.index_of(var)
            if not isinstance(var, VariableNode):
                raise GraphConstructionError(f"{var!r} is not a Variable")
            if not isinstance(data, Tensor):
                raise TypeError(f"bound data must be a Tensor, got {type(data).__name__}")
            if data.element_kind is not var.element_kind:
                raise ElementKindError(var.element_kind, data.element_kind)
            if len(data.shape) != len(var.dims) or data.shape[1:] != var.dims[1:]:
                raise ShapeMismatchError(
                    f"binding for {var.name}", (-1,) + var.dims[1:], data.shape
                )
            if exact and data.shape[0] != var.batch_size:
                raise ShapeMismatchError(f"binding for {var.name}", var.dims, data.shape)
            if data.shape[0] < 1:
                raise ShapeMismatchError(
                    f"binding for {var.name} example count", ">= 1", data.shape[0]
                )

        counts = [data.shape[0] for data in tensors]
        if not exact and len(set(counts)) > 1:
            raise ShapeMismatchError("example count of bound tensors", counts[0], counts)
        batches = [var.batch_size for var in variables]
        if len(set(batches)) > 1:
            raise ShapeMismatchError(
                "minibatch size of bound variables", batches[0], batches
            )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def _forward(self, nodes: Sequence[NodeBase]) -> None:
        for node in nodes:
            node.forward()

    def train(
        self,
        loss_node: SoftMaxNode,
        iterations: int,
        variables: Sequence[VariableNode],
        tensors: Sequence[Tensor],
        progress: Optional[ITrainingObserver] = None,
    ) -> History:
        """
        Run `iterations` minibatch steps of gradient descent.

        Parameters
        ----------
        loss_node : SoftMaxNode
            The node whose cross-entropy gradient seeds the backward pass.
        iterations : int
            Number of minibatches to process (>= 0).
        variables : Sequence[VariableNode]
            Variables to bind, paired positionally with `tensors`.
        tensors : Sequence[Tensor]
            Externally owned data, each ``(N, *variable.dims[1:])``. They are
            only read.
        progress : Optional[ITrainingObserver]
            Called after every parameter update.

        Returns
        -------
        History
            Per-iteration minibatch ``loss`` (mean cross-entropy) and
            ``accuracy``.

        Raises
        ------
        GraphConstructionError, ShapeMismatchError, ElementKindError
            On invalid bindings, before any node state is mutated.
        LabelRangeError
            If a bound label is outside the softmax width.
        """
        if not isinstance(loss_node, SoftMaxNode):
            raise GraphConstructionError(
                f"loss node must be a SoftMax node, got {loss_node!r}"
            )
        if iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {iterations}")
        target = self.index_of(loss_node)
        self._check_bindings(variables, tensors, exact=False)

        active = self._nodes[: target + 1]
        optimizer = MomentumSGD([p for n in active for p in n.parameters()], self.config)
        history = History()

        logger.debug(
            "Training %s for %d iterations over %d bound tensors",
            loss_node.name,
            iterations,
            len(tensors),
        )

        count = tensors[0].shape[0] if tensors else 1
        batch = variables[0].batch_size if variables else 1

        for it in range(iterations):
            for node in active:
                node.zero_grad()

            for var, data in zip(variables, tensors):
                var.load_minibatch(data, self._cursor)

            self._forward(active)
            for node in reversed(active):
                node.backward()

            logs = {"loss": loss_node.loss(), "accuracy": loss_node.accuracy()}
            optimizer.step()
            self._cursor = (self._cursor + batch) % count

            history.append_iteration(it, logs)
            if progress is not None:
                progress.on_iteration(it, logs)

        if iterations:
            logger.info(
                "Trained %d iterations (%d examples), mean loss %.4f, last loss %.4f",
                iterations,
                iterations * batch,
                history.mean("loss"),
                history.last()["loss"],
            )
        return history

    def infer(
        self,
        output_node: NodeBase,
        variables: Sequence[VariableNode],
        tensors: Sequence[Tensor],
    ) -> Tensor:
        """
        Run one forward pass and return `output_node`'s output tensor.

        Each bound tensor must hold exactly one minibatch. The returned
        tensor is owned by the node and overwritten by the next `train` or
        `infer` call.
        """
        target = self.index_of(output_node)
        self._check_bindings(variables, tensors, exact=True)

        for var, data in zip(variables, tensors):
            var.output.copy_from(data)

        logger.debug("Inferring %s", output_node.name)
        self._forward(self._nodes[: target + 1])
        return output_node.output

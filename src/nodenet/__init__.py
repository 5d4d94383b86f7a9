"""
nodenet: a small computational-graph engine for feed-forward networks.

Build a `Network` by chaining node factory calls, bind data `Tensor`s to
Variable nodes, then `train` (forward + backward + momentum SGD) or
`infer` (forward only).
"""

from .domain import (
    ElementKind,
    ElementKindError,
    GraphConstructionError,
    IndexOutOfBoundsError,
    InvalidHyperparameterError,
    ITrainingObserver,
    LabelRangeError,
    PoolKind,
    ShapeMismatchError,
)
from .infrastructure._parameter import Parameter
from .infrastructure.datasets import CIFAR10_LABELS, load_cifar10_batch
from .infrastructure.models import History
from .infrastructure.network import Network
from .infrastructure.nodes import (
    ConvNode,
    FullyConnectedNode,
    MaxPoolNode,
    NodeBase,
    ReLUNode,
    SoftMaxNode,
    VariableNode,
)
from .infrastructure.optimizers import MomentumSGD, TrainingConfig
from .infrastructure.tensor import Handle, Tensor
from .infrastructure.utils import TimerGuard
from .infrastructure.utils.weight_initializer import WeightInitializer

__version__ = "0.1.0"

"""
Backend-agnostic contracts: protocols, enums, and exceptions.

Nothing in this package depends on NumPy.
"""

from ._element_kind import ElementKind
from ._errors import (
    ElementKindError,
    GraphConstructionError,
    IndexOutOfBoundsError,
    InvalidHyperparameterError,
    LabelRangeError,
    ShapeMismatchError,
)
from ._node import INode
from ._optimizers import IOptimizer, ITrainingObserver
from ._parameter import IParameter
from ._pooling import IPoolingNode, PoolKind
from ._tensor import IHandle, ITensor

"""
Node catalog.

Exports one concrete class per operator kind, all derived from `NodeBase`.
"""

from ._base import NodeBase
from ._variable import VariableNode
from ._convolution import ConvNode
from ._relu import ReLUNode
from ._pooling import MaxPoolNode
from ._fully_connected import FullyConnectedNode
from ._softmax import SoftMaxNode

__all__ = [
    NodeBase.__name__,
    VariableNode.__name__,
    ConvNode.__name__,
    ReLUNode.__name__,
    MaxPoolNode.__name__,
    FullyConnectedNode.__name__,
    SoftMaxNode.__name__,
]

"""
Parameter initializers.

Importing the submodules registers ``kaiming``, ``kaiming_relu``,
``xavier``, ``xavier_uniform``, ``zeros`` and ``ones`` with
`WeightInitializer`.
"""

from ._xavier import *
from ._kaiming import *
from ._constants import *
from ._base import WeightInitializer

__all__ = [
    WeightInitializer.__name__,
]

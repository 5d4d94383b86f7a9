"""
Tensor storage and indexing (NumPy backend).

Exports
-------
- Tensor: owned, typed, fixed-shape dense array.
- Handle: bounds-checked coordinate accessor over a Tensor.
- storage_dtype: NumPy dtype backing each ElementKind.
"""

from ._tensor import Tensor, storage_dtype
from ._handle import Handle

__all__ = [
    Tensor.__name__,
    Handle.__name__,
    storage_dtype.__name__,
]

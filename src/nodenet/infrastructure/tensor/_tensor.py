"""
Concrete Tensor implementation (NumPy backend).

This module provides the concrete `Tensor` that satisfies the domain-level
`ITensor` protocol. A tensor owns a zero-initialized, contiguous NumPy
buffer whose dtype is fixed by its `ElementKind`:

- `ElementKind.FLOAT` -> ``np.float32``
- `ElementKind.INDEX` -> ``np.int64``

Design notes
------------
- The shape is immutable after construction; the buffer is never
  reallocated.
- Storage is exclusively owned. Every operation that returns a tensor
  (`extract_slice`, `clone`, `from_numpy`) returns an independent copy.
- Element access goes through `Handle` objects obtained from
  `get_handle`, which check the requested element kind.
- Slice operations act on the outermost dimension, which is the minibatch
  dimension throughout the engine.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence
from typing_extensions import Self

import numpy as np

from ...domain._element_kind import ElementKind
from ...domain._errors import (
    ElementKindError,
    IndexOutOfBoundsError,
    ShapeMismatchError,
)
from ...domain._tensor import ITensor
from ._shape_and_indexing import normalize_shape, num_elements

_STORAGE_DTYPES = {
    ElementKind.FLOAT: np.dtype(np.float32),
    ElementKind.INDEX: np.dtype(np.int64),
}


def storage_dtype(kind: ElementKind) -> np.dtype:
    """
    Return the NumPy dtype used to store elements of `kind`.
    """
    return _STORAGE_DTYPES[kind]


def check_index_values(values: Any) -> None:
    """
    Raise `ElementKindError` unless every value in `values` is integral.

    INDEX tensors store integers; float input is accepted only when it
    holds whole numbers, so fractional values are never truncated silently.
    """
    arr = np.asarray(values)
    if arr.dtype.kind in "iub":
        return
    if arr.dtype.kind != "f" or not np.all(np.isfinite(arr) & (arr == np.trunc(arr))):
        raise ElementKindError(ElementKind.FLOAT, ElementKind.INDEX)


class Tensor(ITensor):
    """
    Owned, typed, fixed-shape dense multi-dimensional array.

    Parameters
    ----------
    kind : ElementKind
        Element semantics, fixed for the tensor's lifetime.
    shape : Sequence[int]
        Ordered, non-negative dimension sizes.

    Notes
    -----
    - `data` exposes the underlying buffer for in-package kernels. Callers
      outside the engine should prefer handles or `to_numpy()`.
    """

    def __init__(self, kind: ElementKind, shape: Sequence[int]) -> None:
        if not isinstance(kind, ElementKind):
            raise TypeError(f"kind must be an ElementKind, got {kind!r}")
        self._kind = kind
        self._shape = normalize_shape(shape)
        self._data = np.zeros(self._shape, dtype=storage_dtype(kind))

    def __repr__(self) -> str:
        return f"Tensor(kind={self._kind}, shape={self._shape})"

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the tensor shape.
        """
        return self._shape

    @property
    def dims(self) -> tuple[int, ...]:
        """
        Alias of `shape`.
        """
        return self._shape

    @property
    def element_kind(self) -> ElementKind:
        return self._kind

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def size(self) -> int:
        return num_elements(self._shape)

    @property
    def data(self) -> np.ndarray:
        """
        Return the owned storage buffer (no copy).
        """
        return self._data

    def check_kind(self, kind: ElementKind) -> None:
        """
        Raise `ElementKindError` unless this tensor holds `kind` elements.
        """
        if kind is not self._kind:
            raise ElementKindError(kind, self._kind)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def get_handle(self, kind: Optional[ElementKind] = None) -> "Handle":
        """
        Return a bounds-checked accessor over this tensor.

        Parameters
        ----------
        kind : Optional[ElementKind]
            The element kind the caller intends to read/write. Passing the
            wrong kind is a programming error.

        Raises
        ------
        ElementKindError
            If `kind` is given and differs from the tensor's element kind.
        """
        from ._handle import Handle

        if kind is not None:
            self.check_kind(kind)
        return Handle(self)

    def to_numpy(self) -> np.ndarray:
        """
        Return an independent copy of the storage.
        """
        return self._data.copy()

    def copy_from_numpy(self, arr: Any) -> None:
        """
        Copy an array-like into this tensor, casting to the storage dtype.

        Raises
        ------
        ShapeMismatchError
            If the array shape differs from the tensor shape.
        ElementKindError
            If this is an INDEX tensor and `arr` holds non-integral values.
        """
        arr_nd = np.asarray(arr)
        if arr_nd.shape != self._shape:
            raise ShapeMismatchError("copy_from_numpy", self._shape, arr_nd.shape)
        if self._kind is ElementKind.INDEX:
            check_index_values(arr_nd)
        self._data[...] = arr_nd.astype(self._data.dtype, copy=False)

    @classmethod
    def from_numpy(cls, kind: ElementKind, arr: Any) -> Self:
        """
        Build a new tensor of `kind` holding a copy of `arr`.
        """
        arr_nd = np.asarray(arr)
        t = cls(kind, arr_nd.shape)
        t.copy_from_numpy(arr_nd)
        return t

    # ------------------------------------------------------------------
    # Whole-tensor mutation
    # ------------------------------------------------------------------
    def zero(self) -> None:
        """
        Reset every element to zero.
        """
        self._data.fill(0)

    def fill(self, value: float) -> None:
        """
        Set every element to `value`.
        """
        if self._kind is ElementKind.INDEX:
            check_index_values(value)
        self._data.fill(value)

    def copy_from(self, other: "Tensor") -> None:
        """
        Copy all elements of `other` into this tensor.

        Raises
        ------
        ElementKindError
            If the element kinds differ.
        ShapeMismatchError
            If the shapes differ.
        """
        self.check_kind(other.element_kind)
        if other.shape != self._shape:
            raise ShapeMismatchError("copy_from", self._shape, other.shape)
        self._data[...] = other.data

    def clone(self) -> "Tensor":
        """
        Return an independent copy of this tensor.
        """
        out = Tensor(self._kind, self._shape)
        out.data[...] = self._data
        return out

    # ------------------------------------------------------------------
    # Outer-dimension slices
    # ------------------------------------------------------------------
    def _check_outer_index(self, index: int) -> int:
        if len(self._shape) == 0:
            raise ShapeMismatchError("slice of a scalar tensor", ">= 1", 0)
        index = int(index)
        if index < 0 or index >= self._shape[0]:
            raise IndexOutOfBoundsError((index,), self._shape[:1])
        return index

    def _check_slice_source(self, source: "Tensor", what: str) -> None:
        if len(self._shape) == 0:
            raise ShapeMismatchError(f"{what} on a scalar tensor", ">= 1", 0)
        self.check_kind(source.element_kind)
        if len(source.shape) != len(self._shape) or source.shape[1:] != self._shape[1:]:
            raise ShapeMismatchError(
                f"{what} per-slice shape", self._shape[1:], source.shape[1:]
            )

    def extract_slice(self, index: int) -> "Tensor":
        """
        Copy the sub-tensor at outer index `index` into a new tensor.

        The result has shape ``self.shape[1:]`` and owns its storage.

        Raises
        ------
        IndexOutOfBoundsError
            If `index` is outside the outer dimension.
        """
        index = self._check_outer_index(index)
        out = Tensor(self._kind, self._shape[1:])
        out.data[...] = self._data[index]
        return out

    def copy_slice(self, source: "Tensor", src_index: int, dst_index: int) -> None:
        """
        Copy outer slice `src_index` of `source` into slice `dst_index`.

        Raises
        ------
        ElementKindError, ShapeMismatchError, IndexOutOfBoundsError
            On kind, per-slice shape, or index violations.
        """
        self._check_slice_source(source, "copy_slice")
        src_index = source._check_outer_index(src_index)
        dst_index = self._check_outer_index(dst_index)
        self._data[dst_index] = source.data[src_index]

    def copy_consecutive_slices(self, source: "Tensor", start_index: int) -> None:
        """
        Fill this tensor with consecutive outer slices of `source`.

        Copies slices ``start_index .. start_index + n - 1`` of `source`,
        where ``n = self.shape[0]``. Repeating the call with the same
        arguments yields the same contents.

        Raises
        ------
        IndexOutOfBoundsError
            If the run extends past the end of `source`.
        """
        self._check_slice_source(source, "copy_consecutive_slices")
        count = self._shape[0]
        start = int(start_index)
        if start < 0 or start + count > source.shape[0]:
            raise IndexOutOfBoundsError((start, start + count), source.shape[:1])
        self._data[...] = source.data[start : start + count]

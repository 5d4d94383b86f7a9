"""
Tensor and handle interface definitions.

This module defines the domain-level interfaces for tensors and their
coordinate-indexed accessors ("handles") using structural typing. The
interfaces capture the backend-agnostic surface required by nodes, the
network, and the trainer.

Notes
-----
- A tensor owns its storage exclusively. Slices returned by
  `extract_slice` are independent copies, never views.
- Shapes are immutable after construction.
- Coordinates are translated to linear offsets in row-major order (the
  last dimension varies fastest).
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from ._element_kind import ElementKind

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is an owned, typed, fixed-shape dense multi-dimensional
    array. Element access goes through a handle obtained with
    `get_handle`, which also checks that the caller reads the tensor as
    the element kind it really holds.
    """

    @property
    def shape(self) -> Tuple[int, ...]:
        """
        Return the immutable shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            Ordered dimension sizes.
        """
        ...

    @property
    def element_kind(self) -> ElementKind:
        """
        Return the element kind fixed at construction.
        """
        ...

    @property
    def size(self) -> int:
        """
        Return the total element count (product of the shape).
        """
        ...

    def get_handle(self, kind: Optional[ElementKind] = None) -> "IHandle":
        """
        Return a bounds-checked accessor over this tensor.

        Parameters
        ----------
        kind : Optional[ElementKind]
            Element kind the caller expects. If given and different from
            the tensor's kind, `ElementKindError` is raised.
        """
        ...

    def extract_slice(self, index: int) -> "ITensor":
        """
        Copy the sub-tensor at outer index `index` into a new tensor.
        """
        ...

    def copy_consecutive_slices(self, source: "ITensor", start_index: int) -> None:
        """
        Fill this tensor with consecutive outer slices of `source`.

        The number of slices copied equals this tensor's outer dimension.
        """
        ...

    def copy_from(self, other: "ITensor") -> None:
        """
        Copy all elements of `other` (same kind and shape) into this tensor.
        """
        ...

    def zero(self) -> None:
        """
        Reset every element to zero.
        """
        ...

    def to_numpy(self) -> Any:
        """
        Return a copy of the storage as a backend-native array.
        """
        ...


@runtime_checkable
class IHandle(Protocol):
    """
    Bounds-checked coordinate accessor over a tensor.

    A handle does not own storage; reads and writes go straight to the
    tensor it was obtained from.
    """

    @property
    def dims(self) -> Tuple[int, ...]:
        """
        Return the shape of the underlying tensor.
        """
        ...

    def offset_of(self, coordinates: Sequence[int]) -> int:
        """
        Translate coordinates to a row-major linear offset.
        """
        ...

    def at(self, coordinates: Sequence[int]) -> Number:
        """
        Read the element at `coordinates`.
        """
        ...

    def set(self, coordinates: Sequence[int], value: Number) -> None:
        """
        Write `value` at `coordinates`.
        """
        ...

    def max_arg(self) -> int:
        """
        Return the flattened index of the first maximum element.
        """
        ...

"""
Bounds-checked coordinate accessors over tensors.

A `Handle` is the typed window through which callers read and write
individual tensor elements. It translates coordinates into row-major
offsets, rejects coordinates of the wrong rank or outside their
dimension, and converts values to the tensor's element kind on write.
INDEX tensors only accept integral values.

Handles never own storage: they write straight into the buffer of the
tensor they were obtained from, so a handle stays valid for the tensor's
whole lifetime.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from ...domain._element_kind import ElementKind
from ...domain._errors import IndexOutOfBoundsError, ShapeMismatchError
from ...domain._tensor import IHandle
from ._shape_and_indexing import (
    coordinates_to_offset,
    offset_to_coordinates,
    strides_from_shape,
)
from ._tensor import Tensor, check_index_values

Number = Union[int, float]
Coordinates = Union[int, Sequence[int]]


class Handle(IHandle):
    """
    Coordinate-indexed accessor over a `Tensor`.

    Parameters
    ----------
    tensor : Tensor
        The tensor to access.

    Notes
    -----
    - ``h.at(coords)`` / ``h[coords]`` read an element.
    - ``h.set(coords, v)`` / ``h[coords] = v`` write an element.
    - Reads return Python scalars: `float` for FLOAT tensors, `int` for
      INDEX tensors.
    """

    def __init__(self, tensor: Tensor) -> None:
        self._tensor = tensor
        self._flat = tensor.data.reshape(-1)
        self._strides = strides_from_shape(tensor.shape)
        self._cast = float if tensor.element_kind is ElementKind.FLOAT else int
        self._integral = tensor.element_kind is ElementKind.INDEX

    def __repr__(self) -> str:
        return f"Handle({self._tensor!r})"

    @property
    def tensor(self) -> Tensor:
        return self._tensor

    @property
    def dims(self) -> tuple[int, ...]:
        return self._tensor.shape

    @property
    def size(self) -> int:
        return self._tensor.size

    def _convert(self, value: Number) -> Number:
        if self._integral:
            check_index_values(value)
        return self._cast(value)

    # ------------------------------------------------------------------
    # Coordinate access
    # ------------------------------------------------------------------
    def offset_of(self, coordinates: Coordinates) -> int:
        """
        Translate coordinates to a row-major linear offset.

        Raises
        ------
        ShapeMismatchError
            If the number of coordinates differs from the tensor rank.
        IndexOutOfBoundsError
            If any coordinate lies outside its dimension.
        """
        if isinstance(coordinates, (int, np.integer)):
            coordinates = (int(coordinates),)
        return coordinates_to_offset(coordinates, self.dims, self._strides)

    def coordinates_of(self, offset: int) -> tuple[int, ...]:
        """
        Translate a row-major linear offset back to coordinates.
        """
        return offset_to_coordinates(int(offset), self.dims)

    def at(self, coordinates: Coordinates) -> Number:
        return self._cast(self._flat[self.offset_of(coordinates)])

    def set(self, coordinates: Coordinates, value: Number) -> None:
        self._flat[self.offset_of(coordinates)] = self._convert(value)

    def __getitem__(self, coordinates: Coordinates) -> Number:
        return self.at(coordinates)

    def __setitem__(self, coordinates: Coordinates, value: Number) -> None:
        self.set(coordinates, value)

    # ------------------------------------------------------------------
    # Flat access
    # ------------------------------------------------------------------
    def _check_raw(self, index: int) -> int:
        index = int(index)
        if index < 0 or index >= self.size:
            raise IndexOutOfBoundsError((index,), (self.size,))
        return index

    def raw(self, index: int) -> Number:
        """
        Read the element at linear offset `index`.
        """
        return self._cast(self._flat[self._check_raw(index)])

    def set_raw(self, index: int, value: Number) -> None:
        """
        Write the element at linear offset `index`.
        """
        self._flat[self._check_raw(index)] = self._convert(value)

    # ------------------------------------------------------------------
    # Whole-tensor helpers
    # ------------------------------------------------------------------
    def extract_slice(self, index: int) -> Tensor:
        """
        Return an independent copy of outer slice `index`.
        """
        return self._tensor.extract_slice(index)

    def max_arg(self) -> int:
        """
        Return the flattened index of the maximum element.

        Ties resolve to the first maximum in row-major order.

        Raises
        ------
        ShapeMismatchError
            If the tensor is empty.
        """
        if self.size == 0:
            raise ShapeMismatchError("max_arg of an empty tensor", ">= 1 element", 0)
        return int(np.argmax(self._flat))

    def clear(self, value: Number = 0) -> None:
        """
        Set every element to `value`.
        """
        self._flat[...] = self._convert(value)

    def randomize(
        self, scale: float, rng: Optional[np.random.Generator] = None
    ) -> None:
        """
        Fill a FLOAT tensor with uniform samples in ``[-scale, scale)``.
        """
        self._tensor.check_kind(ElementKind.FLOAT)
        rng = rng if rng is not None else np.random.default_rng()
        self._flat[...] = rng.uniform(-scale, scale, size=self.size)

    def dump(self, prefix: str = "", suffix: str = "") -> str:
        """
        Render the tensor as text.

        The rendering is the prefix, the elements in row-major order
        separated by single spaces, then the suffix. The engine performs no
        I/O itself; callers print or log the returned string.
        """
        if self._tensor.element_kind is ElementKind.FLOAT:
            body = " ".join(f"{float(v):.4g}" for v in self._flat)
        else:
            body = " ".join(str(int(v)) for v in self._flat)
        return f"{prefix}{body}{suffix}"

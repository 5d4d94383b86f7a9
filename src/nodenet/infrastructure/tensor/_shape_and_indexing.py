"""
Row-major shape and coordinate helpers.

These helpers translate between multi-dimensional coordinates and linear
offsets into contiguous storage. The layout is row-major: the last
dimension varies fastest, so the stride of dimension ``i`` is the product
of all dimensions after it.

All validation raises the nodenet contract errors so that every handle
access fails fast instead of clamping or wrapping.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from ...domain._errors import IndexOutOfBoundsError, ShapeMismatchError


def normalize_shape(shape: Sequence[int]) -> Tuple[int, ...]:
    """
    Convert a shape-like sequence into a tuple of non-negative ints.

    Raises
    ------
    ValueError
        If any dimension is negative.
    """
    dims = tuple(int(d) for d in shape)
    for d in dims:
        if d < 0:
            raise ValueError(f"Tensor dimensions must be non-negative, got {dims}")
    return dims


def num_elements(shape: Sequence[int]) -> int:
    """Return the product of `shape` (1 for a scalar shape)."""
    size = 1
    for d in shape:
        size *= int(d)
    return size


def strides_from_shape(shape: Sequence[int]) -> Tuple[int, ...]:
    """
    Return the row-major element strides for `shape`.

    Examples
    --------
    >>> strides_from_shape((2, 3, 4))
    (12, 4, 1)
    """
    strides = []
    step = 1
    for d in reversed(tuple(shape)):
        strides.append(step)
        step *= int(d)
    return tuple(reversed(strides))


def coordinates_to_offset(
    coordinates: Sequence[int], shape: Sequence[int], strides: Sequence[int]
) -> int:
    """
    Translate bounds-checked coordinates into a linear offset.

    Parameters
    ----------
    coordinates : Sequence[int]
        One coordinate per dimension.
    shape : Sequence[int]
        Tensor shape.
    strides : Sequence[int]
        Row-major strides for `shape`.

    Raises
    ------
    ShapeMismatchError
        If the number of coordinates differs from the tensor rank.
    IndexOutOfBoundsError
        If any coordinate is negative or not below its dimension.
    """
    if len(coordinates) != len(shape):
        raise ShapeMismatchError("coordinate rank", len(shape), len(coordinates))

    offset = 0
    for c, d, s in zip(coordinates, shape, strides):
        c = int(c)
        if c < 0 or c >= d:
            raise IndexOutOfBoundsError(coordinates, shape)
        offset += c * s
    return offset


def offset_to_coordinates(offset: int, shape: Sequence[int]) -> Tuple[int, ...]:
    """
    Inverse of `coordinates_to_offset` for a row-major layout.

    Raises
    ------
    IndexOutOfBoundsError
        If `offset` is outside ``[0, num_elements(shape))``.
    """
    size = num_elements(shape)
    if offset < 0 or offset >= size:
        raise IndexOutOfBoundsError((offset,), (size,))

    coords = [0] * len(shape)
    rest = int(offset)
    for i in range(len(shape) - 1, -1, -1):
        coords[i] = rest % int(shape[i])
        rest //= int(shape[i])
    return tuple(coords)

"""
Contract-violation exceptions for nodenet.

This module defines the exceptions raised when a tensor, node, or network
is used outside of its contract. All of them are programming errors that
are detected eagerly (at construction or call time) and halt the offending
call; the engine never attempts recovery or silent coercion.

Each exception derives from the closest matching builtin so callers may
catch either the precise class or the builtin family (e.g. `ValueError`).
"""

from __future__ import annotations

from typing import Sequence


class ShapeMismatchError(ValueError):
    """
    Raised when two shapes that must agree do not.

    Typical triggers are a rank mismatch between a coordinate tuple and a
    tensor, copying between tensors of incompatible shapes, or binding a
    data tensor to a Variable with a different per-example shape.

    Attributes
    ----------
    expected : object
        The shape, shape fragment, or rank required by the operation.
    actual : object
        The shape (or rank) that was supplied.
    """

    def __init__(self, what: str, expected: object, actual: object) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        what : str
            Short description of the operation or operand being checked.
        expected : object
            Required shape (a sequence of ints) or rank (an int).
        actual : object
            Supplied shape or rank.
        """
        self.expected = _normalize(expected)
        self.actual = _normalize(actual)
        super().__init__(f"{what}: expected {self.expected}, got {self.actual}.")


def _normalize(value: object) -> object:
    if isinstance(value, Sequence) and not isinstance(value, str):
        return tuple(int(d) for d in value)
    return value


class IndexOutOfBoundsError(IndexError):
    """
    Raised when a coordinate or slice index falls outside its dimension.

    Attributes
    ----------
    coordinates : tuple[int, ...]
        The offending coordinates.
    shape : tuple[int, ...]
        Shape of the tensor being indexed.
    """

    def __init__(self, coordinates: Sequence[int], shape: Sequence[int]) -> None:
        self.coordinates = tuple(int(c) for c in coordinates)
        self.shape = tuple(int(d) for d in shape)
        super().__init__(
            f"Coordinates {self.coordinates} out of bounds for shape {self.shape}."
        )


class ElementKindError(TypeError):
    """
    Raised when a tensor is accessed or bound as the wrong element kind.

    Attributes
    ----------
    expected : str
        Name of the element kind the caller asked for.
    actual : str
        Name of the tensor's real element kind.
    """

    def __init__(self, expected: object, actual: object) -> None:
        self.expected = str(expected)
        self.actual = str(actual)
        super().__init__(
            f"Element kind mismatch: requested {self.expected}, "
            f"tensor holds {self.actual}."
        )


class InvalidHyperparameterError(ValueError):
    """
    Raised when node hyperparameters are invalid for the input shape.

    This covers non-positive kernel/stride/width values, negative padding,
    and window configurations that would produce a fractional or
    non-positive output dimension.
    """

    def __init__(self, node_kind: str, message: str) -> None:
        self.node_kind = node_kind
        super().__init__(f"{node_kind}: {message}")


class GraphConstructionError(ValueError):
    """
    Raised when a network is wired or driven inconsistently.

    Examples are referencing a node that belongs to another network, or
    calling `train`/`infer` with variable and tensor lists of different
    lengths.
    """


class LabelRangeError(RuntimeError):
    """
    Raised when a label fed to a SoftMax node is outside its class range.

    Attributes
    ----------
    label : int
        The offending label value.
    num_classes : int
        Width of the softmax vector.
    example : int
        Index of the example within the minibatch.
    """

    def __init__(self, label: int, num_classes: int, example: int) -> None:
        self.label = int(label)
        self.num_classes = int(num_classes)
        self.example = int(example)
        super().__init__(
            f"Label {self.label} of example {self.example} is outside "
            f"[0, {self.num_classes})."
        )

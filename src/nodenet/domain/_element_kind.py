"""
Element kind tags for tensors.

A tensor holds exactly one kind of element for its whole lifetime:
floating-point activation/parameter values, or integer index/label values.
The tag is backend-agnostic; the infrastructure layer maps each kind to a
concrete storage dtype.
"""

from __future__ import annotations

from enum import Enum


class ElementKind(Enum):
    """
    Element semantics of a tensor.

    Members
    -------
    FLOAT
        Floating-point activations, parameters, and gradients.
    INDEX
        Non-negative integer indices, such as class labels.
    """

    FLOAT = "float"
    INDEX = "index"

    def __str__(self) -> str:
        return self.name

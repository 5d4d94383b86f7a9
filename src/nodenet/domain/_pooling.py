"""
Pooling node interface definitions.

This module defines the pooling operation kinds and the domain-level
Protocol that pooling nodes satisfy.

Shape semantics
---------------
Input:
    x.shape == (N, H, W, C)

Output:
    y.shape == (N, H_out, W_out, C)

where:
    H_out = (H + 2*pad - window) / stride + 1
    W_out = (W + 2*pad - window) / stride + 1

and both quotients must be exact.

Notes
-----
This module contains **no NumPy or backend-specific logic**.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from ._node import INode


class PoolKind(Enum):
    """
    Reduction applied over each pooling window.

    Members
    -------
    MAX
        Output the largest element; backward routes the gradient to the
        first position attaining it.
    AVG
        Output the window mean over the full window area (padding
        included); backward spreads the gradient uniformly.
    """

    MAX = "max"
    AVG = "avg"


@runtime_checkable
class IPoolingNode(INode, Protocol):
    """
    Protocol for 2D pooling nodes operating on NHWC tensors.

    Design constraints
    ------------------
    - Pooling nodes own no trainable parameters.
    - Pooling preserves the batch and channel dimensions.
    """

    @property
    def op(self) -> PoolKind:
        """
        Return the pooling reduction kind.
        """
        ...

    @property
    def window(self) -> int:
        """
        Return the square window extent.
        """
        ...

    @property
    def stride(self) -> int:
        """
        Return the step between windows.
        """
        ...

    @property
    def pad(self) -> int:
        """
        Return the symmetric spatial padding.
        """
        ...

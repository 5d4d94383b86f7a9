"""
Output-shape rules shared by the windowed node kinds.

Convolution and pooling both slide a square window over the two spatial
dimensions of an NHWC tensor. The output extent along each spatial axis is

    out = (in + 2 * pad - window) / stride + 1

and must be a positive integer. Configurations that would truncate
(a fractional quotient) or collapse the output are rejected here rather
than silently floored.
"""

from __future__ import annotations

from typing import Tuple

from .._errors import InvalidHyperparameterError, ShapeMismatchError


def window_output_dim(
    size: int, window: int, stride: int, pad: int, *, node_kind: str
) -> int:
    """
    Compute one spatial output dimension of a windowed operation.

    Parameters
    ----------
    size : int
        Input extent along the axis.
    window : int
        Window (kernel) extent along the axis.
    stride : int
        Step between consecutive windows.
    pad : int
        Symmetric padding added on both sides of the axis.
    node_kind : str
        Name of the node kind, used in error messages.

    Returns
    -------
    int
        The output extent.

    Raises
    ------
    InvalidHyperparameterError
        If `window` or `stride` is not positive, `pad` is negative, or the
        configuration produces a fractional or non-positive output extent.
    """
    if window <= 0:
        raise InvalidHyperparameterError(node_kind, f"window must be > 0, got {window}")
    if stride <= 0:
        raise InvalidHyperparameterError(node_kind, f"stride must be > 0, got {stride}")
    if pad < 0:
        raise InvalidHyperparameterError(node_kind, f"pad must be >= 0, got {pad}")

    span = size + 2 * pad - window
    if span < 0:
        raise InvalidHyperparameterError(
            node_kind,
            f"window {window} does not fit input extent {size} with pad {pad}",
        )
    if span % stride != 0:
        raise InvalidHyperparameterError(
            node_kind,
            f"(in + 2*pad - window) = {span} is not divisible by stride {stride}",
        )
    return span // stride + 1


def windowed_output_shape(
    input_shape: Tuple[int, ...],
    *,
    window: int,
    stride: int,
    pad: int,
    depth: int,
    node_kind: str,
) -> Tuple[int, int, int, int]:
    """
    Infer the NHWC output shape of a convolution or pooling node.

    Parameters
    ----------
    input_shape : tuple[int, ...]
        Input shape; must be rank 4 `(N, H, W, C)`.
    window, stride, pad : int
        Window hyperparameters, identical along both spatial axes.
    depth : int
        Output channel count.
    node_kind : str
        Name of the node kind, used in error messages.

    Returns
    -------
    tuple[int, int, int, int]
        `(N, H_out, W_out, depth)`.
    """
    if len(input_shape) != 4:
        raise ShapeMismatchError(
            f"{node_kind} input rank (N, H, W, C)", 4, len(input_shape)
        )
    n, h, w, _ = input_shape
    h_out = window_output_dim(h, window, stride, pad, node_kind=node_kind)
    w_out = window_output_dim(w, window, stride, pad, node_kind=node_kind)
    return (int(n), h_out, w_out, int(depth))

"""
CPU-based Conv2D kernels for nodenet (NumPy, NHWC).

This module provides reference implementations of 2D convolution forward
and backward passes on the CPU. The kernels loop explicitly over output
positions and vectorize across the batch and channel dimensions with
`np.tensordot`, keeping them easy to read while avoiding a per-element
Python loop.

Tensor layout
-------------
- x      : (N, H, W, C_in)
- weight : (C_out, K, K, C_in)
- bias   : (C_out,)
- y      : (N, H_out, W_out, C_out)

with ``H_out = (H + 2 * pad - K) // stride + 1`` (same for W). Callers
are expected to have validated that the quotient is exact.

Non-goals
---------
- Dilation, groups, or asymmetric padding
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


def _pad_nhwc(x: np.ndarray, pad: int, value: float = 0.0) -> np.ndarray:
    """
    Pad the two spatial axes of an NHWC array symmetrically.
    """
    if pad == 0:
        return x
    return np.pad(
        x,
        pad_width=((0, 0), (pad, pad), (pad, pad), (0, 0)),
        mode="constant",
        constant_values=value,
    )


def conv2d_forward_cpu(
    x: np.ndarray,
    w: np.ndarray,
    b: np.ndarray,
    *,
    stride: int,
    pad: int,
) -> np.ndarray:
    """
    Compute the forward pass of a 2D convolution (CPU, NumPy).

    Parameters
    ----------
    x : np.ndarray
        Input of shape (N, H, W, C_in).
    w : np.ndarray
        Kernel weights of shape (C_out, K, K, C_in).
    b : np.ndarray
        Bias of shape (C_out,).
    stride : int
        Step between neighbouring windows.
    pad : int
        Zero-padding applied to both spatial axes.

    Returns
    -------
    np.ndarray
        Output of shape (N, H_out, W_out, C_out), in the dtype of `x`.

    Raises
    ------
    ValueError
        If the input channel count does not match the kernel.
    """
    N, H, W, C_in = x.shape
    C_out, K, K2, C_in2 = w.shape
    if C_in != C_in2 or K != K2:
        raise ValueError(
            f"kernel mismatch: x has {C_in} channels, weight shape is {w.shape}"
        )

    H_out = (H + 2 * pad - K) // stride + 1
    W_out = (W + 2 * pad - K) // stride + 1

    x_pad = _pad_nhwc(x, pad)
    y = np.empty((N, H_out, W_out, C_out), dtype=x.dtype)

    for i in range(H_out):
        h0 = i * stride
        for j in range(W_out):
            w0 = j * stride
            patch = x_pad[:, h0 : h0 + K, w0 : w0 + K, :]
            # (N, K, K, C_in) x (C_out, K, K, C_in) -> (N, C_out)
            y[:, i, j, :] = np.tensordot(patch, w, axes=([1, 2, 3], [1, 2, 3])) + b

    return y


def conv2d_backward_cpu(
    x: np.ndarray,
    w: np.ndarray,
    grad_out: np.ndarray,
    *,
    stride: int,
    pad: int,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compute the backward pass of a 2D convolution (CPU, NumPy).

    Parameters
    ----------
    x : np.ndarray
        Forward input of shape (N, H, W, C_in).
    w : np.ndarray
        Kernel weights of shape (C_out, K, K, C_in).
    grad_out : np.ndarray
        Gradient with respect to the output, shape (N, H_out, W_out, C_out).
    stride, pad : int
        Same hyperparameters used during the forward pass.

    Returns
    -------
    tuple[np.ndarray, np.ndarray, np.ndarray]
        ``(grad_x, grad_w, grad_b)`` with the shapes of `x`, `w`, and
        ``(C_out,)``. The weight and bias gradients are summed over the
        batch.

    Notes
    -----
    Gradient formulas, per output position (i, j):

        grad_w += grad_out[:, i, j, :]^T . patch(i, j)
        grad_x[patch(i, j)] += grad_out[:, i, j, :] . w
        grad_b = sum over (N, H_out, W_out) of grad_out
    """
    N, H, W, _ = x.shape
    _, K, _, _ = w.shape
    _, H_out, W_out, _ = grad_out.shape

    x_pad = _pad_nhwc(x, pad)
    grad_x_pad = np.zeros_like(x_pad)
    grad_w = np.zeros_like(w)

    for i in range(H_out):
        h0 = i * stride
        for j in range(W_out):
            w0 = j * stride
            g = grad_out[:, i, j, :]  # (N, C_out)
            patch = x_pad[:, h0 : h0 + K, w0 : w0 + K, :]
            grad_w += np.tensordot(g, patch, axes=([0], [0]))
            grad_x_pad[:, h0 : h0 + K, w0 : w0 + K, :] += np.tensordot(
                g, w, axes=([1], [0])
            )

    grad_b = grad_out.sum(axis=(0, 1, 2)).astype(grad_out.dtype, copy=False)
    grad_x = grad_x_pad[:, pad : pad + H, pad : pad + W, :]
    return grad_x, grad_w, grad_b

"""
CPU reference implementations for 2D pooling operations (NumPy, NHWC).

Implemented pooling variants
-----------------------------
- MaxPool2D (forward + backward)
- AveragePool2D (forward + backward)

Design notes
------------
- Padding semantics:
  - MaxPool uses `-inf` padding so padded values never win.
  - AvgPool uses zero padding and averages over the full window area.
- Max ties resolve to the first maximum in row-major window order, and
  the backward pass routes the gradient to exactly that position.
- All operations assume **NHWC** layout and square windows.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


def _out_hw(H: int, W: int, window: int, stride: int, pad: int) -> Tuple[int, int]:
    """
    Compute output spatial dimensions for a 2D pooling operation.
    """
    H_out = (H + 2 * pad - window) // stride + 1
    W_out = (W + 2 * pad - window) // stride + 1
    return H_out, W_out


def maxpool2d_forward_cpu(
    x: np.ndarray,
    *,
    window: int,
    stride: int,
    pad: int = 0,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    MaxPool2D forward pass (CPU, NumPy) for NHWC tensors.

    Parameters
    ----------
    x : np.ndarray
        Input tensor of shape (N, H, W, C).
    window : int
        Square pooling window extent.
    stride : int
        Pooling stride.
    pad : int, optional
        Padding applied to both spatial axes.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        y :
            Output tensor of shape (N, H_out, W_out, C).
        argmax_idx :
            Integer array of shape (N, H_out, W_out, C) storing the
            flattened index ``h * W_pad + w`` into the padded input plane
            where the maximum was selected.
    """
    N, H, W, C = x.shape
    H_out, W_out = _out_hw(H, W, window, stride, pad)

    if pad:
        x_pad = np.pad(
            x,
            pad_width=((0, 0), (pad, pad), (pad, pad), (0, 0)),
            mode="constant",
            constant_values=-np.inf,
        )
    else:
        x_pad = x
    W_pad = x_pad.shape[2]

    y = np.empty((N, H_out, W_out, C), dtype=x.dtype)
    argmax_idx = np.empty((N, H_out, W_out, C), dtype=np.int64)

    for i in range(H_out):
        h0 = i * stride
        for j in range(W_out):
            w0 = j * stride
            patch = x_pad[:, h0 : h0 + window, w0 : w0 + window, :]
            flat = patch.reshape(N, window * window, C)
            k = np.argmax(flat, axis=1)  # (N, C), first max wins
            y[:, i, j, :] = np.take_along_axis(flat, k[:, None, :], axis=1)[:, 0, :]
            argmax_idx[:, i, j, :] = (h0 + k // window) * W_pad + (w0 + k % window)

    return y, argmax_idx


def maxpool2d_backward_cpu(
    grad_out: np.ndarray,
    argmax_idx: np.ndarray,
    *,
    x_shape: Tuple[int, int, int, int],
    pad: int = 0,
) -> np.ndarray:
    """
    MaxPool2D backward pass (CPU, NumPy), NHWC.

    Parameters
    ----------
    grad_out : np.ndarray
        Gradient with respect to output, shape (N, H_out, W_out, C).
    argmax_idx : np.ndarray
        Argmax indices returned by the forward pass.
    x_shape : tuple[int, int, int, int]
        Original input shape (N, H, W, C).
    pad : int, optional
        Padding used during the forward pass.

    Returns
    -------
    np.ndarray
        Gradient with respect to input, shape (N, H, W, C).

    Notes
    -----
    - Each window routes its whole gradient to its winning position; the
      sum of the returned gradient equals the sum of `grad_out`.
    - Overlapping windows that share a winner accumulate into it.
    """
    N, H, W, C = x_shape
    H_pad = H + 2 * pad
    W_pad = W + 2 * pad

    grad_x_pad = np.zeros((N, H_pad, W_pad, C), dtype=grad_out.dtype)

    n_idx = np.arange(N)[:, None]
    c_idx = np.arange(C)[None, :]
    H_out, W_out = grad_out.shape[1], grad_out.shape[2]
    for i in range(H_out):
        for j in range(W_out):
            idx = argmax_idx[:, i, j, :]
            np.add.at(
                grad_x_pad,
                (n_idx, idx // W_pad, idx % W_pad, c_idx),
                grad_out[:, i, j, :],
            )

    return grad_x_pad[:, pad : pad + H, pad : pad + W, :]


def avgpool2d_forward_cpu(
    x: np.ndarray,
    *,
    window: int,
    stride: int,
    pad: int = 0,
) -> np.ndarray:
    """
    AvgPool2D forward pass (CPU, NumPy), NHWC.

    Notes
    -----
    - Zero-padding is applied.
    - The average is computed over the full window area
      (``window * window``), including padded values.
    """
    N, H, W, C = x.shape
    H_out, W_out = _out_hw(H, W, window, stride, pad)

    x_pad = np.pad(
        x,
        pad_width=((0, 0), (pad, pad), (pad, pad), (0, 0)),
        mode="constant",
        constant_values=0.0,
    )

    y = np.zeros((N, H_out, W_out, C), dtype=x.dtype)
    denom = float(window * window)

    for i in range(H_out):
        h0 = i * stride
        for j in range(W_out):
            w0 = j * stride
            patch = x_pad[:, h0 : h0 + window, w0 : w0 + window, :]
            y[:, i, j, :] = patch.sum(axis=(1, 2)) / denom

    return y


def avgpool2d_backward_cpu(
    grad_out: np.ndarray,
    *,
    x_shape: Tuple[int, int, int, int],
    window: int,
    stride: int,
    pad: int = 0,
) -> np.ndarray:
    """
    AvgPool2D backward pass (CPU, NumPy), NHWC.

    Notes
    -----
    - Gradients are distributed uniformly over each pooling window.
    - Padding regions are dropped after accumulation.
    """
    N, H, W, C = x_shape
    H_out, W_out = grad_out.shape[1], grad_out.shape[2]

    grad_x_pad = np.zeros((N, H + 2 * pad, W + 2 * pad, C), dtype=grad_out.dtype)
    denom = float(window * window)

    for i in range(H_out):
        h0 = i * stride
        for j in range(W_out):
            w0 = j * stride
            go = grad_out[:, i, j, :] / denom
            grad_x_pad[:, h0 : h0 + window, w0 : w0 + window, :] += go[
                :, None, None, :
            ]

    return grad_x_pad[:, pad : pad + H, pad : pad + W, :]

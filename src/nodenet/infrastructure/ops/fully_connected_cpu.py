"""
CPU kernels for the fully-connected (dense) operator.

Every example of the batch is flattened to a feature vector before the
affine map is applied, so the operator accepts inputs of any rank >= 2
whose outer dimension is the batch.

Shapes
------
- x      : (N, *features)       flattened to (N, F)
- weight : (O, F)
- bias   : (O,)
- y      : (N, O)
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


def fc_forward_cpu(x: np.ndarray, w: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Compute ``y = x_flat @ w.T + b``.

    Raises
    ------
    ValueError
        If the flattened feature count does not match the weight matrix.
    """
    N = x.shape[0]
    x_flat = x.reshape(N, -1)
    if x_flat.shape[1] != w.shape[1]:
        raise ValueError(
            f"feature mismatch: input has {x_flat.shape[1]}, weight shape is {w.shape}"
        )
    return (x_flat @ w.T + b).astype(x.dtype, copy=False)


def fc_backward_cpu(
    x: np.ndarray, w: np.ndarray, grad_out: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Backward pass of the fully-connected operator.

    Returns
    -------
    tuple[np.ndarray, np.ndarray, np.ndarray]
        ``(grad_x, grad_w, grad_b)``:

        - ``grad_x = grad_out @ w`` reshaped to ``x.shape``
        - ``grad_w = grad_out.T @ x_flat`` (sum of per-example outer products)
        - ``grad_b = grad_out.sum(axis=0)``
    """
    N = x.shape[0]
    x_flat = x.reshape(N, -1)
    grad_x = (grad_out @ w).reshape(x.shape)
    grad_w = grad_out.T @ x_flat
    grad_b = grad_out.sum(axis=0)
    return grad_x, grad_w, grad_b

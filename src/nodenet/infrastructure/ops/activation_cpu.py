"""
CPU kernels for the elementwise and classification operators.

- ReLU forward/backward
- Softmax forward (row-wise, numerically stabilized)
- Softmax/cross-entropy gradient seed and loss value
"""

from __future__ import annotations

import numpy as np

from ...domain._errors import LabelRangeError


def relu_forward_cpu(x: np.ndarray) -> np.ndarray:
    """
    Elementwise ``max(0, x)``.
    """
    return np.maximum(x, 0).astype(x.dtype, copy=False)


def relu_backward_cpu(x: np.ndarray, grad_out: np.ndarray) -> np.ndarray:
    """
    Pass `grad_out` through where the forward input was positive.
    """
    return np.where(x > 0, grad_out, 0).astype(grad_out.dtype, copy=False)


def softmax_forward_cpu(x: np.ndarray) -> np.ndarray:
    """
    Row-wise softmax of a (N, C) array.

    The row maximum is subtracted before exponentiation, which leaves the
    result unchanged but keeps `exp` from overflowing.
    """
    shifted = x - x.max(axis=1, keepdims=True)
    e = np.exp(shifted)
    return (e / e.sum(axis=1, keepdims=True)).astype(x.dtype, copy=False)


def check_labels(labels: np.ndarray, num_classes: int) -> np.ndarray:
    """
    Flatten a (N,) or (N, 1) label array and validate its range.

    Raises
    ------
    LabelRangeError
        For the first label outside ``[0, num_classes)``.
    """
    flat = labels.reshape(labels.shape[0], -1)[:, 0].astype(np.int64, copy=False)
    bad = np.nonzero((flat < 0) | (flat >= num_classes))[0]
    if bad.size:
        n = int(bad[0])
        raise LabelRangeError(int(flat[n]), num_classes, n)
    return flat


def softmax_cross_entropy_grad_cpu(
    probs: np.ndarray, labels: np.ndarray
) -> np.ndarray:
    """
    Gradient of cross-entropy through softmax: ``probs - one_hot(labels)``.
    """
    flat = check_labels(labels, probs.shape[1])
    grad = probs.copy()
    grad[np.arange(probs.shape[0]), flat] -= 1
    return grad


def cross_entropy_cpu(probs: np.ndarray, labels: np.ndarray) -> float:
    """
    Mean of ``-log(p[label])`` over the batch.

    Probabilities are clipped away from zero so a saturated wrong
    prediction yields a large finite loss instead of `inf`.
    """
    flat = check_labels(labels, probs.shape[1])
    picked = probs[np.arange(probs.shape[0]), flat].astype(np.float64)
    return float(-np.log(np.clip(picked, 1e-12, None)).mean())

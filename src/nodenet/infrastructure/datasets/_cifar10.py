"""
CIFAR-10 binary batch loader.

The binary distribution stores fixed-size records::

    <1 byte label><1024 red bytes><1024 green bytes><1024 blue bytes>

Each colour plane is a row-major 32x32 image. The loader returns NHWC FLOAT
images normalized to ``[0, 1]`` and ``(N, 1)`` INDEX labels, the layout the
network's Variables expect.

Dataset: http://www.cs.toronto.edu/~kriz/cifar.html
"""

from __future__ import annotations

import logging
import os
from typing import Tuple, Union

import numpy as np

from ...domain._element_kind import ElementKind
from ..tensor._tensor import Tensor

logger = logging.getLogger(__name__)

CIFAR10_LABELS: Tuple[str, ...] = (
    "airplane",
    "automobile",
    "bird",
    "cat",
    "deer",
    "dog",
    "frog",
    "horse",
    "ship",
    "truck",
)

CIFAR10_IMAGE_SIDE = 32
CIFAR10_CHANNELS = 3
CIFAR10_RECORD_SIZE = 1 + CIFAR10_IMAGE_SIDE * CIFAR10_IMAGE_SIDE * CIFAR10_CHANNELS


def decode_cifar10_records(raw: bytes, num_images: int) -> Tuple[Tensor, Tensor]:
    """
    Decode `num_images` records from an in-memory byte string.

    Raises
    ------
    ValueError
        If `raw` holds fewer than ``num_images`` complete records.
    """
    if num_images <= 0:
        raise ValueError(f"num_images must be > 0, got {num_images}")
    needed = num_images * CIFAR10_RECORD_SIZE
    if len(raw) < needed:
        raise ValueError(
            f"CIFAR-10 data truncated: need {needed} bytes for {num_images} "
            f"images, got {len(raw)}"
        )

    records = np.frombuffer(raw, dtype=np.uint8, count=needed).reshape(
        num_images, CIFAR10_RECORD_SIZE
    )
    side = CIFAR10_IMAGE_SIDE
    # (N, C, H, W) planar -> (N, H, W, C)
    planes = records[:, 1:].reshape(num_images, CIFAR10_CHANNELS, side, side)
    pixels = planes.transpose(0, 2, 3, 1).astype(np.float32) / 255.0

    images = Tensor.from_numpy(ElementKind.FLOAT, pixels)
    labels = Tensor.from_numpy(ElementKind.INDEX, records[:, :1].astype(np.int64))
    return images, labels


def load_cifar10_batch(
    path: Union[str, os.PathLike], num_images: int = 10000
) -> Tuple[Tensor, Tensor]:
    """
    Load the first `num_images` images of a CIFAR-10 binary batch file.

    Parameters
    ----------
    path : str or os.PathLike
        Path to e.g. ``cifar-10-batches-bin/data_batch_1.bin``.
    num_images : int, optional
        Number of records to read. Defaults to a full batch (10000).

    Returns
    -------
    tuple[Tensor, Tensor]
        ``(images, labels)`` with shapes ``(N, 32, 32, 3)`` (FLOAT) and
        ``(N, 1)`` (INDEX).

    Raises
    ------
    ValueError
        If the file is shorter than ``num_images`` records.
    """
    logger.info("Loading CIFAR-10 batch %s (%d images)", os.fspath(path), num_images)
    with open(path, "rb") as f:
        raw = f.read(num_images * CIFAR10_RECORD_SIZE)
    return decode_cifar10_records(raw, num_images)

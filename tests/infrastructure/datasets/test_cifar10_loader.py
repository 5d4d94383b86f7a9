import os
import tempfile
import unittest

import numpy as np

from nodenet import CIFAR10_LABELS, ElementKind, load_cifar10_batch
from nodenet.infrastructure.datasets._cifar10 import CIFAR10_RECORD_SIZE


def _make_records(labels, seed=0) -> tuple[bytes, np.ndarray]:
    rng = np.random.default_rng(seed)
    planes = rng.integers(0, 256, size=(len(labels), 3, 32, 32), dtype=np.uint8)
    raw = b"".join(
        bytes([label]) + planes[i].tobytes() for i, label in enumerate(labels)
    )
    return raw, planes


class TestCifar10Loader(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "data_batch_1.bin")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, raw: bytes) -> None:
        with open(self.path, "wb") as f:
            f.write(raw)

    def test_decodes_planar_records_to_nhwc(self):
        raw, planes = _make_records([3, 9, 0])
        self._write(raw)

        images, labels = load_cifar10_batch(self.path, num_images=3)

        self.assertEqual(images.shape, (3, 32, 32, 3))
        self.assertEqual(images.element_kind, ElementKind.FLOAT)
        self.assertEqual(labels.shape, (3, 1))
        self.assertEqual(labels.element_kind, ElementKind.INDEX)
        np.testing.assert_array_equal(labels.to_numpy().ravel(), [3, 9, 0])

        img = images.to_numpy()
        self.assertGreaterEqual(float(img.min()), 0.0)
        self.assertLessEqual(float(img.max()), 1.0)
        # pixel (y=1, x=2) of image 1, green channel
        h = images.get_handle(ElementKind.FLOAT)
        self.assertAlmostEqual(h.at((1, 1, 2, 1)), planes[1, 1, 1, 2] / 255.0, places=6)
        np.testing.assert_allclose(
            img, planes.transpose(0, 2, 3, 1).astype(np.float32) / 255.0
        )

    def test_reads_only_requested_images(self):
        raw, _ = _make_records([1, 2, 3])
        self._write(raw)
        images, labels = load_cifar10_batch(self.path, num_images=2)
        self.assertEqual(images.shape[0], 2)
        np.testing.assert_array_equal(labels.to_numpy().ravel(), [1, 2])

    def test_truncated_file(self):
        raw, _ = _make_records([1, 2])
        self._write(raw[: 2 * CIFAR10_RECORD_SIZE - 1])
        with self.assertRaises(ValueError):
            load_cifar10_batch(self.path, num_images=2)

    def test_invalid_count(self):
        self._write(b"")
        with self.assertRaises(ValueError):
            load_cifar10_batch(self.path, num_images=0)

    def test_labels(self):
        self.assertEqual(len(CIFAR10_LABELS), 10)
        self.assertEqual(CIFAR10_LABELS[0], "airplane")
        self.assertEqual(CIFAR10_LABELS[9], "truck")


if __name__ == "__main__":
    unittest.main()

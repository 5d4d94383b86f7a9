import unittest

import numpy as np

from nodenet import ElementKind, Tensor
from nodenet.domain._errors import ElementKindError, ShapeMismatchError


class TestTensorConstruction(unittest.TestCase):
    def test_zero_initialized_float(self):
        t = Tensor(ElementKind.FLOAT, (2, 3, 4))
        self.assertEqual(t.shape, (2, 3, 4))
        self.assertEqual(t.dims, (2, 3, 4))
        self.assertEqual(t.size, 24)
        self.assertEqual(t.dtype, np.float32)
        np.testing.assert_array_equal(t.to_numpy(), np.zeros((2, 3, 4)))

    def test_index_kind_uses_int64(self):
        t = Tensor(ElementKind.INDEX, (5, 1))
        self.assertEqual(t.element_kind, ElementKind.INDEX)
        self.assertEqual(t.dtype, np.int64)

    def test_negative_dimension_rejected(self):
        with self.assertRaises(ValueError):
            Tensor(ElementKind.FLOAT, (2, -1))

    def test_kind_must_be_element_kind(self):
        with self.assertRaises(TypeError):
            Tensor("float", (2,))

    def test_zero_sized_dimension(self):
        t = Tensor(ElementKind.FLOAT, (0, 3))
        self.assertEqual(t.size, 0)


class TestTensorCopies(unittest.TestCase):
    def test_from_numpy_copies(self):
        arr = np.arange(6, dtype=np.float64).reshape(2, 3)
        t = Tensor.from_numpy(ElementKind.FLOAT, arr)
        arr[0, 0] = 100.0
        self.assertEqual(t.to_numpy()[0, 0], 0.0)
        self.assertEqual(t.dtype, np.float32)

    def test_to_numpy_is_independent(self):
        t = Tensor(ElementKind.FLOAT, (2,))
        out = t.to_numpy()
        out[0] = 5.0
        self.assertEqual(t.to_numpy()[0], 0.0)

    def test_copy_from_numpy_shape_mismatch(self):
        t = Tensor(ElementKind.FLOAT, (2, 2))
        with self.assertRaises(ShapeMismatchError) as cm:
            t.copy_from_numpy(np.zeros((4,)))
        self.assertEqual(cm.exception.expected, (2, 2))
        self.assertEqual(cm.exception.actual, (4,))

    def test_index_tensor_rejects_fractional_values(self):
        with self.assertRaises(ElementKindError):
            Tensor.from_numpy(ElementKind.INDEX, [[1.7]])
        t = Tensor.from_numpy(ElementKind.INDEX, np.array([[1.0], [3.0]]))
        np.testing.assert_array_equal(t.to_numpy(), [[1], [3]])
        with self.assertRaises(ElementKindError):
            t.copy_from_numpy([[0.0], [0.25]])
        with self.assertRaises(ElementKindError):
            t.fill(2.5)
        np.testing.assert_array_equal(t.to_numpy(), [[1], [3]])

    def test_copy_from_requires_same_kind_and_shape(self):
        dst = Tensor(ElementKind.FLOAT, (2, 2))
        with self.assertRaises(ElementKindError):
            dst.copy_from(Tensor(ElementKind.INDEX, (2, 2)))
        with self.assertRaises(ShapeMismatchError):
            dst.copy_from(Tensor(ElementKind.FLOAT, (2, 3)))

        src = Tensor.from_numpy(ElementKind.FLOAT, [[1, 2], [3, 4]])
        dst.copy_from(src)
        np.testing.assert_array_equal(dst.to_numpy(), [[1, 2], [3, 4]])

    def test_clone_is_independent(self):
        src = Tensor.from_numpy(ElementKind.INDEX, [[1], [2]])
        c = src.clone()
        c.get_handle(ElementKind.INDEX).set((0, 0), 9)
        self.assertEqual(src.get_handle(ElementKind.INDEX).at((0, 0)), 1)
        self.assertEqual(c.element_kind, ElementKind.INDEX)

    def test_zero_and_fill(self):
        t = Tensor(ElementKind.FLOAT, (3,))
        t.fill(2.5)
        np.testing.assert_array_equal(t.to_numpy(), [2.5, 2.5, 2.5])
        t.zero()
        np.testing.assert_array_equal(t.to_numpy(), [0.0, 0.0, 0.0])


if __name__ == "__main__":
    unittest.main()

import unittest

from nodenet.domain._errors import (
    ElementKindError,
    GraphConstructionError,
    IndexOutOfBoundsError,
    InvalidHyperparameterError,
    LabelRangeError,
    ShapeMismatchError,
)
from nodenet.domain._element_kind import ElementKind


class TestErrorHierarchy(unittest.TestCase):
    def test_builtin_bases(self):
        self.assertTrue(issubclass(ShapeMismatchError, ValueError))
        self.assertTrue(issubclass(IndexOutOfBoundsError, IndexError))
        self.assertTrue(issubclass(ElementKindError, TypeError))
        self.assertTrue(issubclass(InvalidHyperparameterError, ValueError))
        self.assertTrue(issubclass(GraphConstructionError, ValueError))
        self.assertTrue(issubclass(LabelRangeError, RuntimeError))


class TestErrorAttributes(unittest.TestCase):
    def test_shape_mismatch_normalizes_shapes(self):
        err = ShapeMismatchError("copy_from", [2, 3], (2, 4))
        self.assertEqual(err.expected, (2, 3))
        self.assertEqual(err.actual, (2, 4))
        self.assertIn("copy_from", str(err))

    def test_shape_mismatch_keeps_scalars(self):
        err = ShapeMismatchError("rank", 4, 3)
        self.assertEqual(err.expected, 4)
        self.assertEqual(err.actual, 3)

    def test_index_out_of_bounds(self):
        err = IndexOutOfBoundsError([1, 5], [2, 3])
        self.assertEqual(err.coordinates, (1, 5))
        self.assertEqual(err.shape, (2, 3))

    def test_element_kind_uses_names(self):
        err = ElementKindError(ElementKind.FLOAT, ElementKind.INDEX)
        self.assertEqual(err.expected, "FLOAT")
        self.assertEqual(err.actual, "INDEX")

    def test_label_range(self):
        err = LabelRangeError(12, 10, 3)
        self.assertEqual((err.label, err.num_classes, err.example), (12, 10, 3))
        self.assertIn("[0, 10)", str(err))


if __name__ == "__main__":
    unittest.main()

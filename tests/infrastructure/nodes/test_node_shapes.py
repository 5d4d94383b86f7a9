import unittest

from nodenet import ElementKind, Network, PoolKind
from nodenet.domain._errors import (
    ElementKindError,
    InvalidHyperparameterError,
    ShapeMismatchError,
)


class TestNodeShapeInference(unittest.TestCase):
    def setUp(self) -> None:
        self.net = Network(seed=0)
        self.x = self.net.create_variable((8, 32, 32, 3), ElementKind.FLOAT)
        self.y = self.net.create_variable((8, 1), ElementKind.INDEX)

    def test_variable(self):
        self.assertEqual(self.x.dims, (8, 32, 32, 3))
        self.assertEqual(self.x.batch_size, 8)
        self.assertEqual(self.y.output.element_kind, ElementKind.INDEX)

    def test_variable_needs_positive_dims(self):
        with self.assertRaises(InvalidHyperparameterError):
            self.net.create_variable((0, 3))
        with self.assertRaises(InvalidHyperparameterError):
            self.net.create_variable(())

    def test_conv(self):
        conv = self.net.create_conv_node(self.x, 16, 5, 1, 2)
        self.assertEqual(conv.dims, (8, 32, 32, 16))
        self.assertEqual(conv.weights.shape, (16, 5, 5, 3))
        self.assertEqual(conv.bias.shape, (16,))
        self.assertEqual(conv.weights_grad.shape, (16, 5, 5, 3))
        self.assertEqual(conv.bias_velocity.shape, (16,))
        self.assertEqual(float(abs(conv.bias.to_numpy()).sum()), 0.0)
        self.assertGreater(float(abs(conv.weights.to_numpy()).sum()), 0.0)

    def test_conv_fractional_output_rejected(self):
        with self.assertRaises(InvalidHyperparameterError):
            self.net.create_conv_node(self.x, 4, 4, 3, 0)

    def test_conv_invalid_depth(self):
        with self.assertRaises(InvalidHyperparameterError):
            self.net.create_conv_node(self.x, 0, 3, 1, 1)

    def test_conv_needs_rank_four(self):
        fc = self.net.create_fully_connected_node(self.x, 4)
        with self.assertRaises(ShapeMismatchError):
            self.net.create_conv_node(fc, 4, 1, 1, 0)

    def test_relu_preserves_shape(self):
        conv = self.net.create_conv_node(self.x, 4, 3, 1, 1)
        self.assertEqual(self.net.create_relu_node(conv).dims, conv.dims)

    def test_pool(self):
        pool = self.net.create_max_pool_node(self.x, PoolKind.MAX, 2, 2, 0)
        self.assertEqual(pool.dims, (8, 16, 16, 3))
        self.assertEqual(pool.parameters(), [])
        self.assertIs(pool.op, PoolKind.MAX)

    def test_pool_fractional_output_rejected(self):
        with self.assertRaises(InvalidHyperparameterError):
            self.net.create_max_pool_node(self.x, PoolKind.MAX, 3, 2, 0)

    def test_pool_padding_must_be_smaller_than_window(self):
        x = self.net.create_variable((1, 2, 2, 1), ElementKind.FLOAT)
        for op in (PoolKind.MAX, PoolKind.AVG):
            with self.assertRaises(InvalidHyperparameterError):
                self.net.create_max_pool_node(x, op, 1, 1, 1)
            with self.assertRaises(InvalidHyperparameterError):
                self.net.create_max_pool_node(x, op, 2, 2, 3)
        pool = self.net.create_max_pool_node(x, PoolKind.MAX, 2, 1, 1)
        self.assertEqual(pool.dims, (1, 3, 3, 1))

    def test_pool_op_must_be_pool_kind(self):
        with self.assertRaises(TypeError):
            self.net.create_max_pool_node(self.x, "max", 2, 2, 0)

    def test_fully_connected_flattens(self):
        fc = self.net.create_fully_connected_node(self.x, 10)
        self.assertEqual(fc.dims, (8, 10))
        self.assertEqual(fc.weights.shape, (10, 32 * 32 * 3))
        self.assertEqual(fc.bias.shape, (10,))

    def test_fully_connected_invalid_width(self):
        with self.assertRaises(InvalidHyperparameterError):
            self.net.create_fully_connected_node(self.x, 0)

    def test_softmax(self):
        fc = self.net.create_fully_connected_node(self.x, 10)
        sm = self.net.create_softmax_node(fc, self.y)
        self.assertEqual(sm.dims, (8, 10))
        self.assertEqual(sm.num_classes, 10)
        self.assertIs(sm.expected, self.y)

    def test_softmax_expected_must_be_index(self):
        fc = self.net.create_fully_connected_node(self.x, 10)
        labels = self.net.create_variable((8, 1), ElementKind.FLOAT)
        with self.assertRaises(ElementKindError):
            self.net.create_softmax_node(fc, labels)

    def test_softmax_expected_shape(self):
        fc = self.net.create_fully_connected_node(self.x, 10)
        labels = self.net.create_variable((4, 1), ElementKind.INDEX)
        with self.assertRaises(ShapeMismatchError):
            self.net.create_softmax_node(fc, labels)

    def test_softmax_input_rank(self):
        with self.assertRaises(ShapeMismatchError):
            self.net.create_softmax_node(self.x, self.y)

    def test_index_inputs_rejected_by_float_kinds(self):
        with self.assertRaises(ElementKindError):
            self.net.create_relu_node(self.y)


if __name__ == "__main__":
    unittest.main()

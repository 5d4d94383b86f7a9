import unittest

import numpy as np

from nodenet import ElementKind, Network, PoolKind, Tensor
from nodenet.domain._errors import LabelRangeError


class TestForwardBackward(unittest.TestCase):
    def test_conv_one_by_one(self):
        net = Network()
        x = net.create_variable((1, 2, 2, 1))
        conv = net.create_conv_node(x, 1, 1, 1, 0)
        conv.weights.fill(2.0)
        conv.bias.fill(0.5)

        x.output.fill(1.0)
        conv.forward()
        np.testing.assert_allclose(conv.output.to_numpy(), np.full((1, 2, 2, 1), 2.5))

        conv.grad.fill(1.0)
        conv.backward()
        np.testing.assert_allclose(x.grad.to_numpy(), np.full((1, 2, 2, 1), 2.0))
        np.testing.assert_allclose(conv.weights_grad.to_numpy(), [[[[4.0]]]])
        np.testing.assert_allclose(conv.bias_grad.to_numpy(), [4.0])

    def test_backward_accumulates_until_zeroed(self):
        net = Network()
        x = net.create_variable((1, 2, 2, 1))
        conv = net.create_conv_node(x, 1, 1, 1, 0)
        x.output.fill(1.0)
        conv.forward()
        conv.grad.fill(1.0)
        conv.backward()
        conv.backward()
        np.testing.assert_allclose(conv.bias_grad.to_numpy(), [8.0])

        conv.zero_grad()
        np.testing.assert_array_equal(conv.bias_grad.to_numpy(), [0.0])
        np.testing.assert_array_equal(conv.grad.to_numpy(), np.zeros((1, 2, 2, 1)))

    def test_relu(self):
        net = Network()
        x = net.create_variable((1, 4))
        relu = net.create_relu_node(x)
        x.output.copy_from_numpy([[-1.0, 0.0, 0.5, 2.0]])
        relu.forward()
        np.testing.assert_array_equal(relu.output.to_numpy(), [[0.0, 0.0, 0.5, 2.0]])
        relu.grad.copy_from_numpy([[1.0, 2.0, 3.0, 4.0]])
        relu.backward()
        np.testing.assert_array_equal(x.grad.to_numpy(), [[0.0, 0.0, 3.0, 4.0]])

    def test_max_pool(self):
        net = Network()
        x = net.create_variable((1, 2, 2, 1))
        pool = net.create_max_pool_node(x, PoolKind.MAX, 2, 2, 0)
        x.output.copy_from_numpy(np.array([[1.0, 3.0], [2.0, 4.0]]).reshape(1, 2, 2, 1))
        pool.forward()
        self.assertEqual(pool.output.get_handle(ElementKind.FLOAT).at((0, 0, 0, 0)), 4.0)
        pool.grad.fill(1.0)
        pool.backward()
        np.testing.assert_array_equal(x.grad.to_numpy().reshape(2, 2), [[0, 0], [0, 1]])

    def test_padded_max_pool_conserves_gradient(self):
        net = Network()
        x = net.create_variable((1, 2, 2, 1))
        pool = net.create_max_pool_node(x, PoolKind.MAX, 2, 1, 1)
        x.output.copy_from_numpy(np.array([[1.0, 3.0], [2.0, 4.0]]).reshape(1, 2, 2, 1))
        pool.forward()
        self.assertTrue(np.isfinite(pool.output.to_numpy()).all())
        pool.grad.fill(1.0)
        pool.backward()
        self.assertAlmostEqual(float(x.grad.to_numpy().sum()), 9.0)

    def test_avg_pool(self):
        net = Network()
        x = net.create_variable((1, 2, 2, 1))
        pool = net.create_max_pool_node(x, PoolKind.AVG, 2, 2, 0)
        x.output.copy_from_numpy(np.array([[1.0, 3.0], [2.0, 4.0]]).reshape(1, 2, 2, 1))
        pool.forward()
        self.assertAlmostEqual(float(pool.output.to_numpy().sum()), 2.5)
        pool.grad.fill(1.0)
        pool.backward()
        np.testing.assert_allclose(x.grad.to_numpy(), np.full((1, 2, 2, 1), 0.25))

    def test_max_pool_backward_before_forward(self):
        net = Network()
        x = net.create_variable((1, 2, 2, 1))
        pool = net.create_max_pool_node(x, PoolKind.MAX, 2, 2, 0)
        with self.assertRaises(RuntimeError):
            pool.backward()

    def test_fully_connected(self):
        net = Network()
        x = net.create_variable((2, 3))
        fc = net.create_fully_connected_node(x, 2, initializer="ones")
        x.output.copy_from_numpy([[1.0, 2.0, 3.0], [0.0, 1.0, 0.0]])
        fc.bias.copy_from_numpy([0.5, -0.5])
        fc.forward()
        np.testing.assert_allclose(fc.output.to_numpy(), [[6.5, 5.5], [1.5, 0.5]])

        fc.grad.copy_from_numpy([[1.0, 0.0], [0.0, 1.0]])
        fc.backward()
        np.testing.assert_allclose(x.grad.to_numpy(), np.ones((2, 3)))
        np.testing.assert_allclose(
            fc.weights_grad.to_numpy(), [[1.0, 2.0, 3.0], [0.0, 1.0, 0.0]]
        )
        np.testing.assert_allclose(fc.bias_grad.to_numpy(), [1.0, 1.0])

    def test_softmax_seeds_probabilities_minus_one_hot(self):
        net = Network()
        x = net.create_variable((2, 3))
        y = net.create_variable((2, 1), ElementKind.INDEX)
        sm = net.create_softmax_node(x, y)
        x.output.copy_from_numpy([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]])
        y.output.copy_from_numpy([[2], [0]])

        sm.forward()
        probs = sm.output.to_numpy()
        np.testing.assert_allclose(probs.sum(axis=1), [1.0, 1.0], rtol=1e-6)
        np.testing.assert_allclose(probs[0], [1 / 3] * 3, rtol=1e-6)

        sm.backward()
        expected = probs.copy()
        expected[0, 2] -= 1
        expected[1, 0] -= 1
        np.testing.assert_allclose(x.grad.to_numpy(), expected, rtol=1e-6)
        self.assertEqual(sm.accuracy(), 0.0)
        self.assertGreater(sm.loss(), 0.0)

    def test_softmax_label_out_of_range(self):
        net = Network()
        x = net.create_variable((1, 3))
        y = net.create_variable((1, 1), ElementKind.INDEX)
        sm = net.create_softmax_node(x, y)
        y.output.copy_from_numpy([[3]])
        sm.forward()
        with self.assertRaises(LabelRangeError):
            sm.backward()


class TestVariableMinibatch(unittest.TestCase):
    def test_wraps_around(self):
        net = Network()
        x = net.create_variable((3, 1))
        data = Tensor.from_numpy(ElementKind.FLOAT, [[0.0], [1.0], [2.0], [3.0]])
        x.load_minibatch(data, 2)
        np.testing.assert_array_equal(x.output.to_numpy(), [[2.0], [3.0], [0.0]])
        x.load_minibatch(data, 5)
        np.testing.assert_array_equal(x.output.to_numpy(), [[1.0], [2.0], [3.0]])

    def test_batch_larger_than_data(self):
        net = Network()
        x = net.create_variable((5, 1))
        data = Tensor.from_numpy(ElementKind.FLOAT, [[0.0], [1.0]])
        x.load_minibatch(data, 1)
        np.testing.assert_array_equal(x.output.to_numpy().ravel(), [1, 0, 1, 0, 1])


if __name__ == "__main__":
    unittest.main()

import unittest

import numpy as np

from nodenet import TrainingConfig
from nodenet.infrastructure._parameter import Parameter
from nodenet.infrastructure.optimizers import MomentumSGD
from nodenet.domain._errors import ShapeMismatchError


def _param(values, grad) -> Parameter:
    p = Parameter("w", np.shape(values))
    p.value.copy_from_numpy(values)
    p.accumulate_grad(np.asarray(grad, dtype=np.float32))
    return p


class TestTrainingConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = TrainingConfig()
        self.assertEqual(cfg.learning_rate, 0.001)
        self.assertEqual(cfg.momentum, 0.0)
        self.assertEqual(cfg.l2_decay, 0.0)

    def test_validation(self):
        for kwargs in (
            {"learning_rate": 0.0},
            {"momentum": 1.0},
            {"momentum": -0.1},
            {"l2_decay": -1e-4},
        ):
            with self.subTest(**kwargs):
                with self.assertRaises(ValueError):
                    TrainingConfig(**kwargs)


class TestParameter(unittest.TestCase):
    def test_accumulate_and_zero(self):
        p = Parameter("conv1.bias", (2,))
        p.accumulate_grad(np.array([1.0, 2.0]))
        p.accumulate_grad(np.array([0.5, 0.5]))
        np.testing.assert_allclose(p.grad.to_numpy(), [1.5, 2.5])
        p.zero_grad()
        np.testing.assert_array_equal(p.grad.to_numpy(), [0.0, 0.0])

    def test_accumulate_shape_mismatch(self):
        p = Parameter("w", (2, 2))
        with self.assertRaises(ShapeMismatchError):
            p.accumulate_grad(np.zeros((4,)))


class TestMomentumSGD(unittest.TestCase):
    def test_plain_step(self):
        p = _param([1.0, -2.0], [0.5, 1.0])
        MomentumSGD([p], TrainingConfig(learning_rate=0.1)).step()
        np.testing.assert_allclose(p.value.to_numpy(), [0.95, -2.1], rtol=1e-6)
        np.testing.assert_allclose(p.velocity.to_numpy(), [-0.05, -0.1], rtol=1e-6)

    def test_momentum_and_l2(self):
        cfg = TrainingConfig(learning_rate=0.1, momentum=0.9, l2_decay=0.01)
        p = _param([2.0], [1.0])
        p.velocity.copy_from_numpy([0.5])
        MomentumSGD([p], cfg).step()

        v = 0.9 * 0.5 - 0.1 * (1.0 + 0.01 * 2.0)
        np.testing.assert_allclose(p.velocity.to_numpy(), [v], rtol=1e-6)
        np.testing.assert_allclose(p.value.to_numpy(), [2.0 + v], rtol=1e-6)

    def test_step_leaves_gradient_untouched(self):
        p = _param([1.0], [3.0])
        MomentumSGD([p], TrainingConfig(l2_decay=0.5)).step()
        np.testing.assert_array_equal(p.grad.to_numpy(), [3.0])

    def test_reads_config_at_every_step(self):
        cfg = TrainingConfig(learning_rate=0.1)
        p = _param([0.0], [1.0])
        opt = MomentumSGD([p], cfg)
        opt.step()
        cfg.learning_rate = 1.0
        opt.step()
        np.testing.assert_allclose(p.value.to_numpy(), [-1.1], rtol=1e-6)

    def test_update_is_deterministic(self):
        cfg = TrainingConfig(learning_rate=0.05, momentum=0.9, l2_decay=1e-4)
        rng = np.random.default_rng(0)
        w = rng.standard_normal((3, 4)).astype(np.float32)
        g = rng.standard_normal((3, 4)).astype(np.float32)

        results = []
        for _ in range(2):
            p = _param(w, g)
            opt = MomentumSGD([p], cfg)
            for _ in range(3):
                opt.step()
            results.append(p.value.to_numpy())
        np.testing.assert_array_equal(results[0], results[1])

    def test_zero_grad(self):
        p = _param([1.0], [3.0])
        MomentumSGD([p], TrainingConfig()).zero_grad()
        np.testing.assert_array_equal(p.grad.to_numpy(), [0.0])

    def test_requires_config(self):
        with self.assertRaises(TypeError):
            MomentumSGD([], {"learning_rate": 0.1})


if __name__ == "__main__":
    unittest.main()

import unittest

from nodenet import ElementKind, Network, PoolKind, Tensor, TrainingConfig
from nodenet.domain import (
    IHandle,
    INode,
    IOptimizer,
    IParameter,
    IPoolingNode,
    ITensor,
    ITrainingObserver,
)
from nodenet.infrastructure._parameter import Parameter
from nodenet.infrastructure.optimizers import MomentumSGD


class _Recorder:
    def __init__(self):
        self.calls = []

    def on_iteration(self, iteration, logs):
        self.calls.append((iteration, dict(logs)))


class TestProtocolConformance(unittest.TestCase):
    def test_tensor_and_handle(self):
        t = Tensor(ElementKind.FLOAT, (2, 3))
        self.assertIsInstance(t, ITensor)
        self.assertIsInstance(t.get_handle(ElementKind.FLOAT), IHandle)

    def test_parameter_and_optimizer(self):
        p = Parameter("w", (2,))
        self.assertIsInstance(p, IParameter)
        self.assertIsInstance(MomentumSGD([p], TrainingConfig()), IOptimizer)

    def test_nodes(self):
        net = Network(seed=0)
        x = net.create_variable((1, 4, 4, 1))
        pool = net.create_max_pool_node(x, PoolKind.MAX, 2, 2, 0)
        self.assertIsInstance(x, INode)
        self.assertIsInstance(pool, INode)
        self.assertIsInstance(pool, IPoolingNode)

    def test_observer(self):
        self.assertIsInstance(_Recorder(), ITrainingObserver)


if __name__ == "__main__":
    unittest.main()

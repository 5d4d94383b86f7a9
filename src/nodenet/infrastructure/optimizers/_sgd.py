"""
Momentum SGD optimizer with coupled L2 weight decay.

This module provides the parameter-update rule applied by `Network.train`
once per minibatch, after gradients from every example have been
accumulated.

Design notes
------------
- The optimizer reads its hyperparameters from a `TrainingConfig` at every
  `step()`, so changes to the network's config take effect on the next
  update.
- Updates are applied in-place to `Parameter.value` and
  `Parameter.velocity`. Gradients are left untouched; the training loop
  clears them with `zero_grad()` before the next minibatch.
- Weights and biases follow the same rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .._parameter import Parameter
from ._config import TrainingConfig


@dataclass
class MomentumSGD:
    """
    Stochastic gradient descent with momentum and L2 regularization.

    Update rule
    -----------
    For each parameter with value ``w``, gradient ``g`` and velocity ``v``:

        ``v <- momentum * v - lr * (g + l2_decay * w)``
        ``w <- w + v``

    Parameters
    ----------
    params : Sequence[Parameter]
        Parameters to be optimized.
    config : TrainingConfig
        Hyperparameter record, read at every step.

    Notes
    -----
    The accumulated gradient is the sum over the minibatch; it is not
    divided by the batch size.
    """

    params: Sequence[Parameter]
    config: TrainingConfig

    def __init__(self, params: Iterable[Parameter], config: TrainingConfig) -> None:
        if not isinstance(config, TrainingConfig):
            raise TypeError(f"config must be a TrainingConfig, got {config!r}")
        self.params = list(params)
        self.config = config

    def zero_grad(self) -> None:
        """
        Clear the gradient accumulators of all managed parameters.
        """
        for p in self.params:
            p.zero_grad()

    def step(self) -> None:
        """
        Apply one momentum update to all managed parameters.
        """
        lr = self.config.learning_rate
        momentum = self.config.momentum
        l2 = self.config.l2_decay

        for p in self.params:
            w = p.value.data
            v = p.velocity.data
            g = p.grad.data

            # Coupled L2: the decay term joins the gradient before scaling
            if l2 != 0.0:
                g = g + l2 * w

            v *= momentum
            v -= lr * g
            w += v

"""
Domain-level training contracts for nodenet.

This module defines the `IOptimizer` protocol, which specifies the minimal
interface for parameter-update rules, and `ITrainingObserver`, the
injectable progress-reporting collaborator invoked by the training loop.

Notes
-----
- Domain contracts are backend-agnostic and must not depend on NumPy or
  infrastructure implementations.
- Observers are purely observational: the training loop ignores their
  return values and never changes control flow because of them.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class IOptimizer(Protocol):
    """
    Optimizer interface contract.

    An optimizer holds references to trainable parameters and updates them
    in-place according to a specific optimization rule.

    Required methods
    ----------------
    - `step()` applies one optimization update to managed parameters.
    - `zero_grad()` clears the gradient accumulators of managed parameters.
    """

    def step(self) -> None:
        """
        Apply one optimization step from the accumulated gradients.
        """
        ...

    def zero_grad(self) -> None:
        """
        Reset gradient accumulators for all managed parameters.
        """
        ...

    @property
    def params(self) -> Iterable[object]:
        """
        Return the parameters managed by this optimizer.
        """
        ...


@runtime_checkable
class ITrainingObserver(Protocol):
    """
    Progress-reporting collaborator for `Network.train`.

    `on_iteration` is called once per minibatch, after the parameter
    update, with the zero-based iteration index within the current
    `train` call and the minibatch logs (``loss`` and ``accuracy``).
    """

    def on_iteration(self, iteration: int, logs: Mapping[str, Number]) -> None:
        """
        Receive the logs of one completed training iteration.
        """
        ...

"""
Training history utilities.

This module defines the lightweight container returned by `Network.train`,
in a manner similar to Keras' `History` object. It records one entry per
training iteration (one minibatch).

Design goals
------------
- Minimal surface area: no dependency on tensors or nodes
- Deterministic ordering and explicit iteration indexing
- Human-readable and debugger-friendly representation
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Union


Number = Union[int, float]


@dataclass
class History:
    """
    Container for per-iteration training metrics.

    Attributes
    ----------
    history : Dict[str, List[float]]
        Mapping from metric name to a list of per-iteration values.
        Each list is ordered by iteration index.
    iteration : List[int]
        Iteration indices (0-based, within one `train` call) corresponding
        to entries in `history`.

    Notes
    -----
    - All metric values are stored as Python `float`.
    - This object is passive: it performs no aggregation beyond appending
      values supplied by the training loop and the `mean` helper.
    """

    history: Dict[str, List[float]] = field(default_factory=dict)
    iteration: List[int] = field(default_factory=list)

    def append_iteration(self, iteration_idx: int, logs: Mapping[str, Number]) -> None:
        """
        Append metrics for a completed iteration.

        Parameters
        ----------
        iteration_idx : int
            Zero-based index of the completed iteration.
        logs : Mapping[str, Number]
            Mapping from metric name to value (e.g. ``loss``, ``accuracy``).
        """
        self.iteration.append(int(iteration_idx))
        for k, v in logs.items():
            self.history.setdefault(k, []).append(float(v))

    def last(self) -> Dict[str, float]:
        """
        Return metrics from the most recent iteration.

        Metrics with no recorded values are omitted.
        """
        return {k: float(vs[-1]) for k, vs in self.history.items() if vs}

    def mean(self, key: str) -> float:
        """
        Return the mean of a recorded metric.

        Raises
        ------
        KeyError
            If `key` was never recorded or has no values.
        """
        values = self.history.get(key)
        if not values:
            raise KeyError(f"No values recorded for metric {key!r}")
        return float(sum(values) / len(values))

    def __len__(self) -> int:
        return len(self.iteration)

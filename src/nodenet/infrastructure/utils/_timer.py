"""
Wall-clock timing guard for batches of training iterations.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from typing_extensions import Self

logger = logging.getLogger(__name__)


class TimerGuard:
    """
    Context manager reporting example throughput of the enclosed scope.

    Parameters
    ----------
    examples : int
        Number of examples processed inside the scope.
    report : Optional[Callable[[str], None]]
        Receives the formatted message on exit. The message is always logged
        at INFO level as well.

    Examples
    --------
    >>> with TimerGuard(256 * 8):
    ...     net.train(sm, 256, [x, y], [images, labels])

    Notes
    -----
    Timing is observational: exceptions raised inside the scope propagate
    unchanged and no report is emitted for them.
    """

    def __init__(
        self, examples: int, report: Optional[Callable[[str], None]] = None
    ) -> None:
        if examples < 0:
            raise ValueError(f"examples must be >= 0, got {examples}")
        self.examples = int(examples)
        self.report = report
        self.elapsed: Optional[float] = None
        self._start: Optional[float] = None

    def __enter__(self) -> Self:
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed = time.perf_counter() - self._start
        if exc_type is not None:
            return
        message = self.message()
        logger.info(message)
        if self.report is not None:
            self.report(message)

    @property
    def throughput(self) -> float:
        """
        Return examples per second of the finished scope.

        Raises
        ------
        RuntimeError
            If the scope has not been exited yet.
        """
        if self.elapsed is None:
            raise RuntimeError("TimerGuard has not finished")
        if self.elapsed <= 0.0:
            return float("inf")
        return self.examples / self.elapsed

    def message(self) -> str:
        return (
            f"Processed {self.examples} examples in {self.elapsed:.3f} seconds "
            f"({self.throughput:.1f} examples/sec)"
        )

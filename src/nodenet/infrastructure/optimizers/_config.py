"""
Training configuration for `Network`.

`TrainingConfig` is the single mutable record of hyperparameters read at
every parameter update. It is held by the network rather than stored as
global state, so separate networks never share knobs.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TrainingConfig:
    """
    Hyperparameters of the momentum + L2 gradient-descent update.

    Attributes
    ----------
    learning_rate : float
        Step size. Must be > 0. Defaults to 0.001.
    momentum : float
        Velocity retention factor in ``[0, 1)``. Defaults to 0.0.
    l2_decay : float
        Weight-decay coefficient added to every gradient as
        ``l2_decay * weight``. Must be >= 0. Defaults to 0.0.

    Notes
    -----
    Fields may be reassigned between `train` calls; the next parameter
    update reads the new values. Reassigned values are not re-validated,
    call `validate()` after mutating if needed.
    """

    learning_rate: float = 0.001
    momentum: float = 0.0
    l2_decay: float = 0.0

    def __post_init__(self) -> None:
        self.learning_rate = float(self.learning_rate)
        self.momentum = float(self.momentum)
        self.l2_decay = float(self.l2_decay)
        self.validate()

    def validate(self) -> None:
        """
        Check the configuration values.

        Raises
        ------
        ValueError
            If ``learning_rate <= 0``, ``momentum`` is outside ``[0, 1)``,
            or ``l2_decay < 0``.
        """
        if self.learning_rate <= 0.0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")
        if not 0.0 <= self.momentum < 1.0:
            raise ValueError(f"momentum must be in [0, 1), got {self.momentum}")
        if self.l2_decay < 0.0:
            raise ValueError(f"l2_decay must be >= 0, got {self.l2_decay}")

from ._config import TrainingConfig
from ._sgd import MomentumSGD

__all__ = [
    TrainingConfig.__name__,
    MomentumSGD.__name__,
]

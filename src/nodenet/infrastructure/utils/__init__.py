from ._timer import TimerGuard

__all__ = [
    TimerGuard.__name__,
]

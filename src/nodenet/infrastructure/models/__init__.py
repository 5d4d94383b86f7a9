from ._history import History

__all__ = [
    History.__name__,
]

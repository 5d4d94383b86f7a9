from ._network import Network

__all__ = [
    Network.__name__,
]

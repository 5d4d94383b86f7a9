from ._cifar10 import CIFAR10_LABELS, decode_cifar10_records, load_cifar10_batch

__all__ = [
    "CIFAR10_LABELS",
    decode_cifar10_records.__name__,
    load_cifar10_batch.__name__,
]

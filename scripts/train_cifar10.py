"""
scripts/train_cifar10.py

Demo script (NOT a unit test) that trains a small convolutional network on
one CIFAR-10 binary batch and periodically scores the first 100 images.

Network
-------
input (B, 32, 32, 3)
  -> [Conv 5x5 (16) -> ReLU -> MaxPool 2/2]
  -> [Conv 5x5 (20) -> ReLU -> MaxPool 2/2]
  -> [Conv 5x5 (20) -> ReLU -> MaxPool 2/2]
  -> FullyConnected (10) -> ReLU -> SoftMax

Usage examples
--------------
# Download and unpack http://www.cs.toronto.edu/~kriz/cifar-10-binary.tar.gz
python scripts/train_cifar10.py --data cifar-10-batches-bin/data_batch_1.bin

# Fewer images and rounds for a quick smoke run
python scripts/train_cifar10.py --num-images 512 --rounds 2 --report-rate 16
"""

from __future__ import annotations

import os
import sys

# Ensure repo_root/src is importable when running this file directly:
# repo_root/
#   src/nodenet/...
#   scripts/train_cifar10.py
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

import argparse
import logging

from nodenet import (
    CIFAR10_LABELS,
    ElementKind,
    Network,
    NodeBase,
    PoolKind,
    Tensor,
    TimerGuard,
    TrainingConfig,
    load_cifar10_batch,
)

logger = logging.getLogger("train_cifar10")


def create_simple_net(net: Network, input: NodeBase, expected: NodeBase) -> NodeBase:
    x = input
    for depth in (16, 20, 20):
        x = net.create_conv_node(x, depth, 5, 1, 2)
        x = net.create_relu_node(x)
        x = net.create_max_pool_node(x, PoolKind.MAX, 2, 2, 0)

    x = net.create_fully_connected_node(x, 10)
    x = net.create_relu_node(x)
    return net.create_softmax_node(x, expected)


def score(
    net: Network,
    sm: NodeBase,
    input: NodeBase,
    images: Tensor,
    labels: Tensor,
    batch: int,
    count: int = 100,
) -> int:
    """
    Return how many of the first `count` images (rounded down to whole
    minibatches) are classified correctly.

    `count` is capped at the number of loaded images.
    """
    count = min(count, images.shape[0])
    labels_h = labels.get_handle(ElementKind.INDEX)
    sample = Tensor(ElementKind.FLOAT, (batch,) + images.shape[1:])
    correct = 0

    for i in range(count // batch):
        sample.copy_consecutive_slices(images, batch * i)
        res = net.infer(sm, [input], [sample])

        for j in range(batch):
            probs = res.get_handle(ElementKind.FLOAT).extract_slice(j)
            guess = probs.get_handle(ElementKind.FLOAT).max_arg()
            expected = labels_h.at((batch * i + j, 0))
            correct += int(guess == expected)

            if i == 0:
                logger.info(
                    "%d) Expected: %s got %s",
                    j,
                    CIFAR10_LABELS[expected],
                    CIFAR10_LABELS[guess],
                )
    return correct


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Train a small CNN on CIFAR-10.")
    parser.add_argument(
        "--data",
        default="cifar-10-batches-bin/data_batch_1.bin",
        help="Path to a CIFAR-10 binary batch file.",
    )
    parser.add_argument("--num-images", type=int, default=10000)
    parser.add_argument("--batch", type=int, default=8)
    parser.add_argument("--report-rate", type=int, default=256)
    parser.add_argument("--rounds", type=int, default=100000)
    parser.add_argument("--learning-rate", type=float, default=0.001)
    parser.add_argument("--momentum", type=float, default=0.9)
    parser.add_argument("--l2-decay", type=float, default=0.0001)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    images, labels = load_cifar10_batch(args.data, args.num_images)

    net = Network(
        TrainingConfig(
            learning_rate=args.learning_rate,
            momentum=args.momentum,
            l2_decay=args.l2_decay,
        ),
        seed=args.seed,
    )
    a = net.create_variable((args.batch, 32, 32, 3), ElementKind.FLOAT)
    e = net.create_variable((args.batch, 1), ElementKind.INDEX)
    sm = create_simple_net(net, a, e)

    count = min(100, images.shape[0])
    scored = count // args.batch * args.batch
    for round_idx in range(args.rounds):
        logger.info("Training - round #%d", round_idx)
        with TimerGuard(args.report_rate * args.batch):
            net.train(sm, args.report_rate, [a, e], [images, labels])

        correct = score(net, sm, a, images, labels, args.batch, count)
        logger.info("Round #%d score: %d/%d", round_idx, correct, scored)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Train a small perceptron on a fixed toy data set and report the result."""

from __future__ import annotations

import random
import sys
import time
from dataclasses import dataclass, field

from scalargrad.engine import Manager, OpType
from scalargrad.model import DEFAULT_SEED, MLP

DEFAULT_EPOCHS = 10
DEFAULT_ITERATIONS = 200
DEFAULT_LEARNING_RATE = 0.25

INPUTS = (
    (2.0, 3.0, -1.0),
    (3.0, -1.0, 0.5),
    (0.5, 1.0, 1.0),
    (1.0, 1.0, -1.0),
)
TARGETS = (1.0, -1.0, 1.0, -1.0)
LAYER_SIZES = (4, 4, 1)


@dataclass
class TrainingResult:
    """Predictions and loss from the final training step, and the time taken."""

    predictions: list[float] = field(default_factory=list)
    targets: list[float] = field(default_factory=list)
    loss: float | None = None
    elapsed: float = 0.0


def train(
    epochs: int = DEFAULT_EPOCHS,
    iterations: int = DEFAULT_ITERATIONS,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    op: OpType = OpType.TANH,
    seed: int = DEFAULT_SEED,
) -> TrainingResult:
    """Run gradient descent on the toy data set and return the last step's outcome."""
    manager = Manager()
    mlp = MLP(len(INPUTS[0]), LAYER_SIZES, manager, op, random.Random(seed))
    params = mlp.parameters()
    result = TrainingResult()

    start = time.perf_counter()
    for epoch in range(epochs):
        for it in range(iterations):
            loss = manager.create(0.0)
            preds = [mlp(sample)[0] for sample in INPUTS]
            for pred, target in zip(preds, TARGETS):
                loss = loss + (pred - target).pow(2.0)
            manager.backward(loss)
            for param in params:
                param.data -= param.grad * learning_rate
            if epoch == epochs - 1 and it == iterations - 1:
                result.predictions = [pred.data for pred in preds]
                result.targets = list(TARGETS)
                result.loss = loss.data
            manager.clear_ephemeral_nodes(params)
    result.elapsed = time.perf_counter() - start
    return result


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise ValueError(text)
    return value


def parse_args(argv: list[str]) -> tuple[int, int, float]:
    """Read epochs, iterations and learning rate, falling back to defaults."""
    epochs, iterations, learning_rate = (
        DEFAULT_EPOCHS,
        DEFAULT_ITERATIONS,
        DEFAULT_LEARNING_RATE,
    )
    if len(argv) < 3:
        print("Standard Usage: micrograd [epochs] [iters] [lr]")
        print("Defaulting to : micrograd 20 200 0.25\n")
        return epochs, iterations, learning_rate
    try:
        epochs = _non_negative_int(argv[0])
        iterations = _non_negative_int(argv[1])
        learning_rate = float(argv[2])
    except ValueError:
        print("Error: Invalid argument format.  Using defaults.\n", file=sys.stderr)
    return epochs, iterations, learning_rate


def main(argv: list[str] | None = None) -> int:
    """Command entry point."""
    if argv is None:
        argv = sys.argv[1:]
    epochs, iterations, learning_rate = parse_args(argv)
    result = train(epochs, iterations, learning_rate)

    if result.loss is not None:
        print("--- Training Results ---")
        print("Pred\t | Target")
        print("------------------------------------")
        for pred, target in zip(result.predictions, result.targets):
            print(f"{pred:.4f}\t {target:.4f}")
        print("------------------------------------")
        print(f"Total Loss: {result.loss:.8e}\n")
        print(f"Total time: {result.elapsed:.2e} seconds\n")
    else:
        print(f"Total time: {result.elapsed:.2g} seconds\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
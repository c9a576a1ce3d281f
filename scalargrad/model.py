"""Neurons, layers and multi-layer perceptrons built on top of the scalar engine."""

from __future__ import annotations

import random
from typing import Iterable, Sequence

from scalargrad.engine import Manager, OpType, Value

DEFAULT_SEED = 42
_ACTIVATIONS = (OpType.TANH, OpType.RELU)


def _default_rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random(DEFAULT_SEED)


class Neuron:
    """A single neuron: weighted sum of its inputs plus a bias, then an activation."""

    def __init__(
        self,
        nin: int,
        manager: Manager,
        op: OpType = OpType.TANH,
        rng: random.Random | None = None,
    ) -> None:
        if op not in _ACTIVATIONS:
            raise ValueError("Invalid activation function")
        rng = _default_rng(rng)
        self.manager = manager
        self.op = op
        self.weights: list[Value] = [
            manager.create(rng.uniform(-1.0, 1.0), f"w{i}") for i in range(nin)
        ]
        self.bias: Value = manager.create(rng.uniform(-1.0, 1.0), "b")

    def __call__(self, x: Sequence[Value]) -> Value:
        if len(x) != len(self.weights):
            raise ValueError("Neuron: input size does not match weights")
        z = self.bias
        for xi, wi in zip(x, self.weights):
            z = z + xi * wi
        if self.op is OpType.TANH:
            return z.tanh()
        return z.relu()

    def parameters(self) -> list[Value]:
        """The bias followed by the weights."""
        return [self.bias, *self.weights]


class Layer:
    """A row of neurons that all see the same inputs."""

    def __init__(
        self,
        nin: int,
        nout: int,
        manager: Manager,
        op: OpType = OpType.TANH,
        rng: random.Random | None = None,
    ) -> None:
        rng = _default_rng(rng)
        self.nin = nin
        self.nout = nout
        self.neurons = [Neuron(nin, manager, op, rng) for _ in range(nout)]

    def __call__(self, inputs: Sequence[Value]) -> list[Value]:
        return [neuron(inputs) for neuron in self.neurons]

    def parameters(self) -> list[Value]:
        """Every neuron's parameters, in neuron order."""
        return [p for neuron in self.neurons for p in neuron.parameters()]


class MLP:
    """A multi-layer perceptron: layers of the given sizes fed one into the next."""

    def __init__(
        self,
        nin: int,
        sizes: Iterable[int],
        manager: Manager,
        op: OpType = OpType.TANH,
        rng: random.Random | None = None,
    ) -> None:
        rng = _default_rng(rng)
        self.nin = nin
        self.sizes = list(sizes)
        self.manager = manager
        layout = [nin, *self.sizes]
        self.layers = [
            Layer(n_in, n_out, manager, op, rng)
            for n_in, n_out in zip(layout, layout[1:])
        ]

    def __call__(self, inputs: Iterable[float]) -> list[Value]:
        x = [self.manager.create(value, "input") for value in inputs]
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self) -> list[Value]:
        """Every layer's parameters, in layer order."""
        return [p for layer in self.layers for p in layer.parameters()]
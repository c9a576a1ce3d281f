# scalargrad

A small automatic differentiation engine that works on individual scalars.
It also has a multilayer perceptron built on top of that engine.

Every scalar is a `Value` that belongs to a `Manager`. The manager keeps the
nodes of the computation graph and runs backpropagation through them.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Using the engine

```python
from scalargrad.engine import Manager

manager = Manager()
a = manager.create(2.0, "a")
b = manager.create(-3.0, "b")

c = (a * b + 1.0).tanh()
loss = (c - 0.5).pow(2.0)

manager.backward(loss)
print(a.grad, b.grad)
```

`Value` (in `scalargrad.engine`) supports these operations:

- `+`, `-` and `*`, with another `Value` or with a plain number on either side
- unary `-`
- `pow(exponent)`, or `value ** exponent`, with a numeric exponent
- `tanh()`
- `relu()`

Each operation creates a new `Value` owned by the same manager and records
which operation (`OpType`) produced it.

`Manager.backward(loss)` first sets every gradient in the loss graph to zero.
It then gives `loss` a gradient of 1 and propagates gradients back through the
graph in reverse topological order. `Manager.build_topo(root)` returns that
order: every node reachable from `root`, each after the nodes it was computed
from.

A manager holds every value it created; `len(manager)` gives their number and
iterating over it yields them. After each training step,
`Manager.clear_ephemeral_nodes(parameters)` drops every node except the given
parameters, discarding the intermediate nodes.

## Building a network

`scalargrad.model` provides `Neuron`, `Layer` and `MLP`:

```python
import random

from scalargrad.engine import Manager, OpType
from scalargrad.model import MLP

manager = Manager()
net = MLP(3, [4, 4, 1], manager, OpType.TANH, random.Random(42))

params = net.parameters()
out = net([2.0, 3.0, -1.0])[0]
```

The activation for every neuron must be `OpType.TANH` or `OpType.RELU`; any
other activation raises `ValueError`. A neuron given a different number of
inputs than it has weights also raises `ValueError`. Weights and biases start
out drawn uniformly between -1 and 1 from the given `random.Random`; when none
is given, a generator seeded with 42 is used.

`parameters()` returns, for each neuron, its bias followed by its weights,
in neuron and layer order.

## Command line

The `scalargrad` command trains a 3-4-4-1 tanh network by gradient descent on
a small fixed dataset of four samples:

```
scalargrad [epochs] [iters] [lr]
```

For example:

```
scalargrad 10 200 0.25
```

The defaults are 10 epochs, 200 iterations per epoch and a learning rate of
0.25. If you give fewer than three arguments, it prints a usage line and uses
the defaults. If any argument cannot be parsed (or a count is negative), it
reports the problem on standard error and uses the defaults.

After training it prints the final predictions next to the targets, the final
loss and the time the training took. If no training step ran (zero epochs or
iterations), only the time is printed.

You can also run the training from Python with `scalargrad.cli.train(epochs,
iterations, learning_rate, op, seed)`. It returns a `TrainingResult` holding
the predictions, the targets, the final loss (`None` if no step ran) and the
elapsed time in seconds.

## Limitations

The engine works on single scalars only: there are no tensors or vectorised
operations. Networks cannot be saved or loaded, and the command trains only
on its built-in four-sample dataset.
import math
import random

import pytest

from scalargrad.engine import Manager, OpType
from scalargrad.model import MLP, Layer, Neuron


def test_neuron_parameter_count_and_labels():
    manager = Manager()
    neuron = Neuron(3, manager, OpType.TANH, random.Random(1))
    params = neuron.parameters()
    assert len(params) == 4
    assert [p.label for p in params] == ["b", "w0", "w1", "w2"]


def test_neuron_weights_in_unit_range():
    manager = Manager()
    neuron = Neuron(50, manager, OpType.TANH, random.Random(7))
    assert all(-1.0 <= p.data <= 1.0 for p in neuron.parameters())


def test_neuron_rejects_invalid_activation():
    with pytest.raises(ValueError):
        Neuron(2, Manager(), OpType.ADD)


def test_neuron_rejects_wrong_input_size():
    manager = Manager()
    neuron = Neuron(2, manager, OpType.TANH)
    x = [manager.create(1.0)]
    with pytest.raises(ValueError):
        neuron(x)


def test_neuron_tanh_output_with_fixed_weights():
    manager = Manager()
    neuron = Neuron(2, manager, OpType.TANH)
    bias, w0, w1 = neuron.parameters()
    bias.data, w0.data, w1.data = 0.5, 1.0, 2.0
    x = [manager.create(1.0), manager.create(1.0)]
    out = neuron(x)
    assert out.data == pytest.approx(math.tanh(3.5))
    manager.backward(out)
    assert bias.grad == pytest.approx(1.0 - math.tanh(3.5) ** 2)


def test_neuron_relu_output_non_negative():
    manager = Manager()
    neuron = Neuron(2, manager, OpType.RELU)
    bias, w0, w1 = neuron.parameters()
    bias.data, w0.data, w1.data = -5.0, 1.0, 1.0
    out = neuron([manager.create(1.0), manager.create(1.0)])
    assert out.data == 0.0


def test_layer_output_size_and_parameters():
    manager = Manager()
    layer = Layer(3, 4, manager, OpType.TANH, random.Random(0))
    outs = layer([manager.create(v) for v in (1.0, 2.0, 3.0)])
    assert len(outs) == 4
    assert len(layer.parameters()) == 16
    assert all(-1.0 < o.data < 1.0 for o in outs)


def test_mlp_parameter_count():
    mlp = MLP(3, [4, 4, 1], Manager(), OpType.TANH)
    assert len(mlp.parameters()) == 41


def test_mlp_is_deterministic_for_same_seed():
    a = MLP(3, [4, 1], Manager(), OpType.TANH, random.Random(5))
    b = MLP(3, [4, 1], Manager(), OpType.TANH, random.Random(5))
    assert [p.data for p in a.parameters()] == [p.data for p in b.parameters()]
    assert a([1.0, 2.0, 3.0])[0].data == b([1.0, 2.0, 3.0])[0].data


def test_mlp_output_length_matches_last_layer():
    mlp = MLP(2, [3, 2], Manager(), OpType.RELU)
    out = mlp([0.5, -0.5])
    assert len(out) == 2
    assert all(o.data >= 0.0 for o in out)


def test_mlp_gradient_step_reduces_loss():
    manager = Manager()
    mlp = MLP(3, [4, 1], manager, OpType.TANH, random.Random(3))
    params = mlp.parameters()

    def loss_value():
        loss = (mlp([2.0, 3.0, -1.0])[0] - 1.0).pow(2.0)
        return loss

    loss = loss_value()
    before = loss.data
    manager.backward(loss)
    for p in params:
        p.data -= 0.05 * p.grad
    manager.clear_ephemeral_nodes(params)
    after = loss_value().data
    assert after < before


def test_clear_keeps_only_mlp_parameters():
    manager = Manager()
    mlp = MLP(3, [4, 1], manager, OpType.TANH)
    mlp([1.0, 1.0, 1.0])
    manager.clear_ephemeral_nodes(mlp.parameters())
    assert len(manager) == len(mlp.parameters())
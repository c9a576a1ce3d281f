"""Scalar values that record the operations applied to them and back-propagate gradients."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable

Number = (int, float)


class OpType(Enum):
    """The operation that produced a value."""

    NONE = "none"
    ADD = "add"
    MUL = "mul"
    POW = "pow"
    TANH = "tanh"
    RELU = "relu"


class Manager:
    """Owns every value in a computation graph and runs back-propagation over it."""

    def __init__(self) -> None:
        self._nodes: list[Value] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def create(self, data: float, label: str = "", op: OpType = OpType.NONE) -> Value:
        """Create a value owned by this manager."""
        node = Value(data, self, label, op)
        self._nodes.append(node)
        return node

    def build_topo(self, root: Value) -> list[Value]:
        """Return the nodes reachable from ``root``, every node after its children."""
        order: list[Value] = []
        visited = {root}
        stack = [(root, iter(root.children))]
        while stack:
            node, children = stack[-1]
            for child in children:
                if child is not None and child not in visited:
                    visited.add(child)
                    stack.append((child, iter(child.children)))
                    break
            else:
                stack.pop()
                order.append(node)
        return order

    def backward(self, loss: Value) -> None:
        """Fill in the gradient of ``loss`` with respect to every node it depends on."""
        topo = self.build_topo(loss)
        for node in topo:
            node.grad = 0.0
        loss.grad = 1.0

        for node in reversed(topo):
            first, second = node.children
            if first is None or node.op is OpType.NONE:
                continue
            if node.op is OpType.MUL:
                if second is not None:
                    first.grad += second.data * node.grad
                    second.grad += first.data * node.grad
                else:
                    first.grad += node.scalar * node.grad
            elif node.op is OpType.ADD:
                first.grad += node.grad
                if second is not None:
                    second.grad += node.grad
            elif node.op is OpType.POW:
                exponent = node.scalar
                first.grad += exponent * math.pow(first.data, exponent - 1) * node.grad
            elif node.op is OpType.TANH:
                first.grad += (1.0 - node.data * node.data) * node.grad
            elif node.op is OpType.RELU:
                first.grad += (1.0 if node.data > 0 else 0.0) * node.grad

    def clear_ephemeral_nodes(self, parameters: Iterable[Value]) -> None:
        """Drop every owned node except the given parameters."""
        keep = set(parameters)
        self._nodes = [node for node in self._nodes if node in keep]


class Value:
    """A scalar in a computation graph, with its gradient."""

    __slots__ = ("data", "grad", "manager", "label", "op", "children", "scalar")

    def __init__(
        self,
        data: float,
        manager: Manager,
        label: str = "",
        op: OpType = OpType.NONE,
    ) -> None:
        self.data = float(data)
        self.grad = 0.0
        self.manager = manager
        self.label = label
        self.op = op
        self.children: tuple[Value | None, Value | None] = (None, None)
        self.scalar = 1.0

    def __repr__(self) -> str:
        label = f", label={self.label!r}" if self.label else ""
        return f"Value(data={self.data}, grad={self.grad}{label})"

    def _derive(
        self,
        data: float,
        op: OpType,
        other: Value | None = None,
        scalar: float = 1.0,
    ) -> Value:
        out = self.manager.create(data, "", op)
        out.children = (self, other)
        out.scalar = scalar
        return out

    def pow(self, exponent: float) -> Value:
        """Raise this value to a constant power."""
        exponent = float(exponent)
        return self._derive(math.pow(self.data, exponent), OpType.POW, scalar=exponent)

    def __pow__(self, exponent):
        if isinstance(exponent, Number):
            return self.pow(exponent)
        return NotImplemented

    def tanh(self) -> Value:
        """Hyperbolic tangent of this value."""
        return self._derive(math.tanh(self.data), OpType.TANH)

    def relu(self) -> Value:
        """Rectified linear unit of this value."""
        return self._derive(max(0.0, self.data), OpType.RELU)

    def __add__(self, other):
        if isinstance(other, Value):
            return self._derive(self.data + other.data, OpType.ADD, other)
        if isinstance(other, Number):
            return self._derive(self.data + other, OpType.ADD)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, Number):
            return self + other
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Value):
            return self._derive(self.data * other.data, OpType.MUL, other)
        if isinstance(other, Number):
            scalar = float(other)
            return self._derive(self.data * scalar, OpType.MUL, scalar=scalar)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Number):
            return self * other
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Value):
            return self + (-1.0 * other)
        if isinstance(other, Number):
            return self + (-1.0 * other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, Number):
            return (-1.0 * self) + other
        return NotImplemented

    def __neg__(self):
        return -1.0 * self
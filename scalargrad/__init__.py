"""Scalar automatic differentiation with a small multilayer perceptron and a training command."""

__version__ = "0.1.0"
__all__ = ["cli", "engine", "model"]
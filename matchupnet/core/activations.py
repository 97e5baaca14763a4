"""Activation utilities for MatchupNet."""

from __future__ import annotations

from typing import Callable, Dict, Iterable

import numpy as np

from .types import Array

ActivationFn = Callable[[Array], Array]
ScalarActivation = Callable[[float], float]


def tanh(x: Array) -> Array:
    """Return the hyperbolic tangent, the default hidden-layer nonlinearity."""

    return np.tanh(x)


def sigmoid(x: Array) -> Array:
    """Return ``1 / (1 + exp(-x))``."""

    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-np.asarray(x, dtype=np.float64)))


def identity(x: Array) -> Array:
    return np.asarray(x, dtype=np.float64)


def relu(x: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


class ActivationRegistry:
    """Name lookup for activation functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, ActivationFn] = {}

    def register(self, name: str, fn: ActivationFn) -> None:
        self._registry[name] = fn

    def get(self, name: str) -> ActivationFn:
        if name not in self._registry:
            available = ", ".join(self.names())
            raise KeyError(f"Unknown activation {name!r}. Available activations: {available}")
        return self._registry[name]

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def is_vectorised(self, fn: object) -> bool:
        return any(fn is registered for registered in self._registry.values())

    def resolve(
        self, activation: str | ActivationFn | ScalarActivation | None
    ) -> ActivationFn | ScalarActivation:
        if activation is None:
            return tanh
        if callable(activation):
            return activation
        return self.get(activation)


REGISTRY = ActivationRegistry()
REGISTRY.register("tanh", tanh)
REGISTRY.register("sigmoid", sigmoid)
REGISTRY.register("identity", identity)
REGISTRY.register("relu", relu)


__all__ = [
    "ActivationFn",
    "ActivationRegistry",
    "REGISTRY",
    "ScalarActivation",
    "identity",
    "relu",
    "sigmoid",
    "tanh",
]

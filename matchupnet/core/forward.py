"""Forward propagation over generated layer parameters."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .activations import REGISTRY, ActivationFn, ScalarActivation
from .types import ActivationTrace, Array, LayerParameters, ShapeMismatch, as_vector


def _apply(fn: ActivationFn | ScalarActivation, z: Array) -> Array:
    if REGISTRY.is_vectorised(fn):
        return np.asarray(fn(z), dtype=np.float64)
    return np.asarray([fn(float(v)) for v in z], dtype=np.float64)


def evaluate(
    parameters: LayerParameters,
    inputs: Sequence[float] | Array,
    activation: str | ActivationFn | ScalarActivation | None = "tanh",
) -> ActivationTrace:
    """Return the activations of every layer for ``inputs``.

    ``activation`` is applied elementwise after each affine transform,
    including the last one; output squashing belongs to the caller. Registry
    names and the registered functions run on whole vectors. Any other
    callable is a ``(float) -> float`` function called once per unit.
    """

    fn = REGISTRY.resolve(activation)
    x = as_vector(inputs)
    if x.shape[0] != parameters.input_width:
        raise ShapeMismatch(
            f"Input has {x.shape[0]} values but the network expects {parameters.input_width}"
        )
    layers: list[Array] = [x]
    for idx, (W, b) in enumerate(parameters):
        z = W @ layers[-1] + b
        a = _apply(fn, z)
        if a.shape != z.shape:
            raise ShapeMismatch(
                f"Activation for transition {idx} returned shape {a.shape}, expected {z.shape}"
            )
        layers.append(a)
    return ActivationTrace(layers=tuple(layers))


__all__ = ["evaluate"]

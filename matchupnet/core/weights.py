"""Deterministic weight initialisation from a topology and an integer seed."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .rng import Mulberry32
from .types import LayerParameters, as_topology

BIAS_SCALE = 0.1


def _draw(rng: Mulberry32, count: int, scale: float) -> list[float]:
    return [(rng.random() * 2 - 1) * scale for _ in range(count)]


def generate(topology: Iterable[int], seed: int) -> LayerParameters:
    """Build one ``(W, b)`` pair per transition of ``topology``.

    Weights are uniform in ``[-sqrt(1/in_dim), sqrt(1/in_dim))`` and biases
    uniform in ``[-0.1, 0.1)``. Draw order is fixed: the weight matrix of a
    transition row by row, then its bias vector, then the next transition.
    """

    dims = as_topology(topology)
    rng = Mulberry32(seed)
    weights = []
    biases = []
    for in_dim, out_dim in zip(dims[:-1], dims[1:]):
        scale = math.sqrt(1 / in_dim)
        W = np.array(_draw(rng, out_dim * in_dim, scale), dtype=np.float64)
        weights.append(W.reshape(out_dim, in_dim))
        biases.append(np.array(_draw(rng, out_dim, BIAS_SCALE), dtype=np.float64))
    return LayerParameters(weights=tuple(weights), biases=tuple(biases))


__all__ = ["BIAS_SCALE", "generate"]

"""Reduce a two-unit output layer to one of two candidates."""

from __future__ import annotations

from typing import Sequence, Tuple, TypeVar

import numpy as np

from .activations import sigmoid
from .types import Array, ShapeMismatch

T = TypeVar("T")


def scores(final_layer: Sequence[float] | Array) -> Tuple[float, float]:
    """Return the sigmoid score of each output unit."""

    values = np.asarray(final_layer, dtype=np.float64)
    if values.shape != (2,):
        raise ShapeMismatch(
            f"Decision needs exactly two output values, got shape {values.shape}"
        )
    squashed = sigmoid(values)
    return float(squashed[0]), float(squashed[1])


def decide(final_layer: Sequence[float] | Array, candidate_a: T, candidate_b: T) -> T:
    """Return ``candidate_a`` only when its score is strictly greater.

    Equal scores go to ``candidate_b``.
    """

    score_a, score_b = scores(final_layer)
    if score_a > score_b:
        return candidate_a
    return candidate_b


__all__ = ["decide", "scores"]

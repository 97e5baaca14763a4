"""Per-neuron colours and per-edge signal strengths for visualising a trace."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ..core.types import ActivationTrace, Array, LayerParameters

POSITIVE_EDGE = "#f59e0b"
NEGATIVE_EDGE = "#3b82f6"
IDLE_EDGE = "#c7c7c7"


@dataclass(frozen=True)
class EdgeStyle:
    width: float
    color: str
    opacity: float


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def normalize_for_color(values: Sequence[float] | Array) -> Array:
    """Scale ``values`` so the largest magnitude becomes 1."""

    arr = np.asarray(values, dtype=np.float64)
    peak = float(np.max(np.abs(arr))) if arr.size else 0.0
    return arr / max(1e-6, peak)


def value_to_color(value: float) -> str:
    """Map ``value`` in [-1, 1] to a white-to-orange or white-to-blue ramp."""

    v = max(-1.0, min(1.0, float(value)))
    if v >= 0:
        r = 255
        g = _round_half_up(255 * (1 - 0.45 * v))
        b = _round_half_up(255 * (1 - 0.9 * v))
    else:
        t = -v
        r = _round_half_up(255 * (1 - 0.9 * t))
        g = _round_half_up(255 * (1 - 0.95 * t))
        b = 255
    return f"rgb({r},{g},{b})"


def layer_colors(trace: ActivationTrace) -> List[List[str]]:
    return [[value_to_color(v) for v in normalize_for_color(layer)] for layer in trace]


def edge_contributions(parameters: LayerParameters, trace: ActivationTrace, layer: int) -> Array:
    """Signal carried by each edge of transition ``layer``.

    Entry ``[next, prev]`` is ``W[next, prev] * trace[layer][prev]``.
    """

    if not 0 <= layer < len(parameters):
        raise IndexError(f"Transition {layer} out of range for {len(parameters)} transitions")
    return parameters.weights[layer] * trace[layer][np.newaxis, :]


def edge_style(strength: float, active: bool) -> EdgeStyle:
    magnitude = abs(float(strength))
    if not active:
        return EdgeStyle(width=1.2, color=IDLE_EDGE, opacity=0.15 + min(0.3, magnitude))
    clamped = max(-1.0, min(1.0, float(strength)))
    return EdgeStyle(
        width=0.5 + 4 * min(1.0, magnitude * 2),
        color=POSITIVE_EDGE if clamped >= 0 else NEGATIVE_EDGE,
        opacity=0.9,
    )


def layer_labels(topology: Sequence[int]) -> List[str]:
    last = len(topology) - 1
    labels = []
    for idx, width in enumerate(topology):
        if idx == 0:
            labels.append(f"Input ({width})")
        elif idx == last:
            labels.append(f"Output ({width})")
        else:
            labels.append(f"Layer {idx} ({width})")
    return labels


__all__ = [
    "EdgeStyle",
    "edge_contributions",
    "edge_style",
    "layer_colors",
    "layer_labels",
    "normalize_for_color",
    "value_to_color",
]

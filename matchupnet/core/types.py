"""Core typing contracts for MatchupNet."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

Array = np.ndarray
Topology = Tuple[int, ...]


class MatchupNetError(ValueError):
    """Base class for validation failures raised by the core."""


class InvalidTopology(MatchupNetError):
    """Layer-size sequence is too short or holds a non-positive width."""


class ShapeMismatch(MatchupNetError):
    """A vector does not have the length the network expects."""


def as_topology(layers: Iterable[int]) -> Topology:
    """Validate ``layers`` and return it as an immutable tuple."""

    dims = tuple(layers)
    if len(dims) < 2:
        raise InvalidTopology(
            f"Topology needs an input and an output layer, got {list(dims)}"
        )
    for idx, size in enumerate(dims):
        if isinstance(size, bool) or not isinstance(size, Integral):
            raise InvalidTopology(f"Layer {idx} width must be an integer, got {size!r}")
        if size <= 0:
            raise InvalidTopology(f"Layer {idx} width must be positive, got {size}")
    return tuple(int(size) for size in dims)


def as_vector(values: Sequence[float] | Array, *, name: str = "input") -> Array:
    """Return a fresh one-dimensional float64 copy of ``values``."""

    try:
        vector = np.array(values, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as exc:
        raise MatchupNetError(f"{name} must hold numbers, got {values!r}") from exc
    if vector.ndim != 1:
        raise ShapeMismatch(f"{name} must be one-dimensional, got shape {vector.shape}")
    return vector


def _readonly(values: Array) -> Array:
    out = np.array(values, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True)
class LayerParameters:
    """Weight matrices and bias vectors, one pair per layer transition.

    ``weights[l]`` has shape ``(out_dim, in_dim)`` and ``biases[l]`` has shape
    ``(out_dim,)``. Arrays are copied on construction and stored read-only.
    """

    weights: Tuple[Array, ...]
    biases: Tuple[Array, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", tuple(_readonly(W) for W in self.weights))
        object.__setattr__(self, "biases", tuple(_readonly(b) for b in self.biases))
        if len(self.weights) != len(self.biases):
            raise ShapeMismatch(
                f"{len(self.weights)} weight matrices but {len(self.biases)} bias vectors"
            )
        if not self.weights:
            raise InvalidTopology("LayerParameters needs at least one transition")
        for idx, (W, b) in enumerate(zip(self.weights, self.biases)):
            if W.ndim != 2 or b.ndim != 1 or W.shape[0] != b.shape[0]:
                raise ShapeMismatch(
                    f"Transition {idx}: weight shape {W.shape} does not match "
                    f"bias shape {b.shape}"
                )
            if idx and W.shape[1] != self.weights[idx - 1].shape[0]:
                raise ShapeMismatch(
                    f"Transition {idx} expects {W.shape[1]} inputs but layer {idx} "
                    f"has {self.weights[idx - 1].shape[0]} units"
                )

    @property
    def topology(self) -> Topology:
        return (self.input_width,) + tuple(int(W.shape[0]) for W in self.weights)

    @property
    def input_width(self) -> int:
        return int(self.weights[0].shape[1])

    def __len__(self) -> int:
        return len(self.weights)

    def __iter__(self) -> Iterator[Tuple[Array, Array]]:
        return iter(zip(self.weights, self.biases))

    def parameter_count(self) -> int:
        return int(sum(W.size + b.size for W, b in self))


@dataclass(frozen=True)
class ActivationTrace:
    """Activation vectors for every layer, the input layer included."""

    layers: Tuple[Array, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", tuple(_readonly(values) for values in self.layers))

    def __len__(self) -> int:
        return len(self.layers)

    def __getitem__(self, idx: int) -> Array:
        return self.layers[idx]

    def __iter__(self) -> Iterator[Array]:
        return iter(self.layers)

    @property
    def output(self) -> Array:
        return self.layers[-1]

    @property
    def widths(self) -> Topology:
        return tuple(int(values.shape[0]) for values in self.layers)

    def tolist(self) -> list[list[float]]:
        return [values.tolist() for values in self.layers]


__all__ = [
    "ActivationTrace",
    "Array",
    "InvalidTopology",
    "LayerParameters",
    "MatchupNetError",
    "ShapeMismatch",
    "Topology",
    "as_topology",
    "as_vector",
]

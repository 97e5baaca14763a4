"""Seed derivation and the end-to-end winner prediction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Mapping, Sequence, Tuple, TypeVar

from .core.activations import ActivationFn
from .core.decision import decide, scores
from .core.forward import evaluate
from .core.types import (
    ActivationTrace,
    Array,
    LayerParameters,
    MatchupNetError,
    Topology,
    as_topology,
    as_vector,
)
from .core.weights import generate

SEED_BASE_MULTIPLIER = 131

ID = TypeVar("ID")


@dataclass(frozen=True)
class Prediction(Generic[ID]):
    """Everything a presentation layer needs for one matchup."""

    topology: Topology
    seed: int
    parameters: LayerParameters
    trace: ActivationTrace
    scores: Tuple[float, float]
    winner: ID
    candidates: Tuple[ID, ID]

    @property
    def output(self) -> Array:
        return self.trace.output

    def to_dict(self) -> dict:
        return {
            "topology": list(self.topology),
            "seed": self.seed,
            "candidates": list(self.candidates),
            "winner": self.winner,
            "scores": list(self.scores),
            "weights": [W.tolist() for W in self.parameters.weights],
            "biases": [b.tolist() for b in self.parameters.biases],
            "trace": self.trace.tolist(),
        }


def derive_seed(layers: Sequence[int], input_width: int) -> int:
    """Seed for a network whose caller-supplied ``layers`` exclude the input layer.

    ``input_width * 131`` plus ``(index + 1) * size`` summed over ``layers``.
    """

    return int(input_width) * SEED_BASE_MULTIPLIER + sum(
        (idx + 1) * int(size) for idx, size in enumerate(layers)
    )


def _unpack_candidates(seed_inputs: Sequence[ID] | Mapping[str, ID]) -> Tuple[ID, ID]:
    if isinstance(seed_inputs, Mapping):
        try:
            return seed_inputs["a"], seed_inputs["b"]
        except KeyError as exc:
            raise MatchupNetError(f"seed_inputs mapping is missing key {exc}") from exc
    pair = tuple(seed_inputs)
    if len(pair) != 2:
        raise MatchupNetError(f"Expected exactly two candidates, got {len(pair)}")
    return pair[0], pair[1]


def compute_winner(
    topology: Sequence[int],
    seed_inputs: Sequence[ID] | Mapping[str, ID],
    inputs: Sequence[float] | Array | None = None,
    activation: str | ActivationFn | None = "tanh",
) -> Prediction[ID]:
    """Run a matchup through a freshly seeded network.

    ``topology`` lists every layer after the input layer; the input width is
    taken from ``inputs``, which defaults to the two candidate identifiers
    (these must then be numeric).
    The first output unit scores ``a`` and the second scores ``b``.
    """

    candidate_a, candidate_b = _unpack_candidates(seed_inputs)
    if inputs is None:
        inputs = [candidate_a, candidate_b]
    x = as_vector(inputs)
    layers = as_topology([x.shape[0], *topology])
    seed = derive_seed(layers[1:], x.shape[0])
    parameters = generate(layers, seed)
    trace = evaluate(parameters, x, activation)
    winner = decide(trace.output, candidate_a, candidate_b)
    return Prediction(
        topology=layers,
        seed=seed,
        parameters=parameters,
        trace=trace,
        scores=scores(trace.output),
        winner=winner,
        candidates=(candidate_a, candidate_b),
    )


def print_summary(prediction: Prediction, *, activation: str = "tanh") -> None:
    print("=== MatchupNet prediction ===")
    print(f"Topology      : {list(prediction.topology)}")
    print(f"Seed          : {prediction.seed}")
    print(f"Activation    : {activation}")
    print(f"Parameters    : {prediction.parameters.parameter_count()}")
    print(f"Candidates    : {prediction.candidates[0]} vs {prediction.candidates[1]}")
    print(f"Scores        : {prediction.scores[0]:.6f} / {prediction.scores[1]:.6f}")
    print(f"Winner        : {prediction.winner}")
    print("=============================")


__all__ = ["Prediction", "SEED_BASE_MULTIPLIER", "compute_winner", "derive_seed", "print_summary"]

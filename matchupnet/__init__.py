"""MatchupNet public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.decision import decide, scores
from .core.forward import evaluate
from .core.rng import Mulberry32
from .core.types import (
    ActivationTrace,
    InvalidTopology,
    LayerParameters,
    MatchupNetError,
    ShapeMismatch,
)
from .core.weights import generate
from .predict import Prediction, compute_winner, derive_seed

__all__ = [
    "ActivationTrace",
    "InvalidTopology",
    "LayerParameters",
    "MatchupNetError",
    "Mulberry32",
    "Prediction",
    "ShapeMismatch",
    "activations",
    "compute_winner",
    "decide",
    "derive_seed",
    "evaluate",
    "generate",
    "scores",
    "types",
]

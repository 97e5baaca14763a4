"""Core numerical primitives for MatchupNet."""

from . import activations, decision, forward, rng, types, weights

__all__ = ["activations", "decision", "forward", "rng", "types", "weights"]

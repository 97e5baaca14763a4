"""Reporting utilities for MatchupNet."""

from .artifacts import write_manifest, write_prediction
from .plots import TracePlotter
from .staging import RevealEvent, active_layer, reveal_schedule

__all__ = [
    "RevealEvent",
    "TracePlotter",
    "active_layer",
    "reveal_schedule",
    "write_manifest",
    "write_prediction",
]

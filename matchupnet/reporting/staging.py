"""Timed reveal schedule for animating a finished activation trace."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.types import ActivationTrace

DEFAULT_STEP_MS = 750


@dataclass(frozen=True)
class RevealEvent:
    """One step of the staged animation.

    ``kind`` is ``"reveal"`` for the transition into layer ``layer + 1`` and
    ``"done"`` for the final hand-off of the result.
    """

    at_ms: int
    kind: str
    layer: Optional[int] = None


def reveal_schedule(trace: ActivationTrace, step_ms: int = DEFAULT_STEP_MS) -> List[RevealEvent]:
    if step_ms <= 0:
        raise ValueError(f"step_ms must be positive, got {step_ms}")
    n_layers = len(trace)
    events = [
        RevealEvent(at_ms=step_ms * (layer + 1), kind="reveal", layer=layer)
        for layer in range(n_layers - 1)
    ]
    events.append(RevealEvent(at_ms=step_ms * n_layers, kind="done"))
    return events


def active_layer(schedule: Sequence[RevealEvent], elapsed_ms: float) -> int:
    """Transition index highlighted at ``elapsed_ms``; ``-1`` when idle."""

    current = -1
    for event in schedule:
        if event.at_ms > elapsed_ms:
            break
        current = -1 if event.kind == "done" else int(event.layer)  # type: ignore[arg-type]
    return current


__all__ = ["DEFAULT_STEP_MS", "RevealEvent", "active_layer", "reveal_schedule"]

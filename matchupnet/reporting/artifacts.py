"""Prediction artifact helpers."""

from __future__ import annotations

import json
import os
import platform
import subprocess
import time
from pathlib import Path
from typing import Mapping

from ..config import STEP_MS_ENV, config_hash
from ..predict import Prediction


def _git_sha() -> str:
    try:
        out = subprocess.check_output(["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode().strip()
    except Exception:  # pragma: no cover - git may be unavailable in tests
        return "unknown"


def write_prediction(path: str | Path, prediction: Prediction) -> str:
    """Write weights, biases, trace and decision as JSON."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(prediction.to_dict(), sort_keys=True, indent=2))
    return str(path)


def write_manifest(path: str | Path, *, config: Mapping[str, object]) -> str:
    """Write a manifest JSON file capturing reproducibility metadata."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = {
        "git_sha": _git_sha(),
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "config": config,
        "config_hash": config_hash(config),
        "environment": {
            "python": platform.python_version(),
            "step_ms_override": os.environ.get(STEP_MS_ENV, ""),
        },
    }
    path.write_text(json.dumps(manifest, indent=2))
    return str(path)


__all__ = ["write_manifest", "write_prediction"]

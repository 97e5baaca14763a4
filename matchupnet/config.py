"""Run presets, config files and override merging for MatchupNet."""

from __future__ import annotations

import hashlib
import json
import os
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping

from .core.activations import REGISTRY as ACTIVATIONS
from .core.types import Topology, as_topology

STEP_MS_ENV = "MATCHUPNET_STEP_MS"
DEFAULT_STEP_MS = 750
REQUIRED_SECTIONS = ("model", "matchup")

_PRESETS: Dict[str, Mapping[str, object]] = {
    "landing": {
        "model": {"layers": [1, 6, 3, 5, 2], "activation": "tanh"},
        "matchup": {"a": 0, "b": 1},
        "display": {
            "step_ms": DEFAULT_STEP_MS,
            "enable_plots": False,
            "run_dir": "runs/landing",
        },
    },
    "reference": {
        "model": {"layers": [6, 3, 5, 2], "activation": "tanh"},
        "matchup": {"a": 0, "b": 1},
        "display": {
            "step_ms": DEFAULT_STEP_MS,
            "enable_plots": False,
            "run_dir": "runs/reference",
        },
    },
    "wide": {
        "model": {"layers": [8, 8, 2], "activation": "tanh"},
        "matchup": {"a": 0, "b": 1},
        "display": {
            "step_ms": 500,
            "enable_plots": False,
            "run_dir": "runs/wide",
        },
    },
}

_PRESET_DIR = Path(__file__).resolve().parent / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None


@dataclass(frozen=True)
class RunConfig:
    """Validated configuration for a single prediction."""

    layers: Topology
    activation: str
    team_a: int
    team_b: int
    step_ms: int
    enable_plots: bool
    run_dir: Path


def load_config(path: str | Path) -> Mapping[str, object]:
    """Read a JSON or YAML config file into a mapping."""

    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        found: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = load_config(file)
                missing = set(REQUIRED_SECTIONS) - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(
                        f"Preset {file.name} is missing required sections: {missing_str}"
                    )
                found[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = found
    cache = _FILE_PRESETS_CACHE or {}
    return {name: deepcopy(cfg) for name, cfg in cache.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Dict[str, object]:
    file_overrides = _file_presets()
    if name in file_overrides:
        return dict(file_overrides[name])
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def merge(base: Mapping[str, object], override: Mapping[str, object]) -> Dict[str, object]:
    """Recursively merge ``override`` into a copy of ``base``."""

    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge(merged[key], value)  # type: ignore[arg-type]
        else:
            merged[key] = value
    return merged


def _normalise(value):  # type: ignore[override]
    if isinstance(value, Mapping):
        return {str(k): _normalise(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalise(v) for v in value]
    if isinstance(value, Path):
        return str(value)
    return value


def config_hash(config: Mapping[str, object]) -> str:
    """Return a stable 12-character hash for ``config``."""

    canonical = json.dumps(_normalise(config), sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return digest[:12]


def resolve(config: Mapping[str, object]) -> RunConfig:
    """Validate ``config`` and flatten it into a :class:`RunConfig`."""

    missing = [section for section in REQUIRED_SECTIONS if section not in config]
    if missing:
        raise KeyError(f"Config missing required sections: {', '.join(missing)}")
    model_cfg = dict(config["model"])  # type: ignore[arg-type]
    matchup_cfg = dict(config["matchup"])  # type: ignore[arg-type]
    display_cfg = dict(config.get("display", {}))  # type: ignore[arg-type]

    if "layers" not in model_cfg:
        raise KeyError("Config 'model' section needs 'layers'")
    # the input layer width comes from the matchup itself
    layers = as_topology([2, *model_cfg["layers"]])[1:]

    activation = str(model_cfg.get("activation", "tanh"))
    ACTIVATIONS.get(activation)

    try:
        team_a = int(matchup_cfg["a"])
        team_b = int(matchup_cfg["b"])
    except KeyError as exc:
        raise KeyError(f"Config 'matchup' section missing {exc}") from exc

    step_ms = int(os.environ.get(STEP_MS_ENV) or display_cfg.get("step_ms", DEFAULT_STEP_MS))
    if step_ms <= 0:
        raise ValueError(f"step_ms must be positive, got {step_ms}")

    run_dir = Path(str(display_cfg.get("run_dir", f"runs/{config_hash(config)}")))
    return RunConfig(
        layers=layers,
        activation=activation,
        team_a=team_a,
        team_b=team_b,
        step_ms=step_ms,
        enable_plots=bool(display_cfg.get("enable_plots", False)),
        run_dir=run_dir,
    )


__all__ = [
    "DEFAULT_STEP_MS",
    "RunConfig",
    "STEP_MS_ENV",
    "config_hash",
    "load_config",
    "load_preset",
    "merge",
    "presets",
    "resolve",
]

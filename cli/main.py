"""Command line entry point for MatchupNet predictions."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from matchupnet import config as run_config
from matchupnet.core.activations import REGISTRY as ACTIVATIONS
from matchupnet.core.types import MatchupNetError
from matchupnet.predict import Prediction, compute_winner, print_summary
from matchupnet.reporting.artifacts import write_manifest, write_prediction
from matchupnet.reporting.plots import TracePlotter
from matchupnet.reporting.staging import reveal_schedule


def _format_result(prediction: Prediction, *, run_dir: Path, step_ms: int, plot: Path | None) -> str:
    schedule = reveal_schedule(prediction.trace, step_ms)
    payload = {
        "seed": prediction.seed,
        "topology": list(prediction.topology),
        "winner": prediction.winner,
        "scores": [round(s, 6) for s in prediction.scores],
        "duration_ms": schedule[-1].at_ms,
        "prediction": str(run_dir / "prediction.json"),
        "manifest": str(run_dir / "manifest.json"),
    }
    if plot is not None:
        payload["plot"] = str(plot)
    return json.dumps(payload, sort_keys=True)


def _parse_layers(text: str) -> list[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid layer list: {text!r}") from exc


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(run_config.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="landing",
        help="Preset configuration to execute",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument("--team-a", type=int, help="Identifier of the first team")
    parser.add_argument("--team-b", type=int, help="Identifier of the second team")
    parser.add_argument(
        "--layers",
        type=_parse_layers,
        help="Comma separated layer widths after the input layer, e.g. 6,3,5,2",
    )
    parser.add_argument(
        "--activation",
        choices=list(ACTIVATIONS.names()),
        help="Hidden-layer activation function",
    )
    parser.add_argument("--step-ms", type=int, help="Milliseconds between layer reveals")
    parser.add_argument("--run-dir", type=Path, help="Directory for prediction artifacts")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Render the trace to trace.png"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    parser.add_argument("--quiet", action="store_true", help="Skip the summary banner")
    return parser.parse_args(argv)


def _apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    override: dict = {}
    if args.layers is not None:
        override.setdefault("model", {})["layers"] = args.layers
    if args.activation:
        override.setdefault("model", {})["activation"] = args.activation
    if args.team_a is not None:
        override.setdefault("matchup", {})["a"] = args.team_a
    if args.team_b is not None:
        override.setdefault("matchup", {})["b"] = args.team_b
    if args.step_ms is not None:
        override.setdefault("display", {})["step_ms"] = args.step_ms
    if args.run_dir is not None:
        override.setdefault("display", {})["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        override.setdefault("display", {})["enable_plots"] = True
    return run_config.merge(config, override)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(run_config.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = run_config.load_preset(args.preset)
    if args.config:
        override = run_config.load_config(args.config)
        if {"model", "matchup"} <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = run_config.merge(config, override)
    config = _apply_overrides(config, args)

    try:
        resolved = run_config.resolve(config)
    except (KeyError, ValueError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from None
    if resolved.team_a == resolved.team_b:
        raise SystemExit("Pick two different teams")

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    try:
        prediction = compute_winner(
            resolved.layers,
            (resolved.team_a, resolved.team_b),
            activation=resolved.activation,
        )
    except MatchupNetError as exc:
        raise SystemExit(f"Prediction failed: {exc}") from None

    if not args.quiet:
        print_summary(prediction, activation=resolved.activation)

    run_dir = resolved.run_dir
    write_prediction(run_dir / "prediction.json", prediction)
    write_manifest(run_dir / "manifest.json", config=config)
    plot = TracePlotter(run_dir, enable_plots=resolved.enable_plots).render(prediction)

    print(_format_result(prediction, run_dir=run_dir, step_ms=resolved.step_ms, plot=plot))


if __name__ == "__main__":
    main()

import json

import numpy as np
import pytest

from matchupnet.predict import compute_winner
from matchupnet.reporting.artifacts import write_manifest, write_prediction
from matchupnet.reporting.plots import TracePlotter
from matchupnet.reporting.staging import RevealEvent, active_layer, reveal_schedule
from matchupnet.reporting.visuals import (
    edge_contributions,
    edge_style,
    layer_colors,
    layer_labels,
    normalize_for_color,
    value_to_color,
)


@pytest.fixture
def prediction():
    return compute_winner([6, 3, 5, 2], (0, 1))


def test_reveal_schedule_timing(prediction):
    schedule = reveal_schedule(prediction.trace, step_ms=750)
    assert schedule == [
        RevealEvent(750, "reveal", 0),
        RevealEvent(1500, "reveal", 1),
        RevealEvent(2250, "reveal", 2),
        RevealEvent(3000, "reveal", 3),
        RevealEvent(3750, "done"),
    ]


def test_reveal_schedule_rejects_non_positive_step(prediction):
    with pytest.raises(ValueError):
        reveal_schedule(prediction.trace, step_ms=0)


def test_active_layer_follows_schedule(prediction):
    schedule = reveal_schedule(prediction.trace, step_ms=100)
    assert active_layer(schedule, 0) == -1
    assert active_layer(schedule, 99.9) == -1
    assert active_layer(schedule, 100) == 0
    assert active_layer(schedule, 250) == 1
    assert active_layer(schedule, 499) == 3
    assert active_layer(schedule, 500) == -1
    assert active_layer(schedule, 10_000) == -1


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.0, "rgb(255,255,255)"),
        (1.0, "rgb(255,140,25)"),
        (-1.0, "rgb(25,13,255)"),
        (0.5, "rgb(255,198,140)"),
        (-0.5, "rgb(140,134,255)"),
        (2.0, "rgb(255,140,25)"),
        (-3.0, "rgb(25,13,255)"),
    ],
)
def test_value_to_color(value, expected):
    assert value_to_color(value) == expected


def test_normalize_for_color():
    np.testing.assert_allclose(normalize_for_color([0.5, -0.25]), [1.0, -0.5])
    np.testing.assert_allclose(normalize_for_color([0.0, 0.0]), [0.0, 0.0])


def test_layer_colors_cover_every_neuron(prediction):
    colors = layer_colors(prediction.trace)
    assert [len(layer) for layer in colors] == list(prediction.topology)
    assert colors[0] == ["rgb(255,255,255)", "rgb(255,140,25)"]


def test_edge_contributions(prediction):
    strengths = edge_contributions(prediction.parameters, prediction.trace, 0)
    assert strengths.shape == (6, 2)
    np.testing.assert_array_equal(strengths[:, 0], np.zeros(6))
    np.testing.assert_array_equal(strengths[:, 1], prediction.parameters.weights[0][:, 1])
    with pytest.raises(IndexError):
        edge_contributions(prediction.parameters, prediction.trace, 4)


def test_edge_style():
    idle = edge_style(0.1, active=False)
    assert (idle.width, idle.color) == (1.2, "#c7c7c7")
    assert idle.opacity == pytest.approx(0.25)
    hot = edge_style(0.8, active=True)
    assert (hot.width, hot.color, hot.opacity) == (4.5, "#f59e0b", 0.9)
    cold = edge_style(-0.1, active=True)
    assert cold.color == "#3b82f6"
    assert cold.width == pytest.approx(1.3)


def test_layer_labels():
    assert layer_labels((2, 6, 3, 2)) == ["Input (2)", "Layer 1 (6)", "Layer 2 (3)", "Output (2)"]


def test_write_prediction_and_manifest(tmp_path, prediction):
    path = write_prediction(tmp_path / "out" / "prediction.json", prediction)
    payload = json.loads(open(path).read())
    assert payload["seed"] == 297
    assert payload["winner"] == 0
    assert payload["topology"] == [2, 6, 3, 5, 2]
    assert len(payload["trace"]) == 5

    config = {"model": {"layers": [6, 3, 5, 2]}, "matchup": {"a": 0, "b": 1}}
    manifest_path = write_manifest(tmp_path / "out" / "manifest.json", config=config)
    manifest = json.loads(open(manifest_path).read())
    assert manifest["config"] == config
    assert len(manifest["config_hash"]) == 12
    assert "git_sha" in manifest


def test_plotter_disabled_is_noop(tmp_path, prediction):
    plotter = TracePlotter(tmp_path / "plots", enable_plots=False)
    assert plotter.render(prediction) is None
    assert not (tmp_path / "plots").exists()


def test_plotter_headless(tmp_path, prediction):
    pytest.importorskip("matplotlib")
    plotter = TracePlotter(tmp_path, enable_plots=True)
    path = plotter.render(prediction, active_layer=1)
    assert path == tmp_path / "trace.png"
    assert path.exists()

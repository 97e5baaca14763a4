import json
from pathlib import Path

import pytest

from cli.main import main


def _result_line(out: str) -> dict:
    return json.loads(out.strip().splitlines()[-1])


def test_cli_reference_preset(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(["--preset", "reference"])
    out = capsys.readouterr().out
    assert "=== MatchupNet prediction ===" in out
    result = _result_line(out)
    assert result["seed"] == 297
    assert result["winner"] == 0
    assert result["topology"] == [2, 6, 3, 5, 2]
    assert result["duration_ms"] == 750 * 5
    run_dir = Path("runs/reference")
    assert (run_dir / "prediction.json").exists()
    assert (run_dir / "manifest.json").exists()
    assert "plot" not in result


def test_cli_overrides(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(
        [
            "--preset",
            "landing",
            "--team-a",
            "4",
            "--team-b",
            "9",
            "--layers",
            "5,2",
            "--step-ms",
            "100",
            "--run-dir",
            str(tmp_path / "custom"),
            "--dump-config",
            str(tmp_path / "resolved.json"),
            "--quiet",
        ]
    )
    out = capsys.readouterr().out
    assert "MatchupNet prediction" not in out
    result = _result_line(out)
    assert result["topology"] == [2, 5, 2]
    assert result["seed"] == 2 * 131 + 5 + 2 * 2
    assert result["winner"] in (4, 9)
    assert result["duration_ms"] == 300
    dumped = json.loads((tmp_path / "resolved.json").read_text())
    assert dumped["matchup"] == {"a": 4, "b": 9}
    saved = json.loads((tmp_path / "custom" / "prediction.json").read_text())
    assert saved["winner"] == result["winner"]


def test_cli_config_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    cfg = tmp_path / "override.json"
    cfg.write_text(json.dumps({"model": {"activation": "relu"}, "display": {"run_dir": "out"}}))
    main(["--preset", "reference", "--config", str(cfg), "--quiet"])
    result = _result_line(capsys.readouterr().out)
    assert result["seed"] == 297
    assert Path("out/prediction.json").exists()


def test_cli_rejects_same_team(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        main(["--team-a", "3", "--team-b", "3"])
    assert "different teams" in str(excinfo.value)


def test_cli_rejects_bad_output_width(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        main(["--layers", "4,3", "--quiet"])
    assert "Prediction failed" in str(excinfo.value)


def test_cli_list_presets(capsys):
    with pytest.raises(SystemExit):
        main(["--list-presets"])
    names = capsys.readouterr().out.split()
    assert "landing" in names
    assert "reference" in names


def test_cli_enable_plots(tmp_path, monkeypatch, capsys):
    pytest.importorskip("matplotlib")
    monkeypatch.chdir(tmp_path)
    main(["--preset", "wide", "--enable-plots", "--quiet"])
    result = _result_line(capsys.readouterr().out)
    assert Path(result["plot"]).exists()

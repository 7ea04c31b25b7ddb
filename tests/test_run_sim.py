from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "scripts"))

from run_sim import main  # noqa: E402

from telemetry.logger import read_records  # noqa: E402


def test_cli_runs_batches(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.chdir(ROOT)
    telemetry_path = tmp_path / "cli.jsonl"
    code = main(["ff", "f", "rf", "--telemetry", str(telemetry_path)])
    assert code == 0
    out = capsys.readouterr().out
    assert "Landed: (0, 0) NORTH" in out
    assert "ff -> (0, 2) NORTH" in out
    assert "f -> (0, 2) NORTH stopped" in out
    assert "rf -> (1, 2) EAST" in out
    assert len(read_records(str(telemetry_path))) == 5


def test_cli_not_landed(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.chdir(ROOT)
    code = main(["f", "--no-land", "--telemetry", str(tmp_path / "t.jsonl")])
    assert code == 1
    assert "not landed" in capsys.readouterr().err


def test_cli_bad_config(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("commands: {f: hop}\n", encoding="utf-8")
    assert main(["--config", str(bad)]) == 2
    assert "Failed to load configuration" in capsys.readouterr().err


def test_cli_list_form_map(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    map_path = tmp_path / "cells.json"
    map_path.write_text("[[0, 1], [2, 3]]", encoding="utf-8")
    cfg = tmp_path / "sim.yaml"
    cfg.write_text(f"map: {map_path.as_posix()}\n", encoding="utf-8")
    assert main(["--config", str(cfg), "--telemetry", str(tmp_path / "t.jsonl"), "f"]) == 0
    assert "f -> (0, 0) NORTH stopped" in capsys.readouterr().out


def test_cli_non_mapping_map_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    map_path = tmp_path / "bad.json"
    map_path.write_text("5", encoding="utf-8")
    cfg = tmp_path / "sim.yaml"
    cfg.write_text(f"map: {map_path.as_posix()}\n", encoding="utf-8")
    assert main(["--config", str(cfg), "f"]) == 2
    assert "Failed to load configuration" in capsys.readouterr().err


def test_cli_non_mapping_landing_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    cfg = tmp_path / "sim.yaml"
    cfg.write_text("landing: 5\n", encoding="utf-8")
    assert main(["--config", str(cfg), "f"]) == 2
    assert "'landing' must be a mapping" in capsys.readouterr().err


def test_cli_unwritable_telemetry_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    cfg = tmp_path / "sim.yaml"
    cfg.write_text("commands: {f: forward}\n", encoding="utf-8")
    # the parent "directory" is a regular file, so the log cannot be created
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    code = main(["--config", str(cfg), "--telemetry", str(blocker / "t.jsonl"), "f"])
    assert code == 2
    assert "Failed to open telemetry log" in capsys.readouterr().err

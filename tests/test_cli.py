from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from grove.config import PETORKA_CFG_NAME, load_petorka_cfg
from petorka.cli import _parse_moves, app, default_runtime_dir
from petorka.movement import Direction



def _json_lines(output: str) -> list[dict[str, Any]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_parse_moves() -> None:
    assert _parse_moves("up:3, none:2,d:1") == [(Direction.UP, 3), (None, 2), (Direction.RIGHT, 1)]
    assert _parse_moves("") == []


@pytest.mark.parametrize("text", ["up", "sideways:4", "up:x", "up:-1"])
def test_parse_moves_rejects_bad_input(text: str) -> None:
    with pytest.raises(ValueError):
        _parse_moves(text)


def test_map_command_lists_layout() -> None:
    result = CliRunner().invoke(app, ["map"])

    assert result.exit_code == 0, result.output
    assert "Board 800x480" in result.output
    assert "Player start x=100 y=100" in result.output
    assert "door  1  math" in result.output
    assert "door 10  language" in result.output
    assert result.output.count("hazard ") == 2


def test_simulate_walks_into_first_door_and_answers(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app,
        [
            "simulate",
            "--frames",
            "60",
            "--moves",
            "right:60",
            "--answer",
            "correct",
            "--base-dir",
            str(tmp_path),
        ],
    )

    assert result.exit_code == 0, result.output
    snapshots = _json_lines(result.output)
    assert len(snapshots) == 1
    final = snapshots[0]
    assert final["frame"] == 60
    assert final["score"] == 10
    assert final["doors"][0]["open"] is True
    assert final["outcome"] == "in_progress"
    log_text = (tmp_path / "console.log").read_text(encoding="utf-8")
    assert "gate: door 1 opened (score 10)" in log_text
    assert "sfx: success" in log_text


def test_simulate_every_frame_with_open_task() -> None:
    result = CliRunner().invoke(
        app,
        ["simulate", "--frames", "55", "--moves", "right:55", "--answer", "none", "--every"],
    )

    assert result.exit_code == 0, result.output
    snapshots = _json_lines(result.output)
    assert [snap["frame"] for snap in snapshots] == list(range(1, 56))
    assert snapshots[0]["task"] is None
    assert snapshots[-1]["task"]["door_id"] == 1
    assert snapshots[-1]["frozen"] is True
    assert "expected_answer" not in result.output


def test_simulate_rejects_bad_moves() -> None:
    result = CliRunner().invoke(app, ["simulate", "--moves", "sideways:5"])

    assert result.exit_code == 1
    assert "invalid --moves" in result.output


def test_simulate_rejects_unknown_answer_policy() -> None:
    result = CliRunner().invoke(app, ["simulate", "--answer", "maybe"])

    assert result.exit_code == 1
    assert "unknown answer policy" in result.output


def test_config_command_creates_and_updates_cfg(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["config", "--base-dir", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "wrong_penalty = 10" in result.output
    assert (tmp_path / PETORKA_CFG_NAME).is_file()

    result = runner.invoke(app, ["config", "--base-dir", str(tmp_path), "--penalty", "15", "--no-sound", "--seed", "7"])
    assert result.exit_code == 0, result.output
    assert "wrong_penalty = 15" in result.output
    assert "sound_enabled = False" in result.output

    config = load_petorka_cfg(tmp_path / PETORKA_CFG_NAME)
    assert config.wrong_penalty == 15
    assert config.rng_seed == 7
    assert config.sound_enabled is False


def test_config_command_rejects_bad_timing(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["config", "--base-dir", str(tmp_path), "--max-dt", "0"])

    assert result.exit_code == 1
    assert "--max-dt must be in" in result.output


def test_play_command_passes_config_to_window(monkeypatch, tmp_path: Path) -> None:
    captured: dict[str, Any] = {}

    def _fake_run_play(**kwargs):  # noqa: ANN003
        captured.update(kwargs)

    monkeypatch.setattr("petorka.view.run_play", _fake_run_play)
    runner = CliRunner()
    runner.invoke(app, ["config", "--base-dir", str(tmp_path), "--margin", "2", "--seed", "99", "--fps", "30"])

    result = runner.invoke(app, ["play", "--base-dir", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert captured["seed"] == 99
    assert captured["fps"] == 30
    assert captured["tuning"].contact_margin == 2.0
    assert captured["base_dir"] == tmp_path


def test_default_runtime_dir_honours_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("PETORKA_RUNTIME_DIR", raising=False)
    assert default_runtime_dir() == Path("artifacts") / "runtime"

    monkeypatch.setenv("PETORKA_RUNTIME_DIR", str(tmp_path))
    assert default_runtime_dir() == tmp_path


def test_config_command_rejects_oversized_frame_cap(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["config", "--base-dir", str(tmp_path), "--max-dt", "0.5"])

    assert result.exit_code == 1
    assert "--max-dt must be in" in result.output
    assert not (tmp_path / PETORKA_CFG_NAME).exists()


def test_config_command_reads_runtime_dir_env_at_call_time(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PETORKA_RUNTIME_DIR", str(tmp_path / "runtime"))

    result = CliRunner().invoke(app, ["config"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "runtime" / PETORKA_CFG_NAME).is_file()


def test_play_command_passes_music_setting(monkeypatch, tmp_path: Path) -> None:
    captured: dict[str, Any] = {}

    def _fake_run_play(**kwargs):  # noqa: ANN003
        captured.update(kwargs)

    monkeypatch.setattr("petorka.view.run_play", _fake_run_play)
    monkeypatch.setenv("PETORKA_RUNTIME_DIR", str(tmp_path))
    runner = CliRunner()
    runner.invoke(app, ["config", "--no-music"])

    result = runner.invoke(app, ["play"])

    assert result.exit_code == 0, result.output
    assert captured["music_enabled"] is False
    assert captured["sound_enabled"] is True
    assert captured["base_dir"] == tmp_path

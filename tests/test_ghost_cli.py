from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from ghost.cli import app
from ghost.demo import DemoRecording, NetMessageTick, SoundMessage, encode_recording
from ghost.track import load_track_file

runner = CliRunner()


def _write_rj(path: Path) -> Path:
    frames = [
        {"position": [0.0, 0.0, 0.0], "orientation": [0.0, 0.0], "length": 1.0},
        {"position": [10.0, 0.0, 0.0], "orientation": [0.0, 90.0], "length": 1.0},
        {"position": [20.0, 0.0, 0.0], "orientation": [0.0, 90.0], "length": 1.0},
    ]
    path.write_text(json.dumps({"frames": frames}), encoding="utf-8")
    return path


def _write_sg(path: Path) -> Path:
    frames = [{"origin": [0.0, 0.0, 0.0], "viewangles": [0.0, 0.0, 0.0]}, {"origin": [4.0, 0.0, 0.0], "viewangles": [0.0, 0.0, 0.0]}]
    path.write_text(json.dumps({"frames": frames}), encoding="utf-8")
    return path


def test_info(tmp_path: Path) -> None:
    ghost = _write_rj(tmp_path / "run.rj.json")

    result = runner.invoke(app, ["info", str(ghost)])

    assert result.exit_code == 0, result.output
    assert "Name: run.rj.json" in result.output
    assert "Map: NoMapName" in result.output
    assert "Frames: 3" in result.output
    assert "Length: 3.000s" in result.output
    assert "Sound: no" in result.output


def test_frame_interpolates(tmp_path: Path) -> None:
    ghost = _write_rj(tmp_path / "run.rj.json")

    result = runner.invoke(app, ["frame", str(ghost), "--time", "1.5"])

    assert result.exit_code == 0, result.output
    assert "Index: 0" in result.output
    assert "Origin: (5.000, 0.000, 0.000)" in result.output
    assert "Viewangles: (0.000, 45.000, 0.000)" in result.output


def test_frame_end_of_stream(tmp_path: Path) -> None:
    ghost = _write_rj(tmp_path / "run.rj.json")

    result = runner.invoke(app, ["frame", str(ghost), "--time", "99"])

    assert result.exit_code == 0, result.output
    assert "end of stream (length 3.000s)" in result.output


def test_frame_without_timing_needs_frametime(tmp_path: Path) -> None:
    ghost = _write_sg(tmp_path / "run.sg.json")

    missing = runner.invoke(app, ["frame", str(ghost), "--time", "0.5"])
    assert missing.exit_code == 1
    assert "no timing data" in missing.output

    fixed = runner.invoke(app, ["frame", str(ghost), "--time", "0.75", "--frametime", "0.5"])
    assert fixed.exit_code == 0, fixed.output
    assert "Origin: (2.000, 0.000, 0.000)" in fixed.output


def test_frametime_from_config(tmp_path: Path) -> None:
    ghost = _write_sg(tmp_path / "run.sg.json")
    config = tmp_path / "ghost.toml"
    config.write_text("default_frametime = 0.5\n", encoding="utf-8")

    result = runner.invoke(app, ["info", str(ghost), "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert "Length: 1.000s" in result.output


def test_format_option_for_unknown_extension(tmp_path: Path) -> None:
    ghost = _write_rj(tmp_path / "run.ghost")

    unknown = runner.invoke(app, ["info", str(ghost)])
    assert unknown.exit_code == 1
    assert "unknown ghost format" in unknown.output

    forced = runner.invoke(app, ["info", str(ghost), "--format", "romanian_jumpers"])
    assert forced.exit_code == 0, forced.output
    assert "Frames: 3" in forced.output


def test_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["info", str(tmp_path / "nope.rj.json")])

    assert result.exit_code == 1
    assert "ghost file not found" in result.output


def test_dump_writes_track(tmp_path: Path) -> None:
    ghost = _write_rj(tmp_path / "run.rj.json")
    out = tmp_path / "out" / "track.json"

    result = runner.invoke(app, ["dump", str(ghost), str(out)])

    assert result.exit_code == 0, result.output
    assert "wrote 3 frames" in result.output
    track = load_track_file(out)
    assert track.ghost_name == "run.rj.json"
    assert len(track.frames) == 3


def test_warnings_are_reported(tmp_path: Path) -> None:
    recording = DemoRecording(gameplay=[NetMessageTick(time=0.1, messages=[SoundMessage(sound_index_short=7)])])
    ghost = tmp_path / "run.dem.json"
    ghost.write_bytes(encode_recording(recording))

    result = runner.invoke(app, ["info", str(ghost)])

    assert result.exit_code == 0, result.output
    assert "warning: sound resource index 7" in result.output
    assert "Frames: 1" in result.output


def test_list(tmp_path: Path) -> None:
    folder = tmp_path / "replays"
    folder.mkdir()
    ghost = _write_rj(folder / "run.rj.json")
    (folder / "notes.txt").write_text("", encoding="utf-8")
    config = tmp_path / "ghost.toml"
    config.write_text(f"replay_folders = [{json.dumps(str(folder))}]\n", encoding="utf-8")

    result = runner.invoke(app, ["list", "--config", str(config), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [str(ghost)]


def test_config_is_found_in_working_directory(tmp_path: Path, monkeypatch) -> None:
    ghost = _write_sg(tmp_path / "run.sg.json")
    (tmp_path / "ghost.toml").write_text(
        f"replay_folders = [{json.dumps(str(tmp_path))}]\ndefault_frametime = 0.25\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    info = runner.invoke(app, ["info", str(ghost)])
    assert info.exit_code == 0, info.output
    assert "Length: 0.500s" in info.output

    listed = runner.invoke(app, ["list", "--json"])
    assert listed.exit_code == 0, listed.output
    assert json.loads(listed.output) == [str(ghost)]

from __future__ import annotations

import json
from pathlib import Path
import warnings

import typer

from .config import GhostConfig, default_config_path, find_replays, load_config_or_default, resolve_blob_type
from .errors import GhostError
from .formats import GhostBlobType, load_ghost
from .track import EndOfStream, FrameSample, NoTimingData, ReplayTrack, dump_track_file

app = typer.Typer(add_completion=False)


def _load_config(path: Path | None) -> GhostConfig:
    if path is None:
        path = default_config_path()
    try:
        return load_config_or_default(path)
    except GhostError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _load_track(path: Path, config: GhostConfig, fmt: GhostBlobType | None) -> ReplayTrack:
    if not path.is_file():
        typer.echo(f"ghost file not found: {path}", err=True)
        raise typer.Exit(code=1)
    override = fmt if fmt is not None else resolve_blob_type(path, config)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            track = load_ghost(path, override=override)
        except GhostError as exc:
            typer.echo(f"{path}: {exc}", err=True)
            raise typer.Exit(code=1) from exc
    for warning in caught:
        typer.echo(f"warning: {warning.message}", err=True)
    return track


def _frametime(option: float | None, config: GhostConfig) -> float | None:
    if option is not None:
        return option
    return config.default_frametime


def _format_vec(values) -> str:
    return "(" + ", ".join(f"{float(v):.3f}" for v in values) + ")"


@app.command("info")
def cmd_info(
    ghost_file: Path = typer.Argument(..., help="ghost file (.dem.json, .dem.msgpack, .sg.json, .rj.json, .dat)"),
    fmt: GhostBlobType | None = typer.Option(None, "--format", help="force the ghost format"),
    config_file: Path | None = typer.Option(None, "--config", help="replay settings (default: ./ghost.toml if present)"),
    frametime: float | None = typer.Option(None, help="fixed frame duration for ghosts without timing"),
) -> None:
    """Summarize a ghost."""
    config = _load_config(config_file)
    track = _load_track(ghost_file, config, fmt)
    ft = _frametime(frametime, config)
    typer.echo(f"Name: {track.ghost_name}")
    typer.echo(f"Map: {track.map_name}")
    typer.echo(f"Mod: {track.game_mod}")
    typer.echo(f"Frames: {len(track.frames)}")
    typer.echo(f"Length: {track.length(ft):.3f}s")
    typer.echo(f"Sound: {'yes' if track.has_sound() else 'no'}")


@app.command("frame")
def cmd_frame(
    ghost_file: Path = typer.Argument(..., help="ghost file"),
    time: float = typer.Option(..., "--time", help="playback time in seconds"),
    fmt: GhostBlobType | None = typer.Option(None, "--format", help="force the ghost format"),
    config_file: Path | None = typer.Option(None, "--config", help="replay settings (default: ./ghost.toml if present)"),
    frametime: float | None = typer.Option(None, help="fixed frame duration for ghosts without timing"),
) -> None:
    """Print the interpolated frame at a playback time."""
    config = _load_config(config_file)
    track = _load_track(ghost_file, config, fmt)
    result = track.query_at(time, _frametime(frametime, config))
    if isinstance(result, NoTimingData):
        typer.echo("ghost has no timing data; pass --frametime", err=True)
        raise typer.Exit(code=1)
    if isinstance(result, EndOfStream):
        typer.echo(f"end of stream (length {track.length(_frametime(frametime, config)):.3f}s)")
        return
    assert isinstance(result, FrameSample)
    frame = result.frame
    typer.echo(f"Index: {result.index}")
    typer.echo(f"Origin: {_format_vec(frame.origin)}")
    typer.echo(f"Viewangles: {_format_vec(frame.viewangles)}")
    if frame.fov is not None:
        typer.echo(f"Fov: {frame.fov:.3f}")
    extras = frame.extras
    if extras is not None and extras.anim is not None:
        anim = extras.anim
        typer.echo(f"Anim: sequence={anim.sequence} frame={anim.frame} gaitsequence={anim.gaitsequence}")
    if extras is not None:
        for chat in extras.say_text:
            typer.echo(f"Chat: {chat.text}")
        if extras.weapon_change is not None:
            typer.echo(f"Weapon: {extras.weapon_change}")


@app.command("dump")
def cmd_dump(
    ghost_file: Path = typer.Argument(..., help="ghost file"),
    out_file: Path = typer.Argument(..., help="output track (.json)"),
    fmt: GhostBlobType | None = typer.Option(None, "--format", help="force the ghost format"),
    config_file: Path | None = typer.Option(None, "--config", help="replay settings (default: ./ghost.toml if present)"),
) -> None:
    """Reconstruct a ghost and write the frame track as JSON."""
    config = _load_config(config_file)
    track = _load_track(ghost_file, config, fmt)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    dump_track_file(out_file, track)
    typer.echo(f"wrote {len(track.frames)} frames to {out_file}")


@app.command("list")
def cmd_list(
    config_file: Path | None = typer.Option(None, "--config", help="replay folders (default: ./ghost.toml if present)"),
    as_json: bool = typer.Option(False, "--json", help="print a JSON array"),
) -> None:
    """List replay files found in the configured folders."""
    config = _load_config(config_file)
    paths = find_replays(config)
    if as_json:
        typer.echo(json.dumps([str(path) for path in paths]))
        return
    for path in paths:
        typer.echo(str(path))


def main(argv: list[str] | None = None) -> None:
    app(prog_name="ghost", args=argv)


if __name__ == "__main__":
    main()

from __future__ import annotations

from pathlib import Path

import msgspec

from .errors import GhostError
from .formats import GhostBlobType, blob_type_from_file_name

GHOST_CONFIG_NAME = "ghost.toml"
DEFAULT_REPLAY_FORMATS = ("dem.json", "dem.msgpack", "sg.json", "rj.json", "dat")


class GhostConfigError(GhostError):
    pass


class GhostConfig(msgspec.Struct, forbid_unknown_fields=True):
    # Folders searched by `find_replays`.
    replay_folders: list[str] = msgspec.field(default_factory=list)
    # File name suffixes without the leading dot, e.g. "dem.json".
    replay_formats: list[str] = msgspec.field(default_factory=lambda: list(DEFAULT_REPLAY_FORMATS))
    replay_folders_search_recursively: bool = True
    # Parser used when a file name matches no known format.
    replay_unknown_format_override: GhostBlobType | None = None
    # Fixed frame duration for ghosts that do not record one.
    default_frametime: float | None = None


def load_config(path: Path) -> GhostConfig:
    path = Path(path)
    try:
        return msgspec.toml.decode(path.read_bytes(), type=GhostConfig)
    except msgspec.DecodeError as exc:
        raise GhostConfigError(f"{path}: {exc}") from exc


def load_config_or_default(path: Path | None) -> GhostConfig:
    if path is None:
        return GhostConfig()
    return load_config(path)


def default_config_path(cwd: Path | None = None) -> Path | None:
    """`ghost.toml` in `cwd` (default: the working directory) if it exists."""
    path = (Path.cwd() if cwd is None else Path(cwd)) / GHOST_CONFIG_NAME
    if path.is_file():
        return path
    return None


def _matches_format(name: str, formats: list[str]) -> bool:
    lowered = name.lower()
    return any(lowered.endswith("." + fmt.lower().lstrip(".")) for fmt in formats)


def find_replays(config: GhostConfig) -> list[Path]:
    out: list[Path] = []
    for folder in config.replay_folders:
        root = Path(folder)
        if not root.is_dir():
            continue
        candidates = root.rglob("*") if config.replay_folders_search_recursively else root.iterdir()
        for path in candidates:
            if path.is_file() and _matches_format(path.name, config.replay_formats):
                out.append(path)
    return sorted(out)


def resolve_blob_type(path: Path, config: GhostConfig) -> GhostBlobType | None:
    blob_type = blob_type_from_file_name(Path(path).name)
    if blob_type is not None:
        return blob_type
    return config.replay_unknown_format_override

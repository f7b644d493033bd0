from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from ..demo.reconstruct import demo_ghost_parse
from ..demo.records import decode_recording
from ..errors import UnknownFormatError
from ..track import ReplayTrack
from .romanian_jumpers import romanian_jumpers_ghost_parse
from .sourceruns_hlkz import srhlkz_ghost_parse
from .surf_gateway import surf_gateway_ghost_parse


class GhostBlobType(StrEnum):
    DEMO = "demo"
    DEMO_MSGPACK = "demo_msgpack"
    SURF_GATEWAY = "surf_gateway"
    ROMANIAN_JUMPERS = "romanian_jumpers"
    SRHLKZ = "hlkz"


# Checked in order; longer suffixes first.
_SUFFIXES: tuple[tuple[str, GhostBlobType], ...] = (
    (".dem.json", GhostBlobType.DEMO),
    (".dem.msgpack", GhostBlobType.DEMO_MSGPACK),
    (".sg.json", GhostBlobType.SURF_GATEWAY),
    (".rj.json", GhostBlobType.ROMANIAN_JUMPERS),
    (".dat", GhostBlobType.SRHLKZ),
)


def blob_type_from_file_name(file_name: str) -> GhostBlobType | None:
    lowered = str(file_name).lower()
    for suffix, blob_type in _SUFFIXES:
        if lowered.endswith(suffix):
            return blob_type
    return None


def ghost_name_from_file_name(file_name: str) -> str:
    return Path(file_name).name


def parse_ghost(file_name: str, data: bytes, *, override: GhostBlobType | None = None) -> ReplayTrack:
    """Build a track from raw ghost bytes, picking the parser by `file_name`.

    `override` wins over the file name, for formats with unusual extensions.
    """

    blob_type = override if override is not None else blob_type_from_file_name(file_name)
    if blob_type is None:
        raise UnknownFormatError(f"unknown ghost format for file {file_name!r}")

    ghost_name = ghost_name_from_file_name(file_name)
    if blob_type is GhostBlobType.DEMO:
        return demo_ghost_parse(decode_recording(data, fmt="json"), ghost_name=ghost_name)
    if blob_type is GhostBlobType.DEMO_MSGPACK:
        return demo_ghost_parse(decode_recording(data, fmt="msgpack"), ghost_name=ghost_name)
    if blob_type is GhostBlobType.SURF_GATEWAY:
        return surf_gateway_ghost_parse(ghost_name, data)
    if blob_type is GhostBlobType.ROMANIAN_JUMPERS:
        return romanian_jumpers_ghost_parse(ghost_name, data)
    return srhlkz_ghost_parse(file_name, data)


def load_ghost(path: Path, *, override: GhostBlobType | None = None) -> ReplayTrack:
    path = Path(path)
    return parse_ghost(str(path), path.read_bytes(), override=override)


__all__ = [
    "GhostBlobType",
    "blob_type_from_file_name",
    "load_ghost",
    "parse_ghost",
    "romanian_jumpers_ghost_parse",
    "srhlkz_ghost_parse",
    "surf_gateway_ghost_parse",
]

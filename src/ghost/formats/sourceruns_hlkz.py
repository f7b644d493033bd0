from __future__ import annotations

from pathlib import PurePath

from construct import Array, ConstructError, Float32l, GreedyRange, Int16ul, Struct, Terminated

from ..errors import GhostParseError
from ..geom import Vec3
from ..track import ReplayTrack
from ..types import GhostFrame

GAME_MOD = "ag"
_MAP_NAME_DELIMITERS = ("_0_0_", "_0_1_")

HLKZ_FRAME = Struct(
    # Cumulative server time.
    "time" / Float32l,
    "origin" / Array(3, Float32l),
    "angles" / Array(3, Float32l),
    "buttons" / Int16ul,
)

_HLKZ_FILE = Struct(
    "frames" / GreedyRange(HLKZ_FRAME),
    Terminated,
)


def map_name_from_file_name(file_name: str) -> str:
    stem = PurePath(file_name).name.split(".", 1)[0]
    for delimiter in _MAP_NAME_DELIMITERS:
        end = stem.find(delimiter)
        if end >= 0:
            return stem[:end]
    raise GhostParseError(f"cannot find map name in {file_name!r}")


def srhlkz_ghost_parse(file_name: str, data: bytes) -> ReplayTrack:
    try:
        parsed = _HLKZ_FILE.parse(bytes(data))
    except ConstructError as exc:
        raise GhostParseError("cannot parse SourceRuns HLKZ replay data") from exc

    map_name = map_name_from_file_name(file_name)
    raw_frames = list(parsed.frames)
    if not raw_frames:
        raise GhostParseError("SourceRuns HLKZ replay has no frames")

    frames: list[GhostFrame] = []
    # Frame time follows server time, starting from the first sample.
    prev_time = float(raw_frames[0].time)
    for raw in raw_frames:
        frames.append(
            GhostFrame(
                origin=Vec3.from_seq(raw.origin),
                viewangles=Vec3.from_seq(raw.angles),
                frametime=float(raw.time) - prev_time,
                buttons=int(raw.buttons),
            )
        )
        prev_time = float(raw.time)

    ghost_name = PurePath(file_name).name.split(".", 1)[0]
    return ReplayTrack(ghost_name=ghost_name, map_name=map_name, game_mod=GAME_MOD, frames=tuple(frames))

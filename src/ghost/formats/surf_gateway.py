from __future__ import annotations

import msgspec

from ..errors import GhostParseError
from ..geom import Vec3
from ..track import ReplayTrack
from ..types import GhostFrame

MAP_NAME = "NoMapName"
GAME_MOD = "cstrike"


class SgGhostFrame(msgspec.Struct):
    origin: tuple[float, float, float]
    viewangles: tuple[float, float, float]
    moves: tuple[float, float, float] = (0.0, 0.0, 0.0)
    buttons: int = 0
    impulses: int = 0
    # Not a duration; the format has no usable per-frame timing.
    frametime: int = 0


class SgGhostInfo(msgspec.Struct):
    map: str = ""
    timestamp: int = 0
    name: str = ""
    authid: str = ""
    time: float = 0.0
    startvel: tuple[float, float, float] = (0.0, 0.0, 0.0)
    frames: list[SgGhostFrame] = msgspec.field(default_factory=list)


_DECODER = msgspec.json.Decoder(type=SgGhostInfo)


def surf_gateway_ghost_parse(ghost_name: str, data: bytes | str) -> ReplayTrack:
    try:
        ghost = _DECODER.decode(data)
    except msgspec.DecodeError as exc:
        raise GhostParseError(f"invalid Surf Gateway ghost: {exc}") from exc

    frames = tuple(
        GhostFrame(
            origin=Vec3.from_seq(frame.origin),
            viewangles=Vec3.from_seq(frame.viewangles),
            buttons=int(frame.buttons),
        )
        for frame in ghost.frames
    )
    return ReplayTrack(ghost_name=ghost_name, map_name=MAP_NAME, game_mod=GAME_MOD, frames=frames)

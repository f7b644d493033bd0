from __future__ import annotations

import msgspec

from ..errors import GhostParseError
from ..geom import Vec3
from ..track import ReplayTrack
from ..types import GhostFrame

MAP_NAME = "NoMapName"
GAME_MOD = "cstrike"


class RjGhostFrame(msgspec.Struct):
    position: tuple[float, float, float]
    # Pitch and yaw only.
    orientation: tuple[float, float]
    length: float
    # Cumulative.
    time: float = 0.0
    buttons: int = 0


class RjGhostInfo(msgspec.Struct):
    frames: list[RjGhostFrame] = msgspec.field(default_factory=list)


_DECODER = msgspec.json.Decoder(type=RjGhostInfo)


def romanian_jumpers_ghost_parse(ghost_name: str, data: bytes | str) -> ReplayTrack:
    try:
        ghost = _DECODER.decode(data)
    except msgspec.DecodeError as exc:
        raise GhostParseError(f"invalid Romanian Jumpers ghost: {exc}") from exc

    frames = []
    for frame in ghost.frames:
        x, y, z = frame.position
        pitch, yaw = frame.orientation
        frames.append(
            GhostFrame(
                # Stored Y-up; the engine is Z-up.
                origin=Vec3(x, -z, y),
                viewangles=Vec3(pitch, yaw, 0.0),
                frametime=float(frame.length),
                buttons=int(frame.buttons),
            )
        )
    return ReplayTrack(ghost_name=ghost_name, map_name=MAP_NAME, game_mod=GAME_MOD, frames=tuple(frames))

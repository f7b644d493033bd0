from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Final, TypeAlias

import msgspec

from .errors import GhostParseError
from .math import clamp01, lerp
from .types import GhostFrame


@dataclass(frozen=True, slots=True)
class FrameSample:
    # Index of the earlier bracketing frame; the frame whose discrete extras were carried over.
    index: int
    frame: GhostFrame


@dataclass(frozen=True, slots=True)
class EndOfStream:
    pass


@dataclass(frozen=True, slots=True)
class NoTimingData:
    pass


END_OF_STREAM: Final[EndOfStream] = EndOfStream()
NO_TIMING_DATA: Final[NoTimingData] = NoTimingData()

QueryResult: TypeAlias = FrameSample | EndOfStream | NoTimingData


def _frame_duration(frame: GhostFrame, frametime: float | None) -> float:
    if frametime is not None:
        return float(frametime)
    if frame.frametime is None:
        return 0.0
    return float(frame.frametime)


@dataclass(frozen=True, slots=True)
class ReplayTrack:
    ghost_name: str
    map_name: str
    game_mod: str
    frames: tuple[GhostFrame, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but keep the stored frame list immutable.
        if not isinstance(self.frames, tuple):
            object.__setattr__(self, "frames", tuple(self.frames))

    def __len__(self) -> int:
        return len(self.frames)

    def _bracket(self, time: float, frametime: float | None) -> tuple[float, float, int]:
        from_time = 0.0
        to_time = 0.0
        to_index = 0
        for index, frame in enumerate(self.frames):
            # Only stop once past `time`, so `to_index` is the "to" frame.
            if to_time > time:
                break
            from_time = to_time
            to_time += _frame_duration(frame, frametime)
            to_index = index
        return from_time, to_time, to_index

    def query_at(self, time: float, frametime: float | None = None) -> QueryResult:
        """Return the interpolated frame at playback `time` (seconds).

        `frametime` forces a fixed duration for every frame, for ghosts that do
        not record one. Origin and fov blend linearly, view angles along the
        shortest arc. Buttons, animation and extras come from the earlier frame.

        Returns `END_OF_STREAM` once `time` reaches the end of the final frame
        and `NO_TIMING_DATA` when there is no way to place frames in time.
        """

        if not self.frames:
            return END_OF_STREAM
        frame0 = self.frames[0]
        if frame0.frametime is None and frametime is None:
            return NO_TIMING_DATA

        time = float(time)
        from_time, to_time, to_index = self._bracket(time, frametime)

        if to_index == 0:
            return FrameSample(index=0, frame=frame0)

        # Past the last frame: this is how playback learns that it is over.
        if to_index == len(self.frames) - 1 and time >= to_time:
            return END_OF_STREAM

        to_frame = self.frames[to_index]
        from_frame = self.frames[to_index - 1]

        span = to_time - from_time
        target = clamp01((time - from_time) / span) if span > 0.0 else 1.0

        fov: float | None = None
        if from_frame.fov is not None and to_frame.fov is not None:
            fov = lerp(from_frame.fov, to_frame.fov, target)

        frame = replace(
            from_frame,
            origin=from_frame.origin.lerp(to_frame.origin, target),
            viewangles=from_frame.viewangles.lerp_angles(to_frame.viewangles, target),
            fov=fov,
        )
        return FrameSample(index=to_index - 1, frame=frame)

    def index_at(self, time: float, frametime: float | None = None) -> int:
        """Index of the frame being played at `time`, without interpolation."""
        if not self.frames:
            return 0
        _, _, to_index = self._bracket(float(time), frametime)
        return to_index

    def length(self, frametime: float | None = None) -> float:
        """Total playback duration in seconds.

        Ghosts without recorded frametimes need `frametime` to have a length.
        """

        if not self.frames:
            return 0.0
        if self.frames[0].frametime is None:
            if frametime is None:
                return 0.0
            return float(frametime) * len(self.frames)
        return float(sum(frame.frametime for frame in self.frames if frame.frametime is not None))

    def has_sound(self) -> bool:
        return any(frame.extras is not None and frame.extras.sound for frame in self.frames)


_TRACK_DECODER = msgspec.json.Decoder(type=ReplayTrack)


def dump_track(track: ReplayTrack) -> bytes:
    return msgspec.json.encode(track)


def load_track(data: bytes) -> ReplayTrack:
    try:
        return _TRACK_DECODER.decode(data)
    except msgspec.DecodeError as exc:
        raise GhostParseError(f"invalid track: {exc}") from exc


def dump_track_file(path: Path, track: ReplayTrack) -> None:
    path = Path(path)
    path.write_bytes(dump_track(track))


def load_track_file(path: Path) -> ReplayTrack:
    path = Path(path)
    return load_track(path.read_bytes())

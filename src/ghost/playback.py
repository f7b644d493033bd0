from __future__ import annotations

from dataclasses import dataclass

from .track import EndOfStream, FrameSample, NoTimingData, ReplayTrack
from .types import GhostFrame, GhostFrameExtra


@dataclass(frozen=True, slots=True)
class PlaybackStep:
    index: int
    frame: GhostFrame
    # Extras with discrete events of every frame reached since the previous step, oldest first.
    events: tuple[GhostFrameExtra, ...] = ()


class ReplayCursor:
    """Interpolated playback over a track that fires discrete extras exactly once.

    Playback may skip several frames between two calls to `advance`; the sounds,
    texts and chat lines of the skipped frames are still reported, in order.
    """

    def __init__(self, track: ReplayTrack, *, frametime: float | None = None) -> None:
        self._track = track
        self._frametime = frametime
        self._last_frame = -1
        self._last_time: float | None = None
        self._finished = False

    @property
    def track(self) -> ReplayTrack:
        return self._track

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def last_frame(self) -> int:
        return int(self._last_frame)

    def reset(self) -> None:
        self._last_frame = -1
        self._last_time = None
        self._finished = False

    def advance(self, time: float) -> PlaybackStep | None:
        """Sample the track at `time`.

        Returns None while paused (same time as the previous call), at the end
        of the track (`finished` turns True) and when the track has no timing.
        """

        time = float(time)
        if self._last_time is not None and self._last_time == time:
            return None
        self._last_time = time

        result = self._track.query_at(time, self._frametime)
        if isinstance(result, EndOfStream):
            self._finished = True
            return None
        if isinstance(result, NoTimingData):
            return None
        assert isinstance(result, FrameSample)

        self._finished = False
        index = result.index
        events: list[GhostFrameExtra] = []
        if index != self._last_frame:
            start = min(self._last_frame + 1, index)
            skipped = self._track.frames[start:index]
            for frame in (*skipped, result.frame):
                if frame.extras is not None and frame.extras.has_events():
                    events.append(frame.extras)
        self._last_frame = index
        return PlaybackStep(index=index, frame=result.frame, events=tuple(events))

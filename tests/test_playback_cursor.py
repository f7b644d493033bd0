from __future__ import annotations

from ghost.geom import Vec3
from ghost.playback import ReplayCursor
from ghost.track import ReplayTrack
from ghost.types import GhostFrame, GhostFrameAnim, GhostFrameExtra, GhostFrameSound


def _sound(name: str) -> GhostFrameExtra:
    return GhostFrameExtra(sound=(GhostFrameSound(file_name=name, channel=1, volume=1.0),))


def _track() -> ReplayTrack:
    frames = tuple(
        GhostFrame(origin=Vec3(float(idx), 0.0, 0.0), frametime=1.0, extras=_sound(f"{idx}.wav")) for idx in range(5)
    )
    return ReplayTrack(ghost_name="g", map_name="m", game_mod="cstrike", frames=frames)


def _names(step) -> list[str]:
    return [extra.sound[0].file_name for extra in step.events]


def test_skipped_frames_fire_once_in_order() -> None:
    cursor = ReplayCursor(_track())

    first = cursor.advance(0.5)
    assert first is not None
    assert first.index == 0
    assert _names(first) == ["0.wav"]

    same_frame = cursor.advance(0.75)
    assert same_frame is not None
    assert same_frame.events == ()

    jump = cursor.advance(3.5)
    assert jump is not None
    assert jump.index == 2
    assert _names(jump) == ["1.wav", "2.wav"]
    assert cursor.last_frame == 2


def test_paused_time_returns_none() -> None:
    cursor = ReplayCursor(_track())

    assert cursor.advance(1.5) is not None
    assert cursor.advance(1.5) is None


def test_finishes_at_end_of_stream() -> None:
    cursor = ReplayCursor(_track())

    assert cursor.advance(10.0) is None
    assert cursor.finished

    cursor.reset()
    assert not cursor.finished
    assert cursor.last_frame == -1


def test_rewind_does_not_replay_skipped_frames() -> None:
    cursor = ReplayCursor(_track())
    cursor.advance(3.5)

    back = cursor.advance(1.5)

    assert back is not None
    assert back.index == 0
    assert _names(back) == ["0.wav"]


def test_untimed_track_never_advances() -> None:
    track = ReplayTrack(ghost_name="g", map_name="m", game_mod="cstrike", frames=(GhostFrame(), GhostFrame()))

    assert ReplayCursor(track).advance(0.5) is None

    step = ReplayCursor(track, frametime=0.5).advance(0.75)
    assert step is not None
    assert step.index == 0


def test_only_extras_with_events_are_reported() -> None:
    anim_only = GhostFrameExtra(anim=GhostFrameAnim(sequence=3))
    weapon_anim = GhostFrameExtra(anim=GhostFrameAnim(sequence=3), weapon_sequence=1)
    frames = (
        GhostFrame(frametime=1.0, extras=anim_only),
        GhostFrame(frametime=1.0, extras=weapon_anim),
        GhostFrame(frametime=1.0, extras=_sound("2.wav")),
        GhostFrame(frametime=1.0, extras=anim_only),
    )
    cursor = ReplayCursor(ReplayTrack(ghost_name="g", map_name="m", game_mod="cstrike", frames=frames))

    first = cursor.advance(0.5)
    assert first is not None
    assert first.events == ()

    step = cursor.advance(3.5)
    assert step is not None
    assert step.index == 2
    assert step.events == (weapon_anim, _sound("2.wav"))

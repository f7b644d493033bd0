from __future__ import annotations

from dataclasses import dataclass, field

from .geom import Vec3

# Header byte of a chat segment. 1 is the plain "system" colour the engine
# assumes when a message starts without one.
CHAT_HEADER_SYSTEM = 1


@dataclass(frozen=True, slots=True)
class GhostFrameSound:
    file_name: str
    channel: int
    volume: float
    origin: Vec3 | None = None


@dataclass(frozen=True, slots=True)
class GhostFrameText:
    text: str
    # Normalized to [0, 1]; the demo stores [-8192, 8192] with -8192 meaning centered.
    location: tuple[float, float]
    # Normalized rgba.
    color: tuple[float, float, float, float]
    # Seconds.
    life: float
    # Only one text may occupy a channel at a time.
    channel: int = 0


@dataclass(frozen=True, slots=True)
class GhostFrameChat:
    segments: tuple[tuple[int, str], ...]

    @property
    def text(self) -> str:
        return "".join(text for _, text in self.segments)


@dataclass(frozen=True, slots=True)
class GhostFrameAnim:
    sequence: int | None = None
    frame: float | None = None
    animtime: float | None = None
    gaitsequence: int | None = None
    blending: tuple[int | None, int | None] = (None, None)

    def is_unknown(self) -> bool:
        return (
            self.sequence is None
            and self.frame is None
            and self.animtime is None
            and self.gaitsequence is None
            and self.blending == (None, None)
        )


@dataclass(frozen=True, slots=True)
class GhostFrameExtra:
    sound: tuple[GhostFrameSound, ...] = ()
    text: tuple[GhostFrameText, ...] = ()
    say_text: tuple[GhostFrameChat, ...] = ()
    weapon_change: str | None = None
    anim: GhostFrameAnim | None = None
    # One-shot viewmodel sequence, valid only for the frame that carries it.
    weapon_sequence: int | None = None

    def has_events(self) -> bool:
        """True when the extra carries something to fire once, not just sticky animation state."""
        return bool(
            self.sound
            or self.text
            or self.say_text
            or self.weapon_change is not None
            or self.weapon_sequence is not None
        )


@dataclass(frozen=True, slots=True)
class GhostFrame:
    origin: Vec3 = field(default_factory=Vec3)
    viewangles: Vec3 = field(default_factory=Vec3)
    # Seconds since the previous frame.
    frametime: float | None = None
    buttons: int | None = None
    fov: float | None = None
    extras: GhostFrameExtra | None = None

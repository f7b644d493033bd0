from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable
import warnings

from ..errors import GhostParseError, GhostResourceWarning
from ..geom import Vec3
from ..track import ReplayTrack
from ..types import GhostFrame, GhostFrameAnim, GhostFrameChat, GhostFrameExtra, GhostFrameSound, GhostFrameText
from .chat import decode_chat_chunks
from .delta import apply_anim_delta
from .records import (
    TEXT_POSITION_CENTER,
    TEXT_POSITION_SCALE,
    ClientDataTick,
    DeltaPacketEntitiesMessage,
    DemoRecording,
    NetMessageTick,
    RawTick,
    SoundMessage,
    SoundTick,
    TextMessage,
    UpdateUserInfoMessage,
    UserMessage,
    WeaponAnimTick,
)
from .tables import BootstrapTables, PlayerNameTable, build_bootstrap_tables, parse_user_info

SAY_TEXT_MESSAGE = "SayText"
CUR_WEAPON_MESSAGE = "CurWeapon"


@dataclass(slots=True)
class _ReconstructState:
    # Sticky across ticks.
    origin: Vec3 = field(default_factory=Vec3)
    viewangles: Vec3 = field(default_factory=Vec3)
    fov: float | None = None
    anim: GhostFrameAnim = field(default_factory=GhostFrameAnim)
    player_names: PlayerNameTable = field(default_factory=dict)
    # Cleared after every emitted frame.
    pending_sounds: list[GhostFrameSound] = field(default_factory=list)
    pending_weapon_sequence: int | None = None


@dataclass(slots=True)
class _TickEvents:
    text: list[GhostFrameText] = field(default_factory=list)
    say_text: list[GhostFrameChat] = field(default_factory=list)
    weapon_change: str | None = None


def _normalize_text_position(value: int) -> float:
    if int(value) == TEXT_POSITION_CENTER:
        return 0.5
    return float(value) / TEXT_POSITION_SCALE


def text_from_message(message: TextMessage) -> GhostFrameText:
    r, g, b, a = (float(c) / 255.0 for c in message.text_color)
    life_ms = int(message.hold_time) + int(message.fade_in_time) + int(message.fade_out_time)
    return GhostFrameText(
        text=message.message.rstrip("\x00"),
        location=(_normalize_text_position(message.x), _normalize_text_position(message.y)),
        color=(r, g, b, a),
        life=float(life_ms) / 1000.0,
        channel=int(message.channel),
    )


def sound_from_message(message: SoundMessage, tables: BootstrapTables) -> GhostFrameSound | None:
    """Resolve a sound message, or return None when its resource is unknown.

    Raises `GhostParseError` when the message carries no resource index at all.
    """

    index = message.sound_index_short
    if index is None:
        index = message.sound_index_long
    if index is None:
        raise GhostParseError("sound message has no resource index")

    name = tables.resources.get(int(index))
    if name is None:
        warnings.warn(
            f"sound resource index {int(index)} is not in the resource list; dropping sound",
            category=GhostResourceWarning,
            stacklevel=2,
        )
        return None

    volume = 1.0 if message.volume is None else float(message.volume) / 255.0

    origin: Vec3 | None = None
    if message.origin_x is not None and message.origin_y is not None and message.origin_z is not None:
        origin = Vec3(float(message.origin_x), float(message.origin_y), float(message.origin_z))

    return GhostFrameSound(
        file_name=name.rstrip("\x00"),
        channel=int(message.channel),
        volume=volume,
        origin=origin,
    )


def _say_text(message: UserMessage, state: _ReconstructState) -> GhostFrameChat:
    data = bytes(message.data)
    if not data:
        raise GhostParseError("chat message has no sender")
    sender = int(data[0])
    name = state.player_names.get(sender)
    if name is None:
        raise GhostParseError(f"chat message from unknown player index {sender}")
    return GhostFrameChat(segments=tuple(decode_chat_chunks(data[1:], name)))


def _cur_weapon(message: UserMessage, tables: BootstrapTables) -> str | None:
    data = bytes(message.data)
    # State byte 0 means the weapon is not active; nothing else is read.
    if not data or data[0] == 0:
        return None
    if len(data) < 2:
        warnings.warn(
            "active weapon state message has no weapon id; ignoring weapon change",
            category=GhostResourceWarning,
            stacklevel=2,
        )
        return None
    weapon_id = int(data[1])
    name = tables.weapons.get(weapon_id)
    if name is None:
        warnings.warn(
            f"weapon id {weapon_id} is not in the weapon list; ignoring weapon change",
            category=GhostResourceWarning,
            stacklevel=2,
        )
    return name


def _process_net_messages(tick: NetMessageTick, state: _ReconstructState, tables: BootstrapTables) -> _TickEvents:
    events = _TickEvents()
    for message in tick.messages:
        if isinstance(message, UserMessage):
            message_name = message.message_name
            if message_name == SAY_TEXT_MESSAGE:
                events.say_text.append(_say_text(message, state))
            elif message_name == CUR_WEAPON_MESSAGE:
                weapon = _cur_weapon(message, tables)
                if weapon is not None:
                    events.weapon_change = weapon
        elif isinstance(message, TextMessage):
            events.text.append(text_from_message(message))
        elif isinstance(message, SoundMessage):
            sound = sound_from_message(message, tables)
            if sound is not None:
                state.pending_sounds.append(sound)
        elif isinstance(message, UpdateUserInfoMessage):
            name = parse_user_info(message.client_user_info).get("name")
            if name is not None:
                state.player_names[int(message.client_index)] = name
        elif isinstance(message, DeltaPacketEntitiesMessage):
            # The first tracked entity is the recording player.
            if message.entity_states and message.entity_states[0].delta is not None:
                state.anim = apply_anim_delta(state.anim, message.entity_states[0].delta)
    return events


def _emit_frame(tick: NetMessageTick, state: _ReconstructState, events: _TickEvents) -> GhostFrame:
    extras = GhostFrameExtra(
        sound=tuple(state.pending_sounds),
        text=tuple(events.text),
        say_text=tuple(events.say_text),
        weapon_change=events.weapon_change,
        anim=state.anim,
        weapon_sequence=state.pending_weapon_sequence,
    )
    state.pending_sounds.clear()
    state.pending_weapon_sequence = None
    return GhostFrame(
        origin=state.origin,
        viewangles=state.viewangles,
        # Cumulative for now; `cumulative_to_frametime` turns it into a delta.
        frametime=float(tick.time),
        fov=state.fov,
        extras=extras,
    )


def cumulative_to_frametime(frames: Iterable[GhostFrame]) -> list[GhostFrame]:
    out: list[GhostFrame] = []
    acc = 0.0
    for frame in frames:
        cumulative = float(frame.frametime or 0.0)
        out.append(replace(frame, frametime=cumulative - acc))
        acc = cumulative
    return out


def reconstruct_frames(gameplay: Iterable[RawTick], tables: BootstrapTables) -> list[GhostFrame]:
    """Turn gameplay ticks into one frame per network message tick.

    Pose and animation are sticky between ticks; an animation field is only
    forgotten when a client data tick arrives, since client data precedes the
    network message that re-asserts it. Sounds and the weapon animation are
    consumed by the next emitted frame.
    """

    state = _ReconstructState()
    frames: list[GhostFrame] = []
    for tick in gameplay:
        if isinstance(tick, WeaponAnimTick):
            state.pending_weapon_sequence = int(tick.anim)
        elif isinstance(tick, ClientDataTick):
            state.viewangles = Vec3.from_seq(tick.viewangles)
            state.fov = None if tick.fov is None else float(tick.fov)
            state.anim = GhostFrameAnim()
        elif isinstance(tick, SoundTick):
            state.pending_sounds.append(
                GhostFrameSound(
                    file_name=tick.sample.rstrip("\x00"),
                    channel=int(tick.channel),
                    volume=float(tick.volume),
                )
            )
        elif isinstance(tick, NetMessageTick):
            state.origin = Vec3.from_seq(tick.sim_org) + Vec3.from_seq(tick.view_height)
            events = _process_net_messages(tick, state, tables)
            frames.append(_emit_frame(tick, state, events))
    return cumulative_to_frametime(frames)


def demo_ghost_parse(recording: DemoRecording, *, ghost_name: str | None = None) -> ReplayTrack:
    tables = build_bootstrap_tables(recording.baseline)
    frames = reconstruct_frames(recording.gameplay, tables)
    return ReplayTrack(
        ghost_name=ghost_name if ghost_name is not None else recording.name,
        map_name=recording.map_name.rstrip("\x00"),
        game_mod=recording.game_directory.rstrip("\x00"),
        frames=tuple(frames),
    )

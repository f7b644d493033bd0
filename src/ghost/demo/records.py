from __future__ import annotations

from pathlib import Path
from typing import TypeAlias

import msgspec

from ..errors import GhostParseError

# Temp entity text positions are stored in [-8192, 8192]; this raw value means "centered".
TEXT_POSITION_SCALE = 8192.0
TEXT_POSITION_CENTER = -8192

Vec3Raw: TypeAlias = tuple[float, float, float]


class Resource(msgspec.Struct, forbid_unknown_fields=True):
    index: int = 0
    name: str = ""
    type: int = 0


class UserMessage(msgspec.Struct, tag_field="kind", tag="user_msg", forbid_unknown_fields=True):
    name: str = ""
    data: bytes = b""

    @property
    def message_name(self) -> str:
        return self.name.rstrip("\x00")


class ResourceListMessage(msgspec.Struct, tag_field="kind", tag="resource_list", forbid_unknown_fields=True):
    resources: list[Resource] = msgspec.field(default_factory=list)


class TextMessage(msgspec.Struct, tag_field="kind", tag="text_message", forbid_unknown_fields=True):
    channel: int = 0
    x: int = TEXT_POSITION_CENTER
    y: int = TEXT_POSITION_CENTER
    effect: int = 0
    text_color: tuple[int, int, int, int] = (255, 255, 255, 255)
    effect_color: tuple[int, int, int, int] = (255, 255, 255, 255)
    # All times are in milliseconds.
    fade_in_time: int = 0
    fade_out_time: int = 0
    hold_time: int = 0
    effect_time: int = 0
    message: str = ""


class SoundMessage(msgspec.Struct, tag_field="kind", tag="sound", forbid_unknown_fields=True):
    channel: int = 0
    sound_index_short: int | None = None
    sound_index_long: int | None = None
    # Raw [0, 255]; absent means full volume.
    volume: int | None = None
    attenuation: float | None = None
    origin_x: float | None = None
    origin_y: float | None = None
    origin_z: float | None = None
    pitch: int | None = None


class UpdateUserInfoMessage(msgspec.Struct, tag_field="kind", tag="update_user_info", forbid_unknown_fields=True):
    client_index: int = 0
    client_user_id: int = 0
    client_user_info: bytes = b""


class EntityState(msgspec.Struct, forbid_unknown_fields=True):
    entity_index: int = 0
    # Raw little-endian field bytes keyed by delta field name (NUL-terminated in demos).
    delta: dict[str, bytes] | None = None


class DeltaPacketEntitiesMessage(
    msgspec.Struct, tag_field="kind", tag="delta_packet_entities", forbid_unknown_fields=True
):
    entity_states: list[EntityState] = msgspec.field(default_factory=list)


NetMessage: TypeAlias = (
    UserMessage
    | ResourceListMessage
    | TextMessage
    | SoundMessage
    | UpdateUserInfoMessage
    | DeltaPacketEntitiesMessage
)


class ClientDataTick(msgspec.Struct, tag_field="kind", tag="client_data", forbid_unknown_fields=True):
    time: float = 0.0
    origin: Vec3Raw = (0.0, 0.0, 0.0)
    viewangles: Vec3Raw = (0.0, 0.0, 0.0)
    fov: float | None = None


class WeaponAnimTick(msgspec.Struct, tag_field="kind", tag="weapon_anim", forbid_unknown_fields=True):
    time: float = 0.0
    anim: int = 0
    body: int = 0


class SoundTick(msgspec.Struct, tag_field="kind", tag="sound", forbid_unknown_fields=True):
    time: float = 0.0
    channel: int = 0
    sample: str = ""
    volume: float = 1.0


class NetMessageTick(msgspec.Struct, tag_field="kind", tag="net_msg", forbid_unknown_fields=True):
    # Cumulative demo time in seconds.
    time: float = 0.0
    sim_org: Vec3Raw = (0.0, 0.0, 0.0)
    view_height: Vec3Raw = (0.0, 0.0, 0.0)
    messages: list[NetMessage] = msgspec.field(default_factory=list)


RawTick: TypeAlias = ClientDataTick | WeaponAnimTick | SoundTick | NetMessageTick


class DemoRecording(msgspec.Struct, forbid_unknown_fields=True):
    """A demo already split into per-tick records by an external decoder.

    `baseline` is the bootstrap stream (resource and weapon lists), `gameplay`
    every following tick in recording order.
    """

    name: str = ""
    map_name: str = ""
    game_directory: str = ""
    baseline: list[RawTick] = msgspec.field(default_factory=list)
    gameplay: list[RawTick] = msgspec.field(default_factory=list)


_JSON_DECODER = msgspec.json.Decoder(type=DemoRecording)
_MSGPACK_DECODER = msgspec.msgpack.Decoder(type=DemoRecording)


def encode_recording(recording: DemoRecording, *, fmt: str = "json") -> bytes:
    if fmt == "json":
        return msgspec.json.encode(recording)
    if fmt == "msgpack":
        return msgspec.msgpack.encode(recording)
    raise ValueError(f"unknown recording format: {fmt!r}")


def decode_recording(blob: bytes, *, fmt: str = "json") -> DemoRecording:
    if fmt == "json":
        decoder = _JSON_DECODER
    elif fmt == "msgpack":
        decoder = _MSGPACK_DECODER
    else:
        raise ValueError(f"unknown recording format: {fmt!r}")
    try:
        return decoder.decode(blob)
    except msgspec.DecodeError as exc:
        raise GhostParseError(f"invalid demo recording: {exc}") from exc


def load_recording(path: Path) -> DemoRecording:
    path = Path(path)
    fmt = "msgpack" if path.suffix.lower() == ".msgpack" else "json"
    return decode_recording(path.read_bytes(), fmt=fmt)

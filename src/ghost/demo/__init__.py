from __future__ import annotations

from .chat import decode_chat_chunks
from .reconstruct import cumulative_to_frametime, demo_ghost_parse, reconstruct_frames
from .records import (
    ClientDataTick,
    DeltaPacketEntitiesMessage,
    DemoRecording,
    EntityState,
    NetMessage,
    NetMessageTick,
    RawTick,
    Resource,
    ResourceListMessage,
    SoundMessage,
    SoundTick,
    TextMessage,
    UpdateUserInfoMessage,
    UserMessage,
    WeaponAnimTick,
    decode_recording,
    encode_recording,
    load_recording,
)
from .tables import BootstrapTables, build_bootstrap_tables, parse_user_info, parse_weapon_list

__all__ = [
    "BootstrapTables",
    "ClientDataTick",
    "DeltaPacketEntitiesMessage",
    "DemoRecording",
    "EntityState",
    "NetMessage",
    "NetMessageTick",
    "RawTick",
    "Resource",
    "ResourceListMessage",
    "SoundMessage",
    "SoundTick",
    "TextMessage",
    "UpdateUserInfoMessage",
    "UserMessage",
    "WeaponAnimTick",
    "build_bootstrap_tables",
    "cumulative_to_frametime",
    "decode_chat_chunks",
    "decode_recording",
    "demo_ghost_parse",
    "encode_recording",
    "load_recording",
    "parse_user_info",
    "parse_weapon_list",
    "reconstruct_frames",
]

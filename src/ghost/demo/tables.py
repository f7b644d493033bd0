from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, TypeAlias

from ..errors import GhostParseError
from .records import NetMessageTick, RawTick, ResourceListMessage, UserMessage

WEAPON_LIST_MESSAGE = "WeaponList"
WEAPON_NAME_PREFIX = "weapon_"

ResourceTable: TypeAlias = dict[int, str]
WeaponTable: TypeAlias = dict[int, str]
PlayerNameTable: TypeAlias = dict[int, str]


@dataclass(slots=True)
class BootstrapTables:
    resources: ResourceTable = field(default_factory=dict)
    weapons: WeaponTable = field(default_factory=dict)


def parse_weapon_list(data: bytes) -> tuple[int, str]:
    """Decode a `WeaponList` user message into `(weapon_id, short_name)`.

    Payload is a NUL-terminated `weapon_*` name with the weapon id in the last byte.
    """

    data = bytes(data)
    end = data.find(b"\x00")
    if end < 0:
        raise GhostParseError("weapon list entry has no NUL terminator")
    name = data[:end].decode("utf-8", errors="ignore")
    if not name.startswith(WEAPON_NAME_PREFIX):
        raise GhostParseError(f"weapon list entry {name!r} lacks the {WEAPON_NAME_PREFIX!r} prefix")
    return int(data[-1]), name[len(WEAPON_NAME_PREFIX) :]


def build_bootstrap_tables(baseline: Iterable[RawTick]) -> BootstrapTables:
    tables = BootstrapTables()
    for tick in baseline:
        if not isinstance(tick, NetMessageTick):
            continue
        for message in tick.messages:
            if isinstance(message, ResourceListMessage):
                for resource in message.resources:
                    # Keep the first declaration of an index.
                    tables.resources.setdefault(int(resource.index), resource.name)
            elif isinstance(message, UserMessage) and message.message_name == WEAPON_LIST_MESSAGE:
                weapon_id, name = parse_weapon_list(message.data)
                tables.weapons[weapon_id] = name
    return tables


def parse_user_info(info: bytes | str) -> dict[str, str]:
    """Parse an engine info string such as `\\name\\Bob\\model\\leet`."""
    if isinstance(info, (bytes, bytearray)):
        text = bytes(info).split(b"\x00", 1)[0].decode("utf-8", errors="ignore")
    else:
        text = info.split("\x00", 1)[0]
    parts = text.split("\\")
    if parts and parts[0] == "":
        parts = parts[1:]
    out: dict[str, str] = {}
    for idx in range(0, len(parts) - 1, 2):
        out[parts[idx]] = parts[idx + 1]
    return out

from __future__ import annotations

from typing import Final

from ..types import CHAT_HEADER_SYSTEM

# Bytes below this value start a new coloured segment.
CHAT_HEADER_LIMIT: Final[int] = 5

# "#Cstrike_Chat_All" is a prefix of "#Cstrike_Chat_AllSpec", so it goes last.
CHAT_MARKERS: Final[tuple[tuple[str, str], ...]] = (
    ("#Cstrike_Chat_AllSpec", "*SPEC* {name}: "),
    ("#Cstrike_Chat_Spec", "(Spectator) {name}: "),
    ("#Cstrike_Chat_All", "{name}: "),
)


def _is_header(value: int) -> bool:
    return 0 <= value < CHAT_HEADER_LIMIT


def split_chat_segments(data: bytes) -> list[tuple[int, bytes]]:
    segments: list[tuple[int, bytes]] = []
    header = CHAT_HEADER_SYSTEM
    start = 0
    for idx, value in enumerate(data):
        if not _is_header(value):
            continue
        segments.append((header, data[start:idx]))
        header = value
        start = idx + 1
    segments.append((header, data[start:]))
    return [(header, body) for header, body in segments if body]


def _localize(text: str, name: str) -> str:
    for marker, prefix in CHAT_MARKERS:
        if marker in text:
            return prefix.format(name=name) + text.replace(marker, "", 1)
    return text


def decode_chat_chunks(data: bytes, name: str) -> list[tuple[int, str]]:
    """Split a `SayText` body into `(header, text)` segments.

    `data` excludes the sender byte. Localization markers are replaced by the
    sender `name` in the engine's format.
    """

    out: list[tuple[int, str]] = []
    for header, body in split_chat_segments(bytes(data)):
        text = body.decode("utf-8", errors="ignore")
        text = _localize(text, name)
        text = text.replace("\r", "").replace("\n", "")
        out.append((header, text))
    return out

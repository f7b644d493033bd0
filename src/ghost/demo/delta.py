from __future__ import annotations

from dataclasses import replace
from typing import Final, Mapping

from construct import Byte, Construct, ConstructError, Float32l, Int32sl

from ..errors import GhostParseError
from ..types import GhostFrameAnim

# Delta field name -> (layout, GhostFrameAnim attribute, blending slot).
_DELTA_FIELDS: Final[tuple[tuple[str, Construct, str, int | None], ...]] = (
    ("sequence", Int32sl, "sequence", None),
    ("frame", Float32l, "frame", None),
    ("animtime", Float32l, "animtime", None),
    ("gaitsequence", Int32sl, "gaitsequence", None),
    ("blending[0]", Byte, "blending", 0),
    ("blending[1]", Byte, "blending", 1),
)


def _lookup(delta: Mapping[str, bytes], key: str) -> bytes | None:
    # Demo field names keep their C string terminator; accept both spellings.
    value = delta.get(key + "\x00")
    if value is None:
        value = delta.get(key)
    return value


def decode_delta_field(layout: Construct, raw: bytes, *, key: str) -> int | float:
    try:
        return layout.parse(bytes(raw))
    except ConstructError as exc:
        raise GhostParseError(f"delta field {key!r} has {len(raw)} bytes: {exc}") from exc


def apply_anim_delta(anim: GhostFrameAnim, delta: Mapping[str, bytes]) -> GhostFrameAnim:
    """Overwrite the animation fields present in `delta`; absent fields keep their value."""
    changes: dict[str, object] = {}
    blending = list(anim.blending)
    for key, layout, attr, slot in _DELTA_FIELDS:
        raw = _lookup(delta, key)
        if raw is None:
            continue
        value = decode_delta_field(layout, raw, key=key)
        if slot is None:
            changes[attr] = value
        else:
            blending[slot] = int(value)
    new_blending = (blending[0], blending[1])
    if new_blending != anim.blending:
        changes["blending"] = new_blending
    if not changes:
        return anim
    return replace(anim, **changes)

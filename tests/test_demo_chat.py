from __future__ import annotations

from ghost.demo.chat import decode_chat_chunks, split_chat_segments


def test_chat_leading_header_byte() -> None:
    assert decode_chat_chunks(b"\x01hi", "Bob") == [(1, "hi")]


def test_chat_without_header_defaults_to_system() -> None:
    assert decode_chat_chunks(b"hi", "Bob") == [(1, "hi")]


def test_chat_all_marker_becomes_sender_prefix() -> None:
    assert decode_chat_chunks(b"\x02#Cstrike_Chat_All\x00", "Bob") == [(2, "Bob: ")]


def test_chat_segments_keep_order_and_drop_empty() -> None:
    data = b"\x02#Cstrike_Chat_All\x01hello\nthere\x03\x04"

    assert decode_chat_chunks(data, "Bob") == [(2, "Bob: "), (1, "hellothere")]


def test_chat_spectator_markers() -> None:
    assert decode_chat_chunks(b"\x03#Cstrike_Chat_AllSpec", "Bob") == [(3, "*SPEC* Bob: ")]
    assert decode_chat_chunks(b"\x03#Cstrike_Chat_Spec", "Bob") == [(3, "(Spectator) Bob: ")]


def test_chat_drops_invalid_utf8() -> None:
    assert decode_chat_chunks(b"\x01ok\xff!", "Bob") == [(1, "ok!")]


def test_split_chat_segments_leading_text_then_header() -> None:
    assert split_chat_segments(b"abc\x02def") == [(1, b"abc"), (2, b"def")]
    assert split_chat_segments(b"") == []


def test_chat_unlisted_marker_falls_back_to_all_prefix() -> None:
    assert decode_chat_chunks(b"\x02#Cstrike_Chat_AllDead", "Bob") == [(2, "Bob: Dead")]

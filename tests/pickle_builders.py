"""Helpers for assembling pickle byte streams in tests."""

from __future__ import annotations

import struct
from typing import Iterable, Sequence, Tuple

NULL = b"\x00"
TRUE = b"\x01"
FALSE = b"\x02"


def p_u8(value: int, *, tag: int = 0x03) -> bytes:
    return bytes([tag, value])


def p_u16(value: int, *, tag: int = 0x04) -> bytes:
    return bytes([tag]) + struct.pack("<H", value)


def p_u32(value: int, *, tag: int = 0x05) -> bytes:
    return bytes([tag]) + struct.pack("<I", value)


def p_u64(value: int) -> bytes:
    return b"\x06" + struct.pack("<Q", value)


def p_f64(value: float) -> bytes:
    return b"\x07" + struct.pack("<d", value)


def p_str(text: str) -> bytes:
    raw = text.encode("utf-8")
    return b"\x08" + bytes([len(raw)]) + raw


def p_long_str(text: str) -> bytes:
    raw = text.encode("utf-8")
    return b"\x09" + struct.pack("<H", len(raw)) + raw


def p_table(
    array: Sequence[bytes] = (),
    hash_part: Iterable[Tuple[bytes, bytes]] = (),
) -> bytes:
    out = bytearray(b"\x0b")
    out += struct.pack("<I", len(array))
    for item in array:
        out += item
    for key, value in hash_part:
        out += key + value
    out += NULL
    return bytes(out)


def p_single(key: bytes, value: bytes) -> bytes:
    return b"\x0d" + key + value

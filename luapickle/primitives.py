"""Fixed-width and length-prefixed scalar readers.

Every multi-byte field in the pickle format is little-endian.
"""

from __future__ import annotations

import math
import struct

from .cursor import ByteCursor
from .exceptions import NonFiniteNumberError, PickleEncodingError

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_F64 = struct.Struct("<d")


def read_u8(cursor: ByteCursor) -> int:
    return cursor.read_byte()


def read_u16(cursor: ByteCursor) -> int:
    return _U16.unpack(cursor.read_exact(2))[0]


def read_u32(cursor: ByteCursor) -> int:
    return _U32.unpack(cursor.read_exact(4))[0]


def read_u64(cursor: ByteCursor) -> int:
    return _U64.unpack(cursor.read_exact(8))[0]


def read_f64(cursor: ByteCursor) -> float:
    """Return an IEEE-754 double, rejecting NaN and the infinities."""

    start = cursor.offset
    value = _F64.unpack(cursor.read_exact(8))[0]
    if not math.isfinite(value):
        raise NonFiniteNumberError(f"non-finite float {value!r}", offset=start)
    return value


def _read_text(cursor: ByteCursor, length: int) -> str:
    start = cursor.offset
    payload = cursor.read_exact(length)
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PickleEncodingError(
            f"string of {length} byte(s) is not valid UTF-8: {exc.reason}",
            offset=start + exc.start,
        ) from exc


def read_byte_string(cursor: ByteCursor) -> str:
    return _read_text(cursor, read_u8(cursor))


def read_halfword_string(cursor: ByteCursor) -> str:
    return _read_text(cursor, read_u16(cursor))


__all__ = [
    "read_u8",
    "read_u16",
    "read_u32",
    "read_u64",
    "read_f64",
    "read_byte_string",
    "read_halfword_string",
]

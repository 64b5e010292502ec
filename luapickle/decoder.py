"""Recursive decoder for the Lua pickle format.

Every encoded value starts with a tag byte that fully determines the payload
that follows, so decoding is a single top-down pass with no backtracking.
Tables carry an *array part* (a ``u32`` count followed by that many values,
stored under the keys ``"1"`` .. ``"N"``) and a *hash part* (key/value pairs
terminated by a null key).  Hash entries overwrite array entries that share
the same canonical key, mirroring how a Lua table resolves the overlap.

The decoded tree is made of plain Python objects: ``None``, ``bool``, ``int``,
``float``, ``str`` and insertion-ordered ``dict`` instances with string keys.
"""

from __future__ import annotations

import json
import logging
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Tuple

from .cursor import ByteCursor, Source, open_cursor
from .exceptions import KeyConversionError, NestingDepthError, UnknownTagError
from .primitives import (
    read_byte_string,
    read_f64,
    read_halfword_string,
    read_u8,
    read_u16,
    read_u32,
    read_u64,
)

LOG = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

Value = Any
Table = Dict[str, Any]


class Tag(IntEnum):
    NULL = 0x00
    TRUE = 0x01
    FALSE = 0x02
    U8 = 0x03
    U16 = 0x04
    U32 = 0x05
    U64 = 0x06
    F64 = 0x07
    BYTE_STRING = 0x08
    HALFWORD_STRING = 0x09
    TABLE = 0x0B
    SINGLE_ENTRY_TABLE = 0x0D
    # Same payload as U8/U16/U32.  The dumper probably means a different
    # numeric subtype here; no sample so far tells them apart.
    ALT_U8 = 0x0E
    ALT_U16 = 0x0F
    ALT_U32 = 0x10


_SCALAR_READERS: Dict[int, Callable[[ByteCursor], Value]] = {
    Tag.U8: read_u8,
    Tag.U16: read_u16,
    Tag.U32: read_u32,
    Tag.U64: read_u64,
    Tag.F64: read_f64,
    Tag.BYTE_STRING: read_byte_string,
    Tag.HALFWORD_STRING: read_halfword_string,
    Tag.ALT_U8: read_u8,
    Tag.ALT_U16: read_u16,
    Tag.ALT_U32: read_u32,
}

_CONSTANTS: Dict[int, Value] = {
    Tag.NULL: None,
    Tag.TRUE: True,
    Tag.FALSE: False,
}


def render_key(value: Value, *, offset: Optional[int] = None) -> str:
    """Return the generic textual form of ``value`` (compact JSON)."""

    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise KeyConversionError(
            f"cannot render {type(value).__name__} key as text: {exc}", offset=offset
        ) from exc


def canonical_key(value: Value, *, offset: Optional[int] = None) -> str:
    """Return the string a hash-part key is stored under.

    Integers use their decimal text so they line up with array-part indices,
    strings are used verbatim and anything else falls back to
    :func:`render_key`.
    """

    if isinstance(value, bool):
        return render_key(value, offset=offset)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise KeyConversionError(
                f"numeric key {value!r} is not an integer", offset=offset
            )
        return str(int(value))
    if isinstance(value, str):
        return value
    return render_key(value, offset=offset)


class PickleDecoder:
    """Decode values from a :class:`ByteCursor`.

    The only state carried between recursive calls is the cursor position and
    the current table nesting depth.
    """

    __slots__ = ("cursor", "max_depth", "_depth")

    def __init__(self, cursor: ByteCursor, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.cursor = cursor
        self.max_depth = max_depth
        self._depth = 0

    def read_value(self) -> Tuple[int, Value]:
        """Read one tagged value and return ``(tag, value)``."""

        offset = self.cursor.offset
        tag = self.cursor.read_byte()
        if tag in _CONSTANTS:
            return tag, _CONSTANTS[tag]
        reader = _SCALAR_READERS.get(tag)
        if reader is not None:
            return tag, reader(self.cursor)
        if tag == Tag.TABLE:
            return tag, self._nested(self._read_table, offset)
        if tag == Tag.SINGLE_ENTRY_TABLE:
            return tag, self._nested(self._read_single_entry, offset)
        raise UnknownTagError(tag, offset)

    def _nested(self, read: Callable[[], Table], offset: int) -> Table:
        if self._depth >= self.max_depth:
            raise NestingDepthError(
                f"tables nested deeper than {self.max_depth} levels", offset=offset
            )
        self._depth += 1
        try:
            return read()
        finally:
            self._depth -= 1

    def _read_table(self) -> Table:
        table: Table = {}
        count = read_u32(self.cursor)
        for index in range(1, count + 1):
            _, table[str(index)] = self.read_value()

        while True:
            key_offset = self.cursor.offset
            tag, key = self.read_value()
            if tag == Tag.NULL:
                break
            _, content = self.read_value()
            table[canonical_key(key, offset=key_offset)] = content
        return table

    def _read_single_entry(self) -> Table:
        key_offset = self.cursor.offset
        _, key = self.read_value()
        _, content = self.read_value()
        return {render_key(key, offset=key_offset): content}


def read_value(cursor: ByteCursor, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Tuple[int, Value]:
    """Decode one value at the cursor position and return ``(tag, value)``.

    A ``max_depth`` above what the interpreter stack can hold still ends in
    :class:`~luapickle.exceptions.NestingDepthError`.
    """

    try:
        return PickleDecoder(cursor, max_depth=max_depth).read_value()
    except RecursionError:
        raise NestingDepthError(
            "tables nested deeper than the interpreter stack allows", offset=cursor.offset
        ) from None


def decode_document(
    source: Source,
    header_skip_bytes: int = 0,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Decode the single root value stored in ``source``.

    ``header_skip_bytes`` leading bytes are skipped before decoding starts.
    Any :class:`~luapickle.exceptions.PickleError` raised along the way aborts
    the whole decode; nothing partial is returned.
    """

    with open_cursor(source) as cursor:
        LOG.debug("skipping %d header byte(s) of %d", header_skip_bytes, cursor.length)
        cursor.skip_to(header_skip_bytes)
        tag, document = read_value(cursor, max_depth=max_depth)
        trailing = cursor.length - cursor.offset
        LOG.debug("decoded root value with tag 0x%02x", tag)
        if trailing:
            LOG.debug("ignoring %d trailing byte(s) after the root value", trailing)
    return document


def decode_bytes(
    data: bytes,
    header_skip_bytes: int = 0,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Decode an in-memory pickle payload."""

    return decode_document(bytes(data), header_skip_bytes, max_depth=max_depth)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "PickleDecoder",
    "Tag",
    "Table",
    "Value",
    "canonical_key",
    "decode_bytes",
    "decode_document",
    "read_value",
    "render_key",
]

"""Sequential reader over a seekable byte source."""

from __future__ import annotations

import io
import os
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Union

from .exceptions import InvalidSeekError, TruncatedStreamError

Source = Union[str, "os.PathLike[str]", bytes, bytearray, memoryview, BinaryIO]

__all__ = ["ByteCursor", "Source", "open_cursor"]


class ByteCursor:
    """Incremental reader that never exposes partial reads."""

    __slots__ = ("_handle", "_length")

    def __init__(self, handle: BinaryIO) -> None:
        self._handle = handle
        start = handle.tell()
        self._length = handle.seek(0, io.SEEK_END)
        handle.seek(start, io.SEEK_SET)

    @property
    def offset(self) -> int:
        return self._handle.tell()

    @property
    def length(self) -> int:
        return self._length

    def skip_to(self, offset: int) -> None:
        """Move to the absolute ``offset`` measured from the start of the source."""

        if offset < 0 or offset > self._length:
            raise InvalidSeekError(
                f"cannot seek to {offset}: source holds {self._length} byte(s)"
            )
        self._handle.seek(offset, io.SEEK_SET)

    def read_exact(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must be non-negative")
        start = self._handle.tell()
        chunks = []
        remaining = size
        while remaining:
            chunk = self._handle.read(remaining)
            if not chunk:
                raise TruncatedStreamError(start, size, size - remaining)
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def read_byte(self) -> int:
        return self.read_exact(1)[0]


@contextmanager
def open_cursor(source: Source) -> Iterator[ByteCursor]:
    """Yield a :class:`ByteCursor` over ``source``.

    Paths are opened here and closed on every exit path.  Bytes-like objects
    are served from memory.  An already open binary file object is used as-is
    and left open for the caller, who owns it.
    """

    if isinstance(source, (bytes, bytearray, memoryview)):
        with io.BytesIO(bytes(source)) as handle:
            yield ByteCursor(handle)
    elif isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as handle:
            yield ByteCursor(handle)
    else:
        yield ByteCursor(source)

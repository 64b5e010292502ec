import io
from pathlib import Path

import pytest

from luapickle.cursor import ByteCursor, open_cursor
from luapickle.exceptions import InvalidSeekError, PickleIOError, TruncatedStreamError


class _Trickle(io.RawIOBase):
    """Raw stream that hands out at most one byte per read call."""

    def __init__(self, data: bytes) -> None:
        self._inner = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._inner.seek(offset, whence)

    def tell(self) -> int:
        return self._inner.tell()

    def readinto(self, buffer) -> int:
        chunk = self._inner.read(1)
        buffer[: len(chunk)] = chunk
        return len(chunk)


def test_read_exact_returns_requested_bytes() -> None:
    with open_cursor(b"abcdef") as cursor:
        assert cursor.read_exact(2) == b"ab"
        assert cursor.read_byte() == ord("c")
        assert cursor.offset == 3
        assert cursor.read_exact(0) == b""
        assert cursor.length == 6


def test_read_exact_refuses_partial_reads() -> None:
    with open_cursor(b"\x01\x02") as cursor:
        cursor.read_exact(1)
        with pytest.raises(TruncatedStreamError) as excinfo:
            cursor.read_exact(4)
    err = excinfo.value
    assert isinstance(err, PickleIOError)
    assert err.offset == 1
    assert err.requested == 4
    assert err.available == 1


def test_read_exact_retries_short_raw_reads() -> None:
    cursor = ByteCursor(_Trickle(b"\x10\x20\x30\x40"))
    assert cursor.read_exact(4) == b"\x10\x20\x30\x40"


def test_skip_to_positions_absolutely() -> None:
    with open_cursor(b"HEADpayload") as cursor:
        cursor.read_exact(2)
        cursor.skip_to(4)
        assert cursor.read_exact(7) == b"payload"
        cursor.skip_to(11)
        assert cursor.offset == 11


@pytest.mark.parametrize("offset", [-1, 12])
def test_skip_to_rejects_offsets_outside_source(offset: int) -> None:
    with open_cursor(b"HEADpayload") as cursor:
        with pytest.raises(InvalidSeekError):
            cursor.skip_to(offset)


def test_path_sources_are_closed_on_error(tmp_path: Path, monkeypatch) -> None:
    target = tmp_path / "blob.bin"
    target.write_bytes(b"\x00")
    opened = []
    real_open = open

    def _tracking_open(*args, **kwargs):
        handle = real_open(*args, **kwargs)
        opened.append(handle)
        return handle

    monkeypatch.setattr("luapickle.cursor.open", _tracking_open, raising=False)
    with pytest.raises(TruncatedStreamError):
        with open_cursor(target) as cursor:
            cursor.read_exact(2)
    assert opened and all(handle.closed for handle in opened)


def test_caller_owned_handles_stay_open() -> None:
    handle = io.BytesIO(b"xyz")
    with open_cursor(handle) as cursor:
        assert cursor.read_exact(3) == b"xyz"
    assert not handle.closed

"""Custom exception hierarchy for the pickle decoder."""

from __future__ import annotations

from typing import Optional


class PickleError(Exception):
    """Base class for all decoding related errors.

    ``offset`` is the absolute byte position the failure relates to when it is
    known, otherwise ``None``.
    """

    def __init__(self, message: str, *, offset: Optional[int] = None) -> None:
        if offset is not None:
            message = f"{message} (offset {offset})"
        super().__init__(message)
        self.offset = offset


class PickleIOError(PickleError):
    """Raised when the byte source cannot satisfy a read or seek."""


class TruncatedStreamError(PickleIOError):
    """Raised when the stream ends before a value is complete."""

    def __init__(self, offset: int, requested: int, available: int) -> None:
        super().__init__(
            f"unexpected end of stream: wanted {requested} byte(s), got {available}",
            offset=offset,
        )
        self.requested = requested
        self.available = available


class InvalidSeekError(PickleIOError):
    """Raised when an absolute seek falls outside the source."""


class UnknownTagError(PickleError):
    """Raised for a tag byte outside the recognised set."""

    def __init__(self, tag: int, offset: int) -> None:
        super().__init__(f"unknown tag 0x{tag:02x}", offset=offset)
        self.tag = tag


class PickleEncodingError(PickleError):
    """Raised when a string payload is not valid UTF-8."""


class NonFiniteNumberError(PickleError):
    """Raised when a 64-bit float decodes to NaN or infinity."""


class KeyConversionError(PickleError):
    """Raised when a hash-part key has no canonical string form."""


class NestingDepthError(PickleError):
    """Raised when tables nest deeper than the configured limit."""


__all__ = [
    "PickleError",
    "PickleIOError",
    "TruncatedStreamError",
    "InvalidSeekError",
    "UnknownTagError",
    "PickleEncodingError",
    "NonFiniteNumberError",
    "KeyConversionError",
    "NestingDepthError",
]

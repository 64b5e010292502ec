"""Decoder for the binary table dumps ("pickles") written by a Lua runtime."""

from .cursor import ByteCursor, open_cursor
from .decoder import (
    DEFAULT_MAX_DEPTH,
    PickleDecoder,
    Tag,
    canonical_key,
    decode_bytes,
    decode_document,
    read_value,
    render_key,
)
from .exceptions import (
    InvalidSeekError,
    KeyConversionError,
    NestingDepthError,
    NonFiniteNumberError,
    PickleEncodingError,
    PickleError,
    PickleIOError,
    TruncatedStreamError,
    UnknownTagError,
)
from .export import export_document, split_document

__version__ = "0.1.0"

__all__ = [
    "ByteCursor",
    "DEFAULT_MAX_DEPTH",
    "InvalidSeekError",
    "KeyConversionError",
    "NestingDepthError",
    "NonFiniteNumberError",
    "PickleDecoder",
    "PickleEncodingError",
    "PickleError",
    "PickleIOError",
    "Tag",
    "TruncatedStreamError",
    "UnknownTagError",
    "canonical_key",
    "decode_bytes",
    "decode_document",
    "export_document",
    "open_cursor",
    "read_value",
    "render_key",
    "split_document",
]

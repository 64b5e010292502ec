"""Filesystem helpers for emitting decoded documents."""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

__all__ = ["safe_filename", "write_json"]

_UNSAFE_CHARS = re.compile(r"[^\w.\-]+", re.ASCII)


def safe_filename(name: str, *, fallback: str = "entry") -> str:
    """Return ``name`` reduced to characters that are safe in a file name."""

    cleaned = _UNSAFE_CHARS.sub("_", name).strip("._")
    return cleaned or fallback


def write_json(path: Path, obj: Any, *, indent: int | None = 2) -> None:
    """Serialise ``obj`` to ``path`` through a temporary file in the same directory.

    The target is only replaced once the payload has been fully flushed, so an
    interrupted run never leaves a half written document behind.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    separators = (",", ":") if indent is None else None
    fd, temp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".partial", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(obj, handle, ensure_ascii=False, indent=indent, separators=separators)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except BaseException:
        try:
            os.unlink(temp_path)
        except FileNotFoundError:
            pass
        raise

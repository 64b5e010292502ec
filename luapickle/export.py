"""Split a decoded snapshot into one JSON artefact per top-level entry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Tuple

from .decoder import Value
from .io_utils import safe_filename, write_json

LOG = logging.getLogger(__name__)

__all__ = ["split_document", "export_document"]


def split_document(document: Value, *, stem: str = "document") -> Iterator[Tuple[str, Value]]:
    """Yield ``(name, value)`` for each independently meaningful sub-document.

    Snapshots normally hold a root table whose entries are themselves
    documents.  Any other root value is yielded once under ``stem``.
    """

    if isinstance(document, dict):
        yield from document.items()
    else:
        yield stem, document


def export_document(
    document: Value,
    directory: Path,
    *,
    stem: str = "document",
    indent: int | None = 2,
) -> List[Path]:
    """Write every sub-document of ``document`` to ``directory`` as ``<name>.json``."""

    written: List[Path] = []
    used: set[str] = set()
    for name, value in split_document(document, stem=stem):
        base = safe_filename(name)
        # Distinct keys can collapse to the same file name once sanitised.
        filename = base
        suffix = 1
        while filename.lower() in used:
            suffix += 1
            filename = f"{base}_{suffix}"
        used.add(filename.lower())
        path = directory / f"{filename}.json"
        write_json(path, value, indent=indent)
        LOG.info("wrote %s -> %s", name, path)
        written.append(path)
    return written

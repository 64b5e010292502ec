"""Command line entry point: decode snapshot files and export their tables."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

from .decoder import DEFAULT_MAX_DEPTH, decode_document
from .exceptions import PickleError
from .export import export_document, split_document
from .logging_config import configure_logging

LOG = logging.getLogger(__name__)

HEADER_SKIP_ENV = "LUAPICKLE_HEADER_SKIP"
DEFAULT_HEADER_SKIP = 4


@dataclass
class DecodeOptions:
    header_skip: int = DEFAULT_HEADER_SKIP
    max_depth: int = DEFAULT_MAX_DEPTH


def _parse_offset(value: str) -> int:
    token = value.strip().lower()
    base = 10
    if token.startswith("0x"):
        token = token[2:]
        base = 16
    elif token.startswith("0o"):
        token = token[2:]
        base = 8
    elif token.startswith("0b"):
        token = token[2:]
        base = 2
    try:
        parsed = int(token, base)
    except ValueError:
        raise ValueError(f"invalid byte offset {value!r}") from None
    if parsed < 0:
        raise ValueError(f"byte offset must be non-negative, got {value!r}")
    return parsed


def _offset_argument(value: str) -> int:
    try:
        return _parse_offset(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _positive_int(value: str) -> int:
    try:
        parsed = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return parsed


def resolve_options(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> DecodeOptions:
    """Merge CLI flags with the environment; flags win."""

    env = os.environ if environ is None else environ
    header_skip = args.skip
    if header_skip is None:
        raw = env.get(HEADER_SKIP_ENV, "").strip()
        header_skip = _parse_offset(raw) if raw else DEFAULT_HEADER_SKIP
    return DecodeOptions(header_skip=header_skip, max_depth=args.max_depth)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="luapickle",
        description="Decode Lua pickle snapshots and export each top-level table as JSON",
    )
    parser.add_argument("inputs", nargs="+", help="snapshot file(s) to decode")
    parser.add_argument(
        "--skip",
        type=_offset_argument,
        default=None,
        help=(
            "header bytes to skip before the root value "
            f"(default: ${HEADER_SKIP_ENV} or {DEFAULT_HEADER_SKIP}; accepts 0x.. hex)"
        ),
    )
    parser.add_argument(
        "-o",
        "--out",
        dest="output",
        help="output directory (default: the directory of each input)",
    )
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=DEFAULT_MAX_DEPTH,
        help="maximum table nesting depth before decoding is aborted",
    )
    parser.add_argument("--compact", action="store_true", help="write compact JSON")
    parser.add_argument(
        "--list",
        action="store_true",
        help="only list the top-level entries, do not write any files",
    )
    parser.add_argument("--log-file", help="also write a timestamped log to this file")
    parser.add_argument("--verbose", action="store_true", help="enable verbose colourised logging")
    return parser


def _process(source: Path, options: DecodeOptions, args: argparse.Namespace) -> None:
    document = decode_document(source, options.header_skip, max_depth=options.max_depth)
    if args.list:
        for name, value in split_document(document, stem=source.stem):
            LOG.info("%s: %s", name, type(value).__name__)
        return
    directory = Path(args.output) if args.output else source.resolve().parent
    written = export_document(
        document,
        directory,
        stem=source.stem,
        indent=None if args.compact else 2,
    )
    LOG.info("%s: exported %d document(s) to %s", source, len(written), directory)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose, Path(args.log_file) if args.log_file else None)

    try:
        options = resolve_options(args)
    except ValueError as exc:
        LOG.error("%s: %s", HEADER_SKIP_ENV, exc)
        return 2

    failures = 0
    for raw in args.inputs:
        source = Path(raw)
        if not source.is_file():
            LOG.error("input %s not found", source)
            failures += 1
            continue
        try:
            _process(source, options, args)
        except PickleError as exc:
            LOG.error("failed to decode %s: %s", source, exc)
            failures += 1
        except OSError as exc:
            LOG.error("I/O error while processing %s: %s", source, exc)
            failures += 1

    return 1 if failures else 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())

"""Test configuration ensuring the project source tree is importable."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
TESTS = ROOT / "tests"

root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)
else:
    idx = sys.path.index(root_str)
    if idx != 0:
        sys.path.insert(0, sys.path.pop(idx))

if str(TESTS) in sys.path:
    sys.path.pop(sys.path.index(str(TESTS)))
sys.path.insert(1, str(TESTS))

from pickle_builders import p_str, p_table, p_u8  # noqa: E402


@pytest.fixture
def snapshot_bytes() -> bytes:
    """A four byte header followed by a root table of two named documents."""

    settings = p_table(hash_part=[(p_str("volume"), p_u8(80)), (p_str("muted"), b"\x02")])
    inventory = p_table(array=[p_str("sword"), p_str("shield")])
    root = p_table(hash_part=[(p_str("settings"), settings), (p_str("inventory"), inventory)])
    return b"PKL\x01" + root


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_bytes: bytes) -> Path:
    path = tmp_path / "cache"
    path.write_bytes(snapshot_bytes)
    return path

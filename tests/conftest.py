"""Shared fixtures: builders for synthetic serialized buffers."""

from __future__ import annotations

import struct
from typing import Callable

import pytest

from graphver.config import MAVEN_VERSION_ANCHOR

COMMIT = "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"

# Stream magic + non-printable noise; contains no valid string
FILLER = b"\xac\xed\x00\x05" + b"\x01\x02\x03\xff" * 8


def _prefixed(text: str) -> bytes:
    raw = text.encode("latin-1")
    return struct.pack(">H", len(raw)) + raw


@pytest.fixture
def prefixed() -> Callable[[str], bytes]:
    """Encode a string the way Java's writeUTF does (ASCII only)."""
    return _prefixed


@pytest.fixture
def graph_bytes() -> bytes:
    """A minimal graph: noise, a decoy version, the anchor, then both fields."""
    return b"".join([
        FILLER,
        _prefixed("9.9.9-decoy"),
        b"\x70\x01",
        _prefixed(MAVEN_VERSION_ANCHOR),
        b"\x01\x02",
        _prefixed("otherField"),
        _prefixed(COMMIT),
        b"\xff",
        _prefixed("1.2.3-SNAPSHOT"),
        b"\x00\x00",
    ])


@pytest.fixture
def graph_file(tmp_path, graph_bytes):
    path = tmp_path / "Graph.obj"
    path.write_bytes(graph_bytes)
    return path

"""
graphver.locator
================
Two-phase search for the build provenance of an OpenTripPlanner graph.

1.  **Anchor** - walk the strings from offset 0 until one equals the
    ``MavenVersion`` class name.  Its fields are serialized shortly after.
2.  **Fields** - from the anchor, run two independent forward walks: one
    for a 40-character hex commit, one for a ``N.N.N`` version string.
    Each walk has its own cursor, so a missing commit never hides the
    version and vice versa.

The first match wins in every phase.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from graphver.byteview import ByteView, open_view
from graphver.config import ScanConfig
from graphver.errors import AnchorNotFoundError, ExtractionError
from graphver.scanner import StringRun, StringScanner

logger = logging.getLogger(__name__)

_RE_HEX     = re.compile(r"^[0-9a-fA-F]+$")
_RE_VERSION = re.compile(r"^\d+\.\d+\.\d+")


@dataclass(frozen=True, slots=True)
class ExtractedVersion:
    """Result of a full locate.  Either field may be None."""
    commit_hash:  str | None = None
    version_text: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.commit_hash is None and self.version_text is None

    def to_dict(self) -> dict[str, str | None]:
        return {"commit": self.commit_hash, "version": self.version_text}


# ---------------------------------------------------------------------------
# Field predicates
# ---------------------------------------------------------------------------

def is_commit_hash(text: str, length: int = 40) -> bool:
    return len(text) == length and _RE_HEX.match(text) is not None


def is_version_text(text: str) -> bool:
    return _RE_VERSION.match(text) is not None


# ---------------------------------------------------------------------------
# Search primitives
# ---------------------------------------------------------------------------

def _first_match(
    scanner: StringScanner,
    start: int,
    accept: Callable[[StringRun, str], bool],
) -> tuple[StringRun, str] | None:
    """Walk runs from *start*; return the first ``(run, text)`` *accept* likes."""
    for run in scanner.iter_runs(start):
        text = scanner.decode_string(run)
        if text is not None and accept(run, text):
            return run, text
    return None


def find_anchor(scanner: StringScanner, anchor: str) -> int:
    """
    Return the position of the first string equal to *anchor*.

    Raises :class:`AnchorNotFoundError` if the buffer ends first.
    """
    hit = _first_match(scanner, 0, lambda run, text: text == anchor)
    if hit is None:
        raise AnchorNotFoundError(f"anchor {anchor!r} not found")
    position = hit[0].position
    logger.info("Found anchor %s @0x%08X", anchor, position)
    return position


def find_commit_hash(scanner: StringScanner, start: int, length: int = 40) -> str | None:
    """First *length*-character hex string at or after *start*, or None."""
    hit = _first_match(
        scanner, start,
        lambda run, text: run.accepted_length == length and is_commit_hash(text, length),
    )
    if hit is None:
        logger.info("No commit hash after @0x%08X", start)
        return None
    return hit[1]


def find_version_text(scanner: StringScanner, start: int) -> str | None:
    """First string starting with ``digits.digits.digits`` at or after *start*."""
    hit = _first_match(scanner, start, lambda run, text: is_version_text(text))
    if hit is None:
        logger.info("No version text after @0x%08X", start)
        return None
    return hit[1]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def locate_version(view: ByteView, config: ScanConfig | None = None) -> ExtractedVersion:
    """
    Run both phases over *view*.

    Raises
    ------
    AnchorNotFoundError
        The anchor string is absent.
    ExtractionError
        The anchor is present but neither field was found, or the field
        search failed unexpectedly.
    """
    config  = config or ScanConfig()
    scanner = StringScanner(view, min_length=config.min_string_length)

    anchor_pos = find_anchor(scanner, config.anchor)

    try:
        commit  = find_commit_hash(scanner, anchor_pos, config.commit_length)
        version = find_version_text(scanner, anchor_pos)
    except Exception as exc:
        logger.debug("Field search failed", exc_info=True)
        raise ExtractionError(f"field search after anchor failed: {exc}") from exc

    result = ExtractedVersion(commit_hash=commit, version_text=version)
    if result.is_empty:
        raise ExtractionError("anchor found but neither commit nor version follows it")

    logger.info("commit=%s version=%s", commit, version)
    return result


def read_graph_file(path: Path | str, config: ScanConfig | None = None) -> ExtractedVersion:
    """Map *path*, locate its version, and release the mapping."""
    with open_view(path) as view:
        return locate_version(view, config)

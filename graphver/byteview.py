"""
graphver.byteview
=================
Bounds-checked, read-only view over a file's raw bytes.

Public API
----------
ByteView               - random-access view over ``bytes`` or an ``mmap``
  .byte_at(pos)        → int   (0..255)
  .slice(start, stop)  → bytes
  .match(pattern, pos) → re.Match | None
  .length              → int
open_view(path)        - context manager that maps *path* read-only and
                         unmaps it on every exit path
"""

from __future__ import annotations

import logging
import mmap
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from graphver.errors import GraphFileError

logger = logging.getLogger(__name__)

Buffer = Union[bytes, bytearray, memoryview, mmap.mmap]


class OutOfBoundsError(IndexError):
    """A position outside ``[0, length)`` was read."""


class ByteView:
    """Immutable byte sequence with a fixed, known length."""

    __slots__ = ("_buf", "_length")

    def __init__(self, buf: Buffer) -> None:
        self._buf    = buf
        self._length = len(buf)

    @property
    def length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"ByteView(length={self._length})"

    def byte_at(self, pos: int) -> int:
        if not 0 <= pos < self._length:
            raise OutOfBoundsError(f"position {pos} outside [0, {self._length})")
        return self._buf[pos]

    def slice(self, start: int, stop: int) -> bytes:
        """Return bytes ``[start, stop)``; both ends must lie within the view."""
        if not 0 <= start <= stop <= self._length:
            raise OutOfBoundsError(
                f"slice [{start}, {stop}) outside [0, {self._length})"
            )
        return bytes(self._buf[start:stop])

    def match(self, pattern: re.Pattern[bytes], pos: int, endpos: int | None = None) -> re.Match[bytes] | None:
        """Anchor *pattern* at *pos*, never looking at or past *endpos*."""
        if not 0 <= pos <= self._length:
            raise OutOfBoundsError(f"position {pos} outside [0, {self._length}]")
        if endpos is None or endpos > self._length:
            endpos = self._length
        return pattern.match(self._buf, pos, endpos)


@contextmanager
def open_view(path: Path | str) -> Iterator[ByteView]:
    """
    Memory-map *path* read-only and yield a :class:`ByteView` over it.

    Raises :class:`GraphFileError` if the file does not exist, cannot be
    read, is empty, or cannot be mapped.  The mapping and the file handle
    are released when the ``with`` block exits, including on error.
    """
    path = Path(path)
    try:
        fh = path.open("rb")
    except OSError as exc:
        raise GraphFileError(str(exc)) from exc

    with fh:
        try:
            size = path.stat().st_size
            if size == 0:
                raise GraphFileError(f"{path}: file is empty")
            mm = mmap.mmap(fh.fileno(), 0, access=mmap.ACCESS_READ)
        except (OSError, ValueError) as exc:
            raise GraphFileError(f"{path}: {exc}") from exc

        with mm:
            logger.info("Mapped %s (%d bytes)", path, size)
            yield ByteView(mm)

"""
graphver.scanner
================
Left-to-right walk over a :class:`~graphver.byteview.ByteView` yielding
successive length-prefixed strings.

Public API
----------
StringRun                         - one validated string (position + lengths)
StringScanner                     - scan primitive bound to a view
  .find_next_run(start)           → StringRun | None
  .decode_string(run)             → str | None
  .iter_runs(start=0)             → Iterator[StringRun]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from graphver.analysis import encoded_length, raw_printable_length, validated_length
from graphver.byteview import ByteView

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StringRun:
    """A validated string: ``accepted_length`` bytes starting at ``position``."""
    position:        int
    raw_length:      int
    encoded_length:  int

    @property
    def accepted_length(self) -> int:
        if 0 < self.encoded_length <= self.raw_length:
            return self.encoded_length
        return 0

    @property
    def end(self) -> int:
        return self.position + self.accepted_length


class StringScanner:
    """
    Finds validated strings longer than *min_length*.

    Usage::

        scanner = StringScanner(view, min_length=2)
        for run in scanner.iter_runs():
            print(run.position, scanner.decode_string(run))
    """

    def __init__(self, view: ByteView, min_length: int = 2) -> None:
        self.view:       ByteView = view
        self.min_length: int      = min_length

    def find_next_run(self, start_pos: int) -> StringRun | None:
        """
        Return the first run at or after *start_pos* whose validated length
        exceeds ``min_length``, or None at end of buffer.

        Advances one byte at a time: a genuine string's prefix may sit in the
        middle of an unrelated printable run.
        """
        size = self.view.length
        for pos in range(max(start_pos, 0), size):
            if validated_length(self.view, pos) > self.min_length:
                return StringRun(
                    position=pos,
                    raw_length=raw_printable_length(self.view, pos),
                    encoded_length=encoded_length(self.view, pos),
                )
        return None

    def decode_string(self, run: StringRun) -> str | None:
        """Materialise *run* one byte per character; None if it was rejected."""
        length = run.accepted_length
        if length < 1:
            return None
        return self.view.slice(run.position, run.position + length).decode("latin-1")

    def iter_runs(self, start: int = 0) -> Iterator[StringRun]:
        """
        Yield every validated run from *start* to the end of the view,
        seeking past each run before looking for the next.
        """
        pos = start
        while True:
            run = self.find_next_run(pos)
            if run is None:
                return
            logger.debug(
                "run @0x%08X len=%d raw=%d",
                run.position, run.accepted_length, run.raw_length,
            )
            yield run
            pos = run.end

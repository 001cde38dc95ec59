"""
graphver.analysis
=================
Printable-run detection over a :class:`~graphver.byteview.ByteView`.

Java object serialization writes strings as::

    [uint16_be  length]  [length bytes of modified UTF-8]

so a genuine embedded string is a run of printable bytes whose two
preceding bytes agree with the run's length.  Incidental printable bytes
inside numeric or compressed payloads rarely carry such a prefix, which is
what separates real strings from noise here.

Bytes are read as *signed* 8-bit values before any arithmetic, as the JVM
does.  This is load-bearing: it decides which raw bytes count as printable
and how a length prefix with its top bit set is interpreted.
"""

from __future__ import annotations

import logging
import re

from graphver.byteview import ByteView

logger = logging.getLogger(__name__)

PRINTABLE_MIN = 32
PRINTABLE_MAX = 128    # not 126: DEL and 128 are admitted


def signed_byte(value: int) -> int:
    """Sign-extend an unsigned byte (0..255) to -128..127."""
    return value - 256 if value >= 0x80 else value


def is_printable(c: int) -> bool:
    """Return True if the widened byte value *c* lies in ``[32, 128]``."""
    return PRINTABLE_MIN <= c <= PRINTABLE_MAX


# Unsigned byte values that survive sign extension as printable: 0x20..0x7F
_RE_PRINTABLE_RUN = re.compile(rb"[\x20-\x7f]+")


def read_signed(view: ByteView, pos: int) -> int:
    return signed_byte(view.byte_at(pos))


def raw_printable_length(view: ByteView, pos: int, limit: int | None = None) -> int:
    """
    Count consecutive printable bytes starting at *pos* (possibly 0).

    With *limit*, counting stops after *limit* bytes.
    """
    endpos = None if limit is None else pos + limit
    match = view.match(_RE_PRINTABLE_RUN, pos, endpos)
    return match.end() - pos if match else 0


def encoded_length(view: ByteView, pos: int) -> int:
    """
    Length according to the big-endian 16-bit prefix ending at *pos*.

    Each prefix byte is sign-extended first, so the result can be negative
    when the low byte is 0x80 or above.  Returns 0 when *pos* < 2.
    """
    size_pos = pos - 2
    if size_pos < 0:
        return 0
    return 256 * read_signed(view, size_pos) + read_signed(view, size_pos + 1)


def validated_length(view: ByteView, pos: int) -> int:
    """
    The encoded length at *pos* if the printable run is at least that long,
    otherwise 0 (no string here).

    The encoded length wins over the raw run: a printable run can extend
    past the end of the field into neighbouring bytes.
    """
    encoded = encoded_length(view, pos)
    if encoded <= 0:
        return 0
    # The run only has to reach ``encoded``; stop counting there
    if raw_printable_length(view, pos, limit=encoded) < encoded:
        return 0
    return encoded

"""
graphver.export
===============
Text renderings of locate results.
"""

from __future__ import annotations

import json

from graphver.locator import ExtractedVersion
from graphver.scanner import StringRun

# Stand-in text for a field that was not found
NULL_TEXT = "null"


def format_version_xml(result: ExtractedVersion) -> str:
    """
    The ``<fileVersion>`` block, shaped like OTP's ``serverinfo`` endpoint so
    the two are easy to compare.  Absent fields render as ``null``.
    """
    commit  = result.commit_hash if result.commit_hash is not None else NULL_TEXT
    version = result.version_text if result.version_text is not None else NULL_TEXT
    return "\n".join([
        "<fileVersion>",
        f"<commit>{commit}</commit>",
        f"<version>{version}</version>",
        "</fileVersion>",
    ])


def format_version_json(result: ExtractedVersion) -> str:
    return json.dumps(result.to_dict(), indent=2)


def format_run(run: StringRun, text: str) -> str:
    """One line of the ``--list-strings`` dump."""
    return (
        f"@0x{run.position:08X}  "
        f"[len:{run.accepted_length} raw:{run.raw_length} enc:{run.encoded_length}]  "
        f"{text}"
    )

"""
graphver.errors
===============
Public error taxonomy.  Every error maps onto a distinct process exit code
so the CLI can translate it without inspecting messages.
"""

from __future__ import annotations


class GraphVersionError(Exception):
    """Base class for all user-facing failures."""
    exit_code: int = 1


class UsageError(GraphVersionError):
    """Bad command line."""
    exit_code = 1


class ConfigError(UsageError):
    """A configuration value could not be used."""


class GraphFileError(GraphVersionError):
    """The graph file could not be opened, stat'd or mapped."""
    exit_code = 2


class AnchorNotFoundError(GraphVersionError):
    """The MavenVersion anchor string never appears in the file."""
    exit_code = 3


class ExtractionError(GraphVersionError):
    """The anchor was found, but the commit / version fields were not."""
    exit_code = 4

"""
GRAPHVER - OpenTripPlanner Graph File Version Finder
====================================================
Recovers the build commit and version text embedded in a serialized
``Graph.obj`` file by scanning its raw bytes for length-prefixed strings.
No deserialization is performed.
"""

from graphver.config import ScanConfig
from graphver.errors import (
    AnchorNotFoundError,
    ConfigError,
    ExtractionError,
    GraphFileError,
    GraphVersionError,
    UsageError,
)
from graphver.locator import ExtractedVersion, locate_version, read_graph_file

__version__ = "1.0.0"
__license__ = "GPL-3.0-or-later"
__description__ = "Find the OpenTripPlanner version that wrote a Graph.obj file"

__all__ = [
    "AnchorNotFoundError",
    "ConfigError",
    "ExtractedVersion",
    "ExtractionError",
    "GraphFileError",
    "GraphVersionError",
    "ScanConfig",
    "UsageError",
    "locate_version",
    "read_graph_file",
]

"""
graphver.cli
============
Command-line entry point.

Exit codes
----------
0  success
1  usage / configuration error
2  graph file could not be opened or mapped
3  MavenVersion anchor not found
4  anchor found, but commit / version could not be extracted
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Sequence

from graphver import __version__
from graphver.byteview import open_view
from graphver.config import ScanConfig
from graphver.errors import (
    AnchorNotFoundError,
    ExtractionError,
    GraphFileError,
    GraphVersionError,
    UsageError,
)
from graphver.export import format_run, format_version_json, format_version_xml
from graphver.locator import read_graph_file
from graphver.scanner import StringScanner

logger = logging.getLogger(__name__)

_USAGE_TEXT = (
    "Please use: graphver Graph.obj\n"
    "Where Graph.obj is an OpenTripPlanner graph file, and we will\n"
    "attempt to find the version of OpenTripPlanner which created it.\n"
)

_NOT_FOUND = "Sorry, was not able to find Graph.obj OpenTripPlanner version."
_FORMAT_CHANGED = (
    "Which is strange since I did find a Maven version object.\n"
    "Odds are the file format has changed, you may need to update this program."
)


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with 2 on bad input; 2 is taken by file errors here."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> _ArgumentParser:
    parser = _ArgumentParser(
        prog="graphver",
        description="Find the OpenTripPlanner version that wrote a Graph.obj file.",
    )
    parser.add_argument("graph_file", type=Path, help="path to Graph.obj")
    parser.add_argument(
        "--min-length", type=int, default=None, metavar="N",
        help="ignore strings of N characters or fewer (default: 2)",
    )
    parser.add_argument(
        "--format", choices=("xml", "json"), default="xml",
        help="output format (default: xml)",
    )
    parser.add_argument(
        "--list-strings", action="store_true",
        help="list every length-prefixed string in the file instead",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="log progress to stderr (-vv for debug)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _resolve_config(args: argparse.Namespace) -> ScanConfig:
    config = ScanConfig.from_env()
    if args.min_length is not None:
        if args.min_length < 0:
            raise UsageError(f"--min-length must be >= 0, got {args.min_length}")
        config = dataclasses.replace(config, min_string_length=args.min_length)
    return config


def list_strings(path: Path, config: ScanConfig) -> int:
    """Print every validated string in *path*; return the count."""
    count = 0
    with open_view(path) as view:
        scanner = StringScanner(view, min_length=config.min_string_length)
        for run in scanner.iter_runs():
            text = scanner.decode_string(run)
            print(format_run(run, text or ""))
            count += 1
    logger.info("Listed %d strings", count)
    return count


def run(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, do the work, and return the process exit code."""
    try:
        args = build_parser().parse_args(argv)
        _setup_logging(args.verbose)
        config = _resolve_config(args)

        if args.list_strings:
            list_strings(args.graph_file, config)
            return 0

        result = read_graph_file(args.graph_file, config)
    except UsageError as exc:
        sys.stderr.write(_USAGE_TEXT)
        sys.stderr.write(f"graphver: error: {exc}\n")
        return exc.exit_code
    except GraphFileError as exc:
        sys.stderr.write(f"Could not read graph file, error was: {exc}\n")
        return exc.exit_code
    except AnchorNotFoundError as exc:
        logger.debug("%s", exc)
        sys.stderr.write(_NOT_FOUND + "\n")
        return exc.exit_code
    except ExtractionError as exc:
        logger.debug("%s", exc)
        sys.stderr.write(_NOT_FOUND + "\n" + _FORMAT_CHANGED + "\n")
        return exc.exit_code
    except GraphVersionError as exc:
        sys.stderr.write(f"graphver: {exc}\n")
        return exc.exit_code

    if args.format == "json":
        print(format_version_json(result))
    else:
        print(format_version_xml(result))
    return 0


def main() -> None:
    sys.exit(run())

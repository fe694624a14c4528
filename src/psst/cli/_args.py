"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_verbosity_flags(parser: argparse.ArgumentParser) -> None:
    """Add mutually exclusive -q/--quiet and -v/--verbose flags."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress console output",
    )
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose (debug) logging",
    )


__all__ = ["add_json_flag", "add_verbosity_flags"]

"""
psst CLI package.

Commands live in ``psst.cli.commands`` and are discovered automatically: each
module exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Framework utilities for building commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._args import add_json_flag, add_verbosity_flags
from ._output import OutputFormatter

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_verbosity_flags",
]

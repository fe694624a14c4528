"""
psst scan command.

SUMMARY: Scan a project and generate AI coding instructions
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from psst.cli import OutputFormatter, add_json_flag, add_verbosity_flags
from psst.core.config import ConfigManager
from psst.core.exceptions import PsstError
from psst.core.file_io import atomic_write_text
from psst.core.orchestrator import default_orchestrator
from psst.core.rendering import RenderMode, inject_file, render, render_document
from psst.core.rendering.markdown import coerce_mode
from psst.core.rules import Rule
from psst.core.stdlib_logging import configure_logging

SUMMARY = "Scan a project and generate AI coding instructions"

BANNER_START = "--- psst-ai Generated Instructions ---"
BANNER_END = "--- End of Generated Instructions ---"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to scan (defaults to current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Save output to a file",
    )
    parser.add_argument(
        "-f",
        "--file",
        metavar="FILE",
        help="File to update between the psst-ai instruction markers",
    )
    parser.add_argument(
        "--flat",
        "--no-header",
        dest="flat",
        action="store_true",
        default=None,
        help="Flatten output without category headers",
    )
    parser.add_argument(
        "--document",
        action="store_true",
        help="Render a complete instructions document (title and preamble included)",
    )
    parser.add_argument(
        "--output-dir",
        metavar="DIR",
        help="Write the complete instructions document to DIR/<output.filename>",
    )
    add_verbosity_flags(parser)
    add_json_flag(parser)


def _setup_logging(cfg: Dict[str, Any], args: argparse.Namespace) -> None:
    log_cfg = cfg.get("logging", {}) or {}
    level = str(log_cfg.get("level", "INFO"))
    if getattr(args, "verbose", False):
        level = "DEBUG"
    elif getattr(args, "quiet", False):
        level = "ERROR"
    fmt = log_cfg.get("format")
    if fmt:
        configure_logging(level, fmt)
    else:
        configure_logging(level)


def _resolve_mode(cfg: Dict[str, Any], args: argparse.Namespace) -> RenderMode:
    if getattr(args, "flat", None):
        return RenderMode.FLAT
    return coerce_mode((cfg.get("render", {}) or {}).get("mode"))


def _document(rules: List[Rule], mode: RenderMode, cfg: Dict[str, Any]) -> str:
    out_cfg = cfg.get("output", {}) or {}
    return render_document(rules, mode, title=out_cfg.get("title"), preamble=out_cfg.get("preamble"))


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    root = Path(getattr(args, "directory", None) or ".").resolve()

    try:
        if not root.is_dir():
            raise PsstError(f"Not a directory: {root}", context={"directory": str(root)})

        cfg = ConfigManager(root).load_config()
        _setup_logging(cfg, args)
        mode = _resolve_mode(cfg, args)
        markers = (cfg.get("render", {}) or {}).get("markers", {}) or {}

        logger.info("Starting scan of directory: %s", root)
        rules = default_orchestrator(cfg).run_all(root)

        payload: Dict[str, Any] = {"directory": str(root), "mode": mode.value}
        written: List[str] = []

        output: Optional[str] = None
        if args.file:
            target = Path(args.file).resolve()
            kwargs = {}
            if markers.get("start") and markers.get("end"):
                kwargs = {"start_marker": markers["start"], "end_marker": markers["end"]}
            result = inject_file(target, rules, mode, **kwargs)
            payload["injection"] = {"path": str(target), "action": result.action, "changed": result.changed}
            if result.changed:
                written.append(str(target))
        else:
            output = _document(rules, mode, cfg) if args.document else render(rules, mode)
            if args.output:
                out_path = Path(args.output).resolve()
                atomic_write_text(out_path, output if output.endswith("\n") else output + "\n")
                written.append(str(out_path))
                logger.info("Output saved to: %s", out_path)

        if args.output_dir:
            out_cfg = cfg.get("output", {}) or {}
            doc_path = Path(args.output_dir).resolve() / str(out_cfg.get("filename") or "copilot-instructions.md")
            atomic_write_text(doc_path, _document(rules, mode, cfg))
            written.append(str(doc_path))
            logger.info("Instructions written to %s", doc_path)

        if formatter.json_mode:
            payload["rules"] = [r.to_dict() for r in rules]
            payload["output"] = output
            payload["written"] = written
            formatter.json_output(payload)
        elif output is not None and not args.quiet:
            formatter.text(f"\n{BANNER_START}\n")
            formatter.text(output)
            formatter.text(f"\n{BANNER_END}\n")

        logger.info("Scan completed")
        return 0
    except PsstError as e:
        formatter.error(e, error_code=e.__class__.__name__)
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))

"""
psst categories command.

SUMMARY: List the rule categories and their display titles
"""
from __future__ import annotations

import argparse
import sys

from psst.cli import OutputFormatter, add_json_flag
from psst.core.rules import Category, format_category_title

SUMMARY = "List the rule categories and their display titles"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    rows = [{"category": c.value, "title": format_category_title(c)} for c in Category]

    if formatter.json_mode:
        formatter.json_output({"categories": rows})
        return 0

    width = max(len(r["category"]) for r in rows)
    for r in rows:
        formatter.text(f"{r['category']:<{width}}  {r['title']}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))

"""Best-effort recovery of exported object literals from JS/TS config files.

Config files such as ``jest.config.js`` or ``xo.config.js`` usually export a
single object literal. Rather than evaluating the source, the literal is cut
out of the text and rewritten into JSON by a fixed sequence of textual passes:

1. locate ``module.exports =`` or ``export default``
2. extract ``{ ... }`` by brace-depth counting
3. strip line comments, strip block comments, drop trailing commas,
   quote bare keys, convert single quotes to double quotes
4. ``json.loads``

Any failure yields an ``Unparseable`` value; nothing here raises.

Known limitations (intentionally not patched with more heuristics):
- ``//`` inside string values (URLs) is treated as a comment
- strings containing quote characters or escaped quotes
- braces inside string values affect depth counting
- computed keys, template literals, functions, spreads and identifiers as
  values are not JSON and come back as ``Unparseable``
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

ConfigLiteral = Dict[str, Any]

EXPORT_MARKERS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"module\.exports\s*="),
    re.compile(r"export\s+default\b"),
)

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_$][\w$]*)\s*:")

_SCRIPT_SUFFIXES = (".js", ".cjs", ".mjs", ".ts", ".cts", ".mts")


@dataclass(frozen=True)
class Unparseable:
    """Distinguished result: no structured configuration could be recovered."""

    reason: str = ""

    def __bool__(self) -> bool:
        return False


def _find_export(source: str) -> Optional[int]:
    """Return the end offset of the earliest export marker, or None."""
    best: Optional[re.Match[str]] = None
    for pattern in EXPORT_MARKERS:
        m = pattern.search(source)
        if m and (best is None or m.start() < best.start()):
            best = m
    return best.end() if best else None


def extract_object_literal(source: str, start: int = 0) -> Optional[str]:
    """Return the text from the first ``{`` at/after ``start`` to its matching ``}``.

    Returns None when there is no opening brace or the braces never balance.
    """
    open_idx = source.find("{", start)
    if open_idx == -1:
        return None
    depth = 0
    for idx in range(open_idx, len(source)):
        ch = source[idx]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return source[open_idx : idx + 1]
    return None


def _to_json_text(literal: str) -> str:
    text = _LINE_COMMENT.sub("", literal)
    text = _BLOCK_COMMENT.sub("", text)
    text = _TRAILING_COMMA.sub(r"\1", text)
    text = _BARE_KEY.sub(r'\1"\2":', text)
    return text.replace("'", '"')


def normalize_config_literal(source: str) -> Union[ConfigLiteral, Unparseable]:
    """Recover the exported object literal of ``source`` as a dict.

    Example:
        >>> normalize_config_literal("module.exports = { space: 2, semicolon: false, }")
        {'space': 2, 'semicolon': False}
    """
    marker_end = _find_export(source)
    if marker_end is None:
        return Unparseable("no export marker found")

    literal = extract_object_literal(source, marker_end)
    if literal is None:
        return Unparseable("no balanced object literal after export marker")

    try:
        data = json.loads(_to_json_text(literal))
    except (ValueError, RecursionError) as exc:
        return Unparseable(f"invalid literal: {exc}")

    if not isinstance(data, dict):
        return Unparseable("exported value is not an object")
    return data


def parse_config_text(filename: str, text: str) -> Union[ConfigLiteral, Unparseable]:
    """Parse config file content, choosing JSON or the normalizer by file name."""
    name = filename.lower()
    if name.endswith(".json") or name.rsplit("/", 1)[-1] in {".prettierrc", ".xo-config"}:
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as exc:
            return Unparseable(f"invalid JSON: {exc}")
        if not isinstance(data, dict):
            return Unparseable("JSON value is not an object")
        return data
    if name.endswith(_SCRIPT_SUFFIXES):
        return normalize_config_literal(text)
    return Unparseable(f"unsupported config format: {filename}")


def read_config_file(path: Path) -> Union[ConfigLiteral, Unparseable]:
    """Read and parse a config file from disk; I/O errors become Unparseable."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return Unparseable(f"unreadable: {exc}")
    return parse_config_text(Path(path).name, text)


__all__ = [
    "ConfigLiteral",
    "EXPORT_MARKERS",
    "Unparseable",
    "extract_object_literal",
    "normalize_config_literal",
    "parse_config_text",
    "read_config_file",
]

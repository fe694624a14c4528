"""Splice rendered rules into an existing file between sentinel markers.

Everything outside the markers is left byte-identical. When either marker is
missing the text is returned unchanged and a warning is logged; nothing is
ever written in that case.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

from psst.core.exceptions import InjectionTargetError
from psst.core.file_io import atomic_write_text, read_text
from psst.core.rendering.markdown import RenderMode, render
from psst.core.rules import Rule

logger = logging.getLogger(__name__)

START_MARKER = "<!-- PSST-AI-INSTRUCTIONS-START -->"
END_MARKER = "<!-- PSST-AI-INSTRUCTIONS-END -->"


@dataclass(frozen=True)
class InjectionResult:
    """Outcome of an injection attempt."""

    text: str
    changed: bool
    action: str  # "replaced" | "unchanged" | "missing-markers"


def inject(
    file_text: str,
    rules: Iterable[Rule],
    mode: Union[RenderMode, str] = RenderMode.CATEGORIZED,
    *,
    start_marker: str = START_MARKER,
    end_marker: str = END_MARKER,
) -> InjectionResult:
    """Replace the content between the markers with freshly rendered rules."""
    start_idx = file_text.find(start_marker)
    end_idx = -1
    if start_idx != -1:
        end_idx = file_text.find(end_marker, start_idx + len(start_marker))

    if start_idx == -1 or end_idx == -1:
        missing = start_marker if start_idx == -1 else end_marker
        logger.warning("Marker %r not found; leaving file unchanged", missing)
        return InjectionResult(text=file_text, changed=False, action="missing-markers")

    block = render(rules, mode)
    head = file_text[: start_idx + len(start_marker)]
    updated = head + "\n" + block + "\n" + file_text[end_idx:]
    if updated == file_text:
        return InjectionResult(text=file_text, changed=False, action="unchanged")
    return InjectionResult(text=updated, changed=True, action="replaced")


def inject_file(
    path: Union[str, Path],
    rules: Iterable[Rule],
    mode: Union[RenderMode, str] = RenderMode.CATEGORIZED,
    *,
    start_marker: str = START_MARKER,
    end_marker: str = END_MARKER,
) -> InjectionResult:
    """Read ``path``, inject, and write back once if the content changed.

    Raises:
        InjectionTargetError: when ``path`` does not exist
    """
    target = Path(path)
    if not target.is_file():
        raise InjectionTargetError(f"File not found: {target}", context={"path": str(target)})

    result = inject(read_text(target), rules, mode, start_marker=start_marker, end_marker=end_marker)
    if result.changed:
        atomic_write_text(target, result.text)
        logger.info("Updated instructions in %s", target)
    else:
        logger.debug("No changes written to %s (%s)", target, result.action)
    return result


__all__ = ["END_MARKER", "START_MARKER", "InjectionResult", "inject", "inject_file"]

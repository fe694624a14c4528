"""Aggregate Rules and render them as Markdown.

Two shapes are supported:

- categorized: one ``## <Title>`` section per category display title, titles
  in ordinal order, rules deduplicated within each section
- flat: a single bullet list deduplicated across all categories

In both shapes duplicates are identified by exact text and the first
occurrence wins.
"""
from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Union

from jinja2 import Environment, FileSystemLoader

from psst.core.rules import Rule
from psst.data import get_data_path

logger = logging.getLogger(__name__)

DOCUMENT_TEMPLATE = "instructions.md.j2"


class RenderMode(str, Enum):
    CATEGORIZED = "categorized"
    FLAT = "flat"

    def __str__(self) -> str:
        return self.value


def coerce_mode(mode: Union[RenderMode, str, None]) -> RenderMode:
    """Accept a RenderMode or its config value (``"categorized"``/``"flat"``)."""
    if mode is None:
        return RenderMode.CATEGORIZED
    return mode if isinstance(mode, RenderMode) else RenderMode(str(mode).lower())


def group_rules(rules: Iterable[Rule]) -> Dict[str, List[str]]:
    """Map display title -> unique rule texts, in first-occurrence order."""
    groups: Dict[str, List[str]] = {}
    for rule in rules:
        texts = groups.setdefault(rule.title, [])
        if rule.text not in texts:
            texts.append(rule.text)
    return groups


def flatten_rules(rules: Iterable[Rule]) -> List[str]:
    """Unique rule texts across all categories, in first-occurrence order."""
    seen: Dict[str, None] = {}
    for rule in rules:
        seen.setdefault(rule.text, None)
    return list(seen)


def _bullets(texts: Iterable[str]) -> str:
    return "\n".join(f"- {text}" for text in texts)


def render(rules: Iterable[Rule], mode: Union[RenderMode, str] = RenderMode.CATEGORIZED) -> str:
    """Render ``rules`` as Markdown; empty input renders as ``""``."""
    rules = list(rules)
    if coerce_mode(mode) is RenderMode.FLAT:
        return _bullets(flatten_rules(rules)).strip()

    groups = group_rules(rules)
    parts = [f"## {title}\n\n{_bullets(groups[title])}\n\n" for title in sorted(groups)]
    return "".join(parts).strip()


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(get_data_path("templates"))),
        autoescape=False,
        keep_trailing_newline=True,
    )


def render_document(
    rules: Iterable[Rule],
    mode: Union[RenderMode, str] = RenderMode.CATEGORIZED,
    *,
    title: Optional[str] = None,
    preamble: Optional[str] = None,
) -> str:
    """Render a complete instructions document: title, preamble, then the rules.

    The result always ends with a single newline.
    """
    body = render(rules, mode)
    template = _environment().get_template(DOCUMENT_TEMPLATE)
    text = template.render(title=title or "", preamble=(preamble or "").strip(), body=body)
    return text.rstrip() + "\n"


__all__ = ["RenderMode", "coerce_mode", "flatten_rules", "group_rules", "render", "render_document"]

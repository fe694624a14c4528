"""
psst rendering: aggregate rules into Markdown and splice them into files.
"""
from __future__ import annotations

from .injection import END_MARKER, START_MARKER, InjectionResult, inject, inject_file
from .markdown import RenderMode, flatten_rules, group_rules, render, render_document

__all__ = [
    "END_MARKER",
    "InjectionResult",
    "RenderMode",
    "START_MARKER",
    "flatten_rules",
    "group_rules",
    "inject",
    "inject_file",
    "render",
    "render_document",
]

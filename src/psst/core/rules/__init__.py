"""
psst rules model.

Shared vocabulary for scanners, the orchestrator and the renderer.
"""
from __future__ import annotations

from .categories import (
    CATEGORY_TITLES,
    DEFAULT_TITLE,
    Category,
    format_category_title,
)
from .models import Rule, ScanResult

__all__ = [
    "Category",
    "CATEGORY_TITLES",
    "DEFAULT_TITLE",
    "format_category_title",
    "Rule",
    "ScanResult",
]

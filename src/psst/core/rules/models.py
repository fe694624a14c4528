"""
Data models for detected rules.

- Rule: one human-readable recommendation, optionally tagged with a Category
- ScanResult: the ordered list of rules produced by one scanner invocation
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from psst.core.exceptions import RuleContractError
from psst.core.rules.categories import Category, format_category_title


@dataclass(frozen=True)
class Rule:
    """A single recommendation emitted by a scanner.

    Attributes:
        text: Recommendation text (non-empty). Two rules are duplicates when
            their texts are exactly equal.
        category: Optional category tag; ``None`` renders under "General".
    """

    text: str
    category: Optional[Category] = None

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise RuleContractError(
                "Rule text must be a non-empty string",
                context={"text": self.text, "category": str(self.category)},
            )

    @property
    def title(self) -> str:
        """Display title of the rule's category."""
        return format_category_title(self.category)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "category": self.category.value if self.category is not None else None,
            "title": self.title,
        }


ScanResult = List[Rule]


__all__ = [
    "Rule",
    "ScanResult",
]

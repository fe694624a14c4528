"""
Category vocabulary for detected rules.

Each category tag maps to the human-readable title used as a Markdown header
when rules are rendered in categorized mode. The mapping must stay total over
``Category``: add the title here whenever a new member is introduced.
"""
from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, Union


class Category(str, Enum):
    """Fixed (but extensible) set of rule category tags."""

    GENERAL = "general"
    PACKAGE_MANAGER = "package_manager"
    NODE_VERSION = "node_version"
    LINTING = "linting"
    TESTING = "testing"
    PRETTIER = "prettier"
    XO = "xo"
    JEST = "jest"
    AVA = "ava"
    NEXTJS = "nextjs"
    TAILWIND = "tailwind"
    PRISMA = "prisma"
    GO = "go"

    def __str__(self) -> str:
        return self.value


CATEGORY_TITLES: Mapping[Category, str] = {
    Category.GENERAL: "General",
    Category.PACKAGE_MANAGER: "Package Manager",
    Category.NODE_VERSION: "Node Version",
    Category.LINTING: "Linting",
    Category.TESTING: "Testing",
    Category.PRETTIER: "Prettier",
    Category.XO: "XO",
    Category.JEST: "Jest",
    Category.AVA: "AVA",
    Category.NEXTJS: "Next.js",
    Category.TAILWIND: "Tailwind CSS",
    Category.PRISMA: "Prisma",
    Category.GO: "Go",
}

DEFAULT_TITLE = CATEGORY_TITLES[Category.GENERAL]


def format_category_title(category: Optional[Union[Category, str]]) -> str:
    """Return the display title for a category.

    ``None`` resolves to the General title. Tags without an entry in
    ``CATEGORY_TITLES`` fall back to their raw tag text.
    """
    if category is None:
        return DEFAULT_TITLE
    if isinstance(category, Category):
        return CATEGORY_TITLES.get(category, category.value)
    try:
        return CATEGORY_TITLES.get(Category(category), str(category))
    except ValueError:
        return str(category)


__all__ = [
    "Category",
    "CATEGORY_TITLES",
    "DEFAULT_TITLE",
    "format_category_title",
]

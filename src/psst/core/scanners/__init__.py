"""
psst scanners.

Each detector inspects a project root for one convention and returns Rules.
``DEFAULT_SCANNERS`` lists the detector classes in registration order, which
is also the order their rules appear in the output.
"""
from __future__ import annotations

from typing import Tuple, Type

from .ava import AvaScanner
from .base import BaseScanner, Scanner
from .go_version import GoVersionScanner
from .jest import JestScanner
from .linting import LintingScanner
from .manifest import DEPENDENCY_GROUPS, MANIFEST_NAME, PackageManifest
from .nextjs import NextjsScanner
from .node_version import NodeVersionScanner
from .package_manager import PackageManagerScanner
from .prettier import PrettierScanner
from .prisma import PrismaScanner
from .tailwind import TailwindScanner
from .testing_framework import TestingFrameworkScanner
from .xo import XoScanner

DEFAULT_SCANNERS: Tuple[Type[BaseScanner], ...] = (
    PackageManagerScanner,
    NodeVersionScanner,
    LintingScanner,
    XoScanner,
    TestingFrameworkScanner,
    JestScanner,
    AvaScanner,
    PrettierScanner,
    NextjsScanner,
    TailwindScanner,
    PrismaScanner,
    GoVersionScanner,
)

__all__ = [
    "AvaScanner",
    "BaseScanner",
    "DEFAULT_SCANNERS",
    "DEPENDENCY_GROUPS",
    "GoVersionScanner",
    "JestScanner",
    "LintingScanner",
    "MANIFEST_NAME",
    "NextjsScanner",
    "NodeVersionScanner",
    "PackageManagerScanner",
    "PackageManifest",
    "PrettierScanner",
    "PrismaScanner",
    "Scanner",
    "TailwindScanner",
    "TestingFrameworkScanner",
    "XoScanner",
]

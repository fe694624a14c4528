"""
Detect the Go toolchain version from ``go.mod`` and build constraints in sources.

Only the leading comment block of each ``.go`` file is inspected: build
constraints must appear before the ``package`` clause to take effect.
"""
from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path
from typing import List, Optional, Tuple

from psst.core.rules import Category, Rule, ScanResult
from psst.core.scanners.base import BaseScanner

SKIP_DIRS = frozenset({"vendor", "node_modules", ".git"})
HEADER_LINES = 10

_GO_DIRECTIVE = re.compile(r"^go\s+(\d+(?:\.\d+){1,2})", re.MULTILINE)
_LEGACY_BUILD = re.compile(r"^//\s*\+build\s+(.+)")
_GO_BUILD = re.compile(r"^//go:build\s+(.+)")

UPKEEP_RULE = "Keep Go version up to date with the latest stable release for security and performance improvements."


def parse_go_version(go_mod: str) -> Optional[str]:
    """Return the ``go`` directive version from go.mod content."""
    match = _GO_DIRECTIVE.search(go_mod)
    return match.group(1) if match else None


def _major_minor(version: str) -> Tuple[int, int]:
    parts = version.split(".")
    return int(parts[0]), int(parts[1])


def build_constraints(source: str) -> List[str]:
    """Build constraint expressions from the header of one Go source file."""
    found: List[str] = []
    for line in source.split("\n")[:HEADER_LINES]:
        stripped = line.strip()
        legacy = _LEGACY_BUILD.match(stripped)
        if legacy:
            found.append(f"+build {legacy.group(1)}")
        modern = _GO_BUILD.match(stripped)
        if modern:
            found.append(f"go:build {modern.group(1)}")
        if stripped and not stripped.startswith("//") and not stripped.startswith("package"):
            break
    return found


def find_go_files(root: Path) -> List[Path]:
    files: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        files.extend(Path(dirpath) / name for name in sorted(filenames) if name.endswith(".go"))
    return files


class GoVersionScanner(BaseScanner):
    name = "go_version"
    category = Category.GO

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for Go version requirements")

        go_mod = await self.read_text(Path(root_path) / "go.mod")
        if go_mod is None:
            return []

        rules: List[Rule] = []
        version = parse_go_version(go_mod)
        if version:
            rules.append(self.rule(f"Use Go version {version} as specified in go.mod."))
            rules.extend(self._version_rules(version))

        constraints = await self._collect_constraints(Path(root_path))
        if constraints:
            rules.append(
                self.rule(
                    f"Found build constraints: {', '.join(constraints)}. "
                    "Ensure compatibility across target Go versions."
                )
            )

        if rules:
            rules.append(self.rule(UPKEEP_RULE))
        return rules

    async def _collect_constraints(self, root: Path) -> List[str]:
        files = await asyncio.to_thread(find_go_files, root)
        sources = await asyncio.gather(*(self.read_text(path) for path in files))
        unique: List[str] = []
        for source in sources:
            for constraint in build_constraints(source or ""):
                if constraint not in unique:
                    unique.append(constraint)
        return unique

    def _version_rules(self, version: str) -> List[Rule]:
        major, minor = _major_minor(version)
        texts: List[str] = []
        if major == 1:
            if minor >= 21:
                texts.append("Go 1.21+ includes enhanced slices package and other performance improvements.")
            if minor >= 20:
                texts.append("Go 1.20+ supports workspace mode and improved fuzzing capabilities.")
            if minor >= 18:
                texts.append("Go 1.18+ supports generics. Consider using them for type-safe code.")
            if minor >= 16:
                texts.append("Go 1.16+ supports embed directive for static files.")
            if minor < 18:
                texts.append("Consider upgrading to Go 1.18+ to use generics and other modern features.")
        if major >= 1 and minor >= 11:
            texts.append("Use go mod for dependency management instead of GOPATH.")
        return [self.rule(text) for text in texts]

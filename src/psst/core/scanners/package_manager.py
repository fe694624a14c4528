"""Detect which package manager the project uses."""
from __future__ import annotations

from pathlib import Path

from psst.core.rules import Category, ScanResult
from psst.core.scanners.base import BaseScanner

# Checked in order when package.json has no packageManager field.
LOCK_FILES = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)


class PackageManagerScanner(BaseScanner):
    name = "package_manager"
    category = Category.PACKAGE_MANAGER

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for package manager")

        manifest = await self.load_manifest(root_path)
        declared = manifest.package_manager
        if declared:
            return [self.rule(f"Use {declared} as the package manager.")]

        for lock_file, manager in LOCK_FILES:
            if await self.exists(root_path, lock_file):
                self.logger.debug("Found %s", lock_file)
                return [self.rule(f"Use {manager} as the package manager.")]

        if manifest.exists:
            return [self.rule("Use npm as the package manager.")]
        return []

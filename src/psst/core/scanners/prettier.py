"""Detect Prettier as the code formatter."""
from __future__ import annotations

from pathlib import Path

from psst.core.rules import Category, ScanResult
from psst.core.scanners.base import BaseScanner

CONFIG_FILES = (
    ".prettierrc",
    ".prettierrc.json",
    ".prettierrc.yml",
    ".prettierrc.yaml",
    ".prettierrc.json5",
    ".prettierrc.js",
    ".prettierrc.cjs",
    "prettier.config.js",
    "prettier.config.cjs",
)
PACKAGE_JSON_LOCATION = "package.json (prettier key)"


class PrettierScanner(BaseScanner):
    name = "prettier"
    category = Category.PRETTIER

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for Prettier configuration")

        manifest = await self.load_manifest(root_path)
        if not manifest.has_dependency("prettier", ("dependencies", "devDependencies")):
            return []

        rules = [self.rule("Use Prettier for code formatting.")]
        location = await self.first_existing(root_path, CONFIG_FILES)
        if location is None and manifest.get("prettier"):
            location = PACKAGE_JSON_LOCATION
        if location:
            rules.append(self.rule(f"Prettier configuration found in: {location}"))
        return rules

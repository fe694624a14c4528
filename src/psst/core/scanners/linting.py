"""Detect the primary linting tool: xo, then eslint, then tslint."""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

from psst.core.rules import Category, ScanResult
from psst.core.scanners.base import BaseScanner

LINTERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("xo", ("xo.config.js", "xo.config.cjs", "xo.config.mjs", ".xo-config.js", ".xo-config.json")),
    (
        "eslint",
        (
            ".eslintrc",
            ".eslintrc.js",
            ".eslintrc.cjs",
            ".eslintrc.json",
            ".eslintrc.yml",
            ".eslintrc.yaml",
            "eslint.config.js",
            "eslint.config.mjs",
        ),
    ),
    ("tslint", ("tslint.json",)),
)


class LintingScanner(BaseScanner):
    name = "linting"
    category = Category.LINTING

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for linting tools")

        manifest = await self.load_manifest(root_path)
        for tool, config_files in LINTERS:
            if await self.first_existing(root_path, config_files) or manifest.has_dependency(tool):
                return [self.rule(f"Use {tool} for linting.")]
        return []

"""Detect XO linting and translate its options into rules."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping

from psst.core.rules import Category, Rule, ScanResult
from psst.core.scanners._options import load_tool_config
from psst.core.scanners.base import BaseScanner

CONFIG_FILES = (
    "xo.config.js",
    "xo.config.cjs",
    "xo.config.mjs",
    ".xo-config.js",
    ".xo-config",
    ".xo-config.json",
)


def _indentation(space: Any) -> str:
    if space is True:
        return "2 spaces"
    if isinstance(space, (int, float)) and not isinstance(space, bool) and space > 0:
        return f"{space:g} spaces"
    return "tabs"


class XoScanner(BaseScanner):
    name = "xo"
    category = Category.XO

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for XO configuration")

        manifest = await self.load_manifest(root_path)
        if not manifest.has_dependency("xo"):
            return []

        rules: List[Rule] = [self.rule("Use xo for linting.")]
        config_file = await self.first_existing(root_path, CONFIG_FILES)
        if config_file:
            rules.append(self.rule(f"XO configuration found in: {config_file}"))
        elif manifest.section("xo") is not None:
            rules.append(self.rule("XO configuration found in package.json"))

        options = await load_tool_config(self, root_path, config_file, manifest, "xo")
        if options:
            rules.extend(self._option_rules(options))
        return rules

    def _option_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        rules: List[Rule] = []
        if config.get("space") is not None:
            rules.append(self.rule(f"Use {_indentation(config['space'])} for indentation."))
        if config.get("semicolon") is not None:
            rules.append(self.rule("Use semicolons." if config["semicolon"] else "Do not use semicolons."))
        if config.get("prettier") is not None:
            rules.append(self.rule("Use XO with Prettier integration."))
        envs = config.get("envs")
        if isinstance(envs, list) and envs:
            rules.append(self.rule(f"XO configured for environments: {', '.join(str(e) for e in envs)}."))
        if config.get("typescript") is not None:
            rules.append(self.rule("Use XO with TypeScript support."))
        return rules

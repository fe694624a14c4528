"""
Detect Next.js and the routing and build options a project relies on.

The config file is read through the literal normalizer first. Next configs
commonly bind the object to a variable before exporting it, which the
normalizer cannot follow, so a textual scan of the source is the fallback.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, List, Mapping, Optional

from psst.core.config_literal import Unparseable, parse_config_text
from psst.core.rules import Category, Rule, ScanResult
from psst.core.scanners.base import BaseScanner

CONFIG_FILES = ("next.config.js", "next.config.ts", "next.config.mjs", "next.config.cjs")

_STRICT_MODE = re.compile(r"reactStrictMode\s*[:=]\s*true\b")
_STANDALONE = re.compile(r"""output\s*:\s*['"]standalone['"]""")
_APP_DIR = re.compile(r"appDir\s*:\s*true\b")


class NextjsScanner(BaseScanner):
    name = "nextjs"
    category = Category.NEXTJS

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for Next.js")

        config_file = await self.first_existing(root_path, CONFIG_FILES)
        if config_file is None:
            manifest = await self.load_manifest(root_path)
            if not manifest.has_dependency("next", ("dependencies", "devDependencies")):
                return []

        rules: List[Rule] = [self.rule("Use Next.js as the React framework.")]
        if config_file:
            source = await self.read_text(Path(root_path) / config_file)
            if source is not None:
                rules.extend(self._config_rules(config_file, source))

        if await self.exists(root_path, "app") or await self.exists(root_path, "src", "app"):
            rules.append(self.rule("Use the App Router directory structure in Next.js."))
        if await self.exists(root_path, "pages") or await self.exists(root_path, "src", "pages"):
            rules.append(self.rule("Use the Pages Router directory structure in Next.js."))
        return rules

    def _config_rules(self, filename: str, source: str) -> List[Rule]:
        parsed = parse_config_text(filename, source)
        if isinstance(parsed, Unparseable):
            self.logger.debug("Falling back to text scan of %s: %s", filename, parsed.reason)
            strict = bool(_STRICT_MODE.search(source))
            standalone = bool(_STANDALONE.search(source))
            i18n = "i18n" in source
            app_dir = bool(_APP_DIR.search(source))
        else:
            strict = parsed.get("reactStrictMode") is True
            standalone = parsed.get("output") == "standalone"
            i18n = "i18n" in parsed
            app_dir = _app_dir_enabled(parsed)

        rules: List[Rule] = []
        if strict:
            rules.append(self.rule("Use React strict mode in Next.js."))
        if standalone:
            rules.append(self.rule("Use standalone output mode in Next.js."))
        if i18n:
            rules.append(self.rule("Use internationalization (i18n) features in Next.js."))
        if app_dir:
            rules.append(self.rule("Use the App Router in Next.js."))
        return rules


def _app_dir_enabled(config: Mapping[str, Any]) -> bool:
    experimental: Optional[Any] = config.get("experimental")
    if isinstance(experimental, dict) and experimental.get("appDir") is True:
        return True
    return config.get("appDir") is True

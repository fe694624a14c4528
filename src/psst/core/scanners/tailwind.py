"""
Detect Tailwind CSS and summarize what its config customizes.

Tailwind configs routinely call ``require()`` for plugins, so they are
inspected as text rather than parsed.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import List

from psst.core.rules import Category, Rule, ScanResult
from psst.core.scanners.base import BaseScanner

CONFIG_FILES = ("tailwind.config.js", "tailwind.config.ts", "tailwind.config.cjs", "tailwind.config.mjs")

PLUGIN_RULES = (
    (
        "@tailwindcss/forms",
        "Using @tailwindcss/forms plugin. This provides better default styling for form elements.",
    ),
    (
        "@tailwindcss/typography",
        "Using @tailwindcss/typography plugin. Use prose classes for rich text content and blog posts.",
    ),
    (
        "@tailwindcss/aspect-ratio",
        "Using @tailwindcss/aspect-ratio plugin. "
        "Useful for maintaining consistent aspect ratios for images and videos.",
    ),
    (
        "@tailwindcss/line-clamp",
        "Using @tailwindcss/line-clamp plugin. Great for truncating text content to a specific number of lines.",
    ),
)

DARK_MODE_RULES = {
    "class": 'Using class-based dark mode. Toggle dark mode by adding/removing the "dark" class '
    "on the html or body element.",
    "media": "Using media query-based dark mode. Dark mode automatically follows system preference.",
    "selector": "Using selector-based dark mode. Define a custom selector for dark mode activation.",
}

_DARK_MODE = re.compile(r"""darkMode\s*:\s*['"](\w+)['"]""")


def _has_key(source: str, *keys: str) -> bool:
    return any(re.search(rf"\b{re.escape(key)}\s*:", source) for key in keys)


class TailwindScanner(BaseScanner):
    name = "tailwind"
    category = Category.TAILWIND

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for Tailwind CSS configuration")

        config_file = await self.first_existing(root_path, CONFIG_FILES)
        manifest = await self.load_manifest(root_path)
        has_dependency = manifest.has_dependency("tailwindcss")
        if not config_file and not has_dependency:
            return []

        rules: List[Rule] = []
        if has_dependency:
            rules.append(
                self.rule(
                    "Use Tailwind CSS utility classes for styling. "
                    "Keep custom CSS minimal and prefer utility-first approach."
                )
            )
        if config_file:
            self.logger.debug("Found Tailwind config file: %s", config_file)
            source = await self.read_text(Path(root_path) / config_file)
            if source:
                rules.extend(self._content_rules(source))
                rules.extend(self._theme_rules(source))
                rules.extend(self._plugin_rules(source))
                rules.extend(self._dark_mode_rules(source))
                rules.extend(self._purge_rules(source))
        return rules

    def _content_rules(self, source: str) -> List[Rule]:
        if not _has_key(source, "content", "purge"):
            return []
        rules = [
            self.rule(
                "Configure content paths properly to ensure all HTML, JS, and template files are scanned "
                "for class names. This enables proper CSS purging."
            )
        ]
        if "**/*.{html,js,ts,jsx,tsx}" in source:
            rules.append(
                self.rule(
                    "Using glob patterns for content scanning. "
                    "Ensure all file extensions used in your project are included."
                )
            )
        return rules

    def _theme_rules(self, source: str) -> List[Rule]:
        if not _has_key(source, "theme"):
            return []
        rules = [
            self.rule(
                "Customizing Tailwind theme. "
                "Use extend property to add custom values while preserving default theme values."
            )
        ]
        if _has_key(source, "extend"):
            rules.append(
                self.rule(
                    "Using theme.extend to add custom design tokens. "
                    "This preserves Tailwind defaults while adding project-specific values."
                )
            )
        if _has_key(source, "colors"):
            rules.append(
                self.rule(
                    "Customizing color palette. "
                    "Define semantic color names and consider accessibility when creating custom colors."
                )
            )
        if _has_key(source, "spacing", "padding", "margin"):
            rules.append(
                self.rule(
                    "Customizing spacing scale. "
                    "Maintain consistency with design system and use appropriate scale ratios."
                )
            )
        if _has_key(source, "fontFamily"):
            rules.append(
                self.rule(
                    "Customizing font families. Include appropriate font fallbacks and consider loading performance."
                )
            )
        return rules

    def _plugin_rules(self, source: str) -> List[Rule]:
        if not _has_key(source, "plugins"):
            return []
        rules = [
            self.rule(
                "Using Tailwind plugins. "
                "Keep plugins updated and only include those you actively use to minimize bundle size."
            )
        ]
        rules.extend(self.rule(text) for plugin, text in PLUGIN_RULES if plugin in source)
        return rules

    def _dark_mode_rules(self, source: str) -> List[Rule]:
        match = _DARK_MODE.search(source)
        if match and match.group(1) in DARK_MODE_RULES:
            return [self.rule(DARK_MODE_RULES[match.group(1)])]
        return []

    def _purge_rules(self, source: str) -> List[Rule]:
        rules: List[Rule] = []
        if _has_key(source, "purge") and not _has_key(source, "content"):
            rules.append(
                self.rule(
                    "Using legacy purge configuration. "
                    'Consider migrating to the newer "content" configuration for better performance.'
                )
            )
        if _has_key(source, "safelist"):
            rules.append(
                self.rule(
                    "Using safelist to prevent purging of specific classes. "
                    "Use sparingly and prefer dynamic class detection when possible."
                )
            )
        if _has_key(source, "blocklist"):
            rules.append(
                self.rule(
                    "Using blocklist to prevent specific classes from being generated. "
                    "Useful for removing unused default utilities."
                )
            )
        return rules

"""Detect AVA and describe how its configuration shapes the tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping

from psst.core.rules import Category, Rule, ScanResult
from psst.core.scanners._options import load_tool_config, split_negated, string_list
from psst.core.scanners.base import BaseScanner

CONFIG_FILES = ("ava.config.js", "ava.config.cjs", "ava.config.mjs")

BASE_RULE = (
    'Import test from "ava" and use descriptive test names. '
    "Use t.is() for equality, t.true()/t.false() for booleans, t.throws() for error testing."
)
DEFAULT_LAYOUT_RULE = (
    "Place test files in test/ directory or alongside source files with .test.js or .spec.js suffix."
)


class AvaScanner(BaseScanner):
    name = "ava"
    category = Category.AVA

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for AVA configuration")

        config_file = await self.first_existing(root_path, CONFIG_FILES)
        manifest = await self.load_manifest(root_path)
        has_dependency = manifest.has_dependency("ava", ("dependencies", "devDependencies"))
        if not config_file and not has_dependency:
            return []

        rules: List[Rule] = [self.rule(BASE_RULE)]
        if not has_dependency:
            return rules

        config = await load_tool_config(self, root_path, config_file, manifest, "ava")
        if not config:
            rules.append(self.rule(DEFAULT_LAYOUT_RULE))
            return rules

        rules.extend(self._file_rules(config))
        rules.extend(self._test_type_rules(config))
        if config.get("timeout"):
            rules.append(
                self.rule(
                    "Use async/await for asynchronous tests. AVA automatically handles promise-based tests. "
                    "Consider using t.timeout() for individual test timeouts."
                )
            )
        rules.extend(self._typescript_rules(config))
        requires = string_list(config.get("require"))
        if requires:
            rules.append(
                self.rule(
                    f"Setup files are automatically loaded: {', '.join(requires)}. "
                    "Use these for global test setup, mocks, or environment configuration."
                )
            )
        rules.extend(self._match_rules(config))
        if config.get("timeout") is not None:
            rules.append(
                self.rule(
                    f"Default test timeout is {config['timeout']}. "
                    "For longer-running tests, use t.timeout(ms) to override individual test timeouts."
                )
            )
        return rules

    def _file_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        if not isinstance(config.get("files"), list):
            return [self.rule(DEFAULT_LAYOUT_RULE)]
        include, exclude = split_negated(string_list(config["files"]))
        rules: List[Rule] = []
        if include:
            rules.append(
                self.rule(
                    f"Place test files in: {', '.join(include)}. "
                    "Use descriptive filenames ending with .test.js or .spec.js."
                )
            )
        if exclude:
            rules.append(
                self.rule(
                    f"Avoid placing test files in: {', '.join(exclude)}. "
                    "These directories are excluded from test discovery."
                )
            )
        return rules

    def _test_type_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        include, exclude = split_negated(string_list(config.get("match")))
        rules: List[Rule] = []
        if any("integration" in p for p in include):
            rules.append(
                self.rule(
                    "Write integration tests that test multiple components working together. "
                    'Use "integration" in test names or filenames.'
                )
            )
        if any("unit" in p for p in include):
            rules.append(
                self.rule(
                    "Write unit tests that test individual functions or components in isolation. "
                    'Use "unit" in test names or filenames.'
                )
            )
        if any("unit" in p for p in exclude):
            rules.append(
                self.rule(
                    "Focus on integration tests rather than unit tests. "
                    'Avoid "unit" in test names based on current configuration.'
                )
            )
        if any("e2e" in p or "end-to-end" in p for p in include):
            rules.append(
                self.rule(
                    "Write end-to-end tests that test complete user workflows. "
                    'Use "e2e" or "end-to-end" in test names.'
                )
            )
        return rules

    def _typescript_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        typescript = config.get("typescript")
        if not isinstance(typescript, dict):
            return []
        rules = [
            self.rule(
                'Write tests in TypeScript. Import type ExecutionContext from "ava" for test context typing: '
                'test("name", (t: ExecutionContext) => { ... }).'
            )
        ]
        if isinstance(typescript.get("rewritePaths"), dict):
            rules.append(
                self.rule(
                    "Import from source paths (e.g., src/) in tests - "
                    "AVA will automatically rewrite paths to compiled JavaScript."
                )
            )
        return rules

    def _match_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        include, exclude = split_negated(string_list(config.get("match")))
        rules: List[Rule] = []
        if include:
            rules.append(
                self.rule(
                    f"Tests must match patterns: {', '.join(include)}. "
                    "Include these keywords in test names to ensure they run."
                )
            )
        if exclude:
            rules.append(
                self.rule(
                    f"Avoid these patterns in test names: {', '.join(exclude)}. "
                    "Tests matching these patterns will be skipped."
                )
            )
        return rules

"""Detect Jest and describe how its configuration shapes the tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping

from psst.core.rules import Category, Rule, ScanResult
from psst.core.scanners._options import load_tool_config, string_list
from psst.core.scanners.base import BaseScanner

CONFIG_FILES = ("jest.config.js", "jest.config.ts", "jest.config.json", "jest.config.mjs", "jest.config.cjs")
DEPENDENCIES = ("jest", "@types/jest", "ts-jest", "babel-jest")

BASE_RULE = (
    "Use describe() blocks to group related tests, test() or it() for individual test cases. "
    "Use expect() assertions for test expectations."
)
DEFAULT_LAYOUT_RULE = (
    "Place test files in __tests__ directory or alongside source files with .test.js or .spec.js suffix."
)


class JestScanner(BaseScanner):
    name = "jest"
    category = Category.JEST

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for Jest configuration")

        config_file = await self.first_existing(root_path, CONFIG_FILES)
        manifest = await self.load_manifest(root_path)
        has_dependency = manifest.has_any_dependency(DEPENDENCIES)
        if not config_file and not has_dependency:
            return []

        rules: List[Rule] = [self.rule(BASE_RULE)]
        if not has_dependency:
            return rules

        config = await load_tool_config(self, root_path, config_file, manifest, "jest")
        if config:
            rules.extend(self._environment_rules(config))
            rules.extend(self._setup_rules(config))
            rules.extend(self._transform_rules(config))
            rules.extend(self._coverage_rules(config))
            rules.extend(self._module_mapper_rules(config))
            rules.extend(self._test_match_rules(config))
            rules.extend(self._timer_rules(config))
        else:
            rules.append(self.rule(DEFAULT_LAYOUT_RULE))
        return rules

    def _environment_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        env = config.get("testEnvironment")
        if not isinstance(env, str):
            return []
        if env == "node":
            return [self.rule("Tests run in Node.js environment. Use Node.js APIs and avoid browser-specific code.")]
        if env == "jsdom":
            return [
                self.rule("Tests run in jsdom environment. DOM APIs are available for testing React/Vue components.")
            ]
        if "happy-dom" in env:
            return [
                self.rule(
                    "Tests run in happy-dom environment. Fast DOM simulation available for component testing."
                )
            ]
        return []

    def _setup_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        rules: List[Rule] = []
        setup = string_list(config.get("setupFiles"))
        if setup:
            rules.append(
                self.rule(
                    f"Setup files are loaded before each test file: {', '.join(setup)}. "
                    "Use these for global test configuration and polyfills."
                )
            )
        after_env = string_list(config.get("setupFilesAfterEnv"))
        if after_env:
            rules.append(
                self.rule(
                    f"Setup files loaded after test environment: {', '.join(after_env)}. "
                    "Use these for test framework configuration like jest-dom matchers."
                )
            )
        return rules

    def _transform_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        transform = config.get("transform")
        if not isinstance(transform, dict):
            return []
        transformers = [v for v in transform.values() if isinstance(v, str)]
        rules: List[Rule] = []
        if any("ts-jest" in t or "babel-jest" in t for t in transformers):
            rules.append(
                self.rule(
                    "Write tests in TypeScript. Import types from @types/jest for better type safety: "
                    'import { expect, test, describe } from "@jest/globals".'
                )
            )
        if any("babel-jest" in t for t in transformers):
            rules.append(self.rule("Use modern JavaScript syntax in tests. Babel transforms ES6+ code for Jest."))
        return rules

    def _coverage_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        rules: List[Rule] = []
        if config.get("collectCoverage") is True:
            rules.append(
                self.rule("Code coverage is enabled. Write comprehensive tests to achieve good coverage metrics.")
            )
        if isinstance(config.get("coverageThreshold"), dict):
            rules.append(
                self.rule(
                    "Coverage thresholds are enforced. Ensure tests meet the configured coverage requirements."
                )
            )
        if isinstance(config.get("collectCoverageFrom"), list):
            sources = string_list(config["collectCoverageFrom"])
            rules.append(
                self.rule(f"Coverage collected from: {', '.join(sources)}. Focus testing efforts on these files.")
            )
        return rules

    def _module_mapper_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        mapper = config.get("moduleNameMapper")
        if not isinstance(mapper, dict):
            return []
        rules: List[Rule] = []
        keys = [str(k) for k in mapper]
        if keys:
            shown = ", ".join(keys[:3]) + ("..." if len(keys) > 3 else "")
            rules.append(self.rule(f"Module path mapping is configured. Use mapped paths in imports: {shown}."))
        if any("css" in k or "scss" in k or "sass" in k for k in keys):
            rules.append(
                self.rule(
                    "CSS/style imports are mocked in tests. "
                    "Focus on component logic rather than styling in unit tests."
                )
            )
        return rules

    def _test_match_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        rules: List[Rule] = []
        if isinstance(config.get("testMatch"), list):
            patterns = string_list(config["testMatch"])
            rules.append(
                self.rule(f"Test files must match patterns: {', '.join(patterns)}. Name test files accordingly.")
            )
        if isinstance(config.get("testPathIgnorePatterns"), list):
            ignored = string_list(config["testPathIgnorePatterns"])
            rules.append(
                self.rule(
                    f"Test paths to avoid: {', '.join(ignored)}. Don't place test files in these directories."
                )
            )
        return rules

    def _timer_rules(self, config: Mapping[str, Any]) -> List[Rule]:
        rules: List[Rule] = []
        if isinstance(config.get("fakeTimers"), dict):
            rules.append(
                self.rule(
                    "Fake timers are configured. Use jest.advanceTimersByTime() and jest.runAllTimers() "
                    "to control time in tests."
                )
            )
        timeout = config.get("testTimeout")
        if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout:
            rules.append(
                self.rule(
                    f"Test timeout is set to {timeout}ms. Use async/await for asynchronous tests "
                    "and ensure they complete within the timeout."
                )
            )
        return rules

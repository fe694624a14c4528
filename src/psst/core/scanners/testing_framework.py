"""
Detect the testing frameworks a project uses.

Evidence comes from three places, in this order: framework config files,
``package.json`` dependencies and the commands of ``test*`` scripts. The
main framework is picked by priority; every other detection is reported as
a supporting tool.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from psst.core.rules import Category, ScanResult
from psst.core.scanners.base import BaseScanner
from psst.core.scanners.manifest import PackageManifest


@dataclass(frozen=True)
class Framework:
    name: str
    config_files: Tuple[str, ...] = ()
    # Assertion and helper libraries never show up in scripts.
    in_scripts: bool = True


FRAMEWORKS: Tuple[Framework, ...] = (
    Framework("jest", ("jest.config.js", "jest.config.ts", "jest.config.json", "jest.setup.js", "jest.setup.ts")),
    Framework("mocha", (".mocharc.js", ".mocharc.json", ".mocharc.yml")),
    Framework("vitest", ("vitest.config.js", "vitest.config.ts")),
    Framework("ava", ("ava.config.js", "ava.config.cjs")),
    Framework("jasmine", ("jasmine.json", "spec/support/jasmine.json")),
    Framework("karma", ("karma.conf.js", "karma.conf.ts")),
    Framework("tape"),
    Framework("chai", in_scripts=False),
    Framework("qunit", ("qunit.config.js",)),
    Framework("cypress", ("cypress.config.js", "cypress.config.ts", "cypress.json")),
    Framework("playwright", ("playwright.config.js", "playwright.config.ts")),
    Framework("puppeteer"),
    Framework("supertest", in_scripts=False),
    Framework("testing-library", in_scripts=False),
    Framework("enzyme", in_scripts=False),
    Framework("storybook-testing", (".storybook/test-runner.js",)),
)

MAIN_FRAMEWORK_PRIORITY = ("jest", "vitest", "mocha", "ava", "jasmine", "tape", "qunit")

_TS_JEST = re.compile(r"ts-jest", re.IGNORECASE)
_NODE_TEST = re.compile(r"tsx?-node-test", re.IGNORECASE)


def main_framework(detected: List[str]) -> Optional[str]:
    """Highest-priority unit test runner, else the first detection."""
    for name in MAIN_FRAMEWORK_PRIORITY:
        if name in detected:
            return name
    return detected[0] if detected else None


class TestingFrameworkScanner(BaseScanner):
    name = "testing_framework"
    category = Category.TESTING

    # Not a test class, despite the name.
    __test__ = False

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for testing frameworks")

        detected: List[str] = []

        def add(name: str) -> None:
            if name not in detected:
                detected.append(name)

        for framework in FRAMEWORKS:
            found = await self.first_existing(root_path, framework.config_files)
            if found:
                self.logger.debug("Found %s config file: %s", framework.name, found)
                add(framework.name)

        manifest = await self.load_manifest(root_path)
        for framework in FRAMEWORKS:
            if manifest.has_dependency(framework.name):
                add(framework.name)

        for name in self._detect_from_scripts(manifest):
            add(name)

        if not detected:
            return []

        main = main_framework(detected)
        rules = [self.rule(f"Use {main} testing framework.")]
        rules.extend(self.rule(f"Detected testing tool: {name}") for name in detected if name != main)
        return rules

    def _detect_from_scripts(self, manifest: PackageManifest) -> List[str]:
        found: List[str] = []
        for key, command in manifest.scripts.items():
            if not key.startswith("test"):
                continue
            self.logger.debug("Found test script: %s -> %s", key, command)
            for framework in FRAMEWORKS:
                if framework.in_scripts and framework.name in command:
                    found.append(framework.name)
            if _TS_JEST.search(command):
                found.append("jest")
            if _NODE_TEST.search(command):
                found.append("node:test")
        return found

"""Tests for the testing framework, Jest and AVA detectors."""
from __future__ import annotations

from psst.core.rules import Category
from psst.core.scanners import AvaScanner, JestScanner, TestingFrameworkScanner
from psst.core.scanners.jest import BASE_RULE as JEST_BASE_RULE
from psst.core.scanners.testing_framework import main_framework

JEST_CONFIG = """// Jest configuration file
module.exports = {
  preset: 'ts-jest',
  testEnvironment: 'jsdom',
  collectCoverage: true,
  coverageThreshold: {
    global: {
      branches: 85,
    }
  },
  setupFilesAfterEnv: ['<rootDir>/src/test-setup.ts'],
  moduleNameMapper: {
    '^@/(.*)$': '<rootDir>/src/$1',
    '\\\\.(css|less|scss|sass)$': 'identity-obj-proxy'
  },
  transform: {
    '^.+\\\\.(ts|tsx)$': 'ts-jest',
  },
  fakeTimers: {
    enableGlobally: true
  },
  testTimeout: 10000
};
"""

AVA_CONFIG = """export default {
  files: [
    'test/unit.test.js',
    '!test/fixtures'
  ],
  concurrency: false, // Run tests serially
  timeout: '10s',
  require: [
    '@babel/register'
  ],
  match: [
    '*unit*'
  ],
  verbose: false
};
"""


class TestTestingFrameworkScanner:
    def test_main_framework_by_priority(self, project_dir, run_scan) -> None:
        project_dir.write("vitest.config.ts", "export default {}")
        project_dir.package_json({"devDependencies": {"jest": "^29", "chai": "^4"}})
        rules = run_scan(TestingFrameworkScanner(), project_dir.root)
        assert [r.text for r in rules] == [
            "Use jest testing framework.",
            "Detected testing tool: vitest",
            "Detected testing tool: chai",
        ]
        assert {r.category for r in rules} == {Category.TESTING}

    def test_detects_from_test_scripts(self, project_dir, run_scan) -> None:
        project_dir.package_json({"scripts": {"test": "ava --verbose", "test:e2e": "playwright test"}})
        texts = [r.text for r in run_scan(TestingFrameworkScanner(), project_dir.root)]
        assert texts == ["Use ava testing framework.", "Detected testing tool: playwright"]

    def test_ts_jest_script_implies_jest(self, project_dir, run_scan) -> None:
        project_dir.package_json({"scripts": {"test": "node --require ts-jest run"}})
        texts = [r.text for r in run_scan(TestingFrameworkScanner(), project_dir.root)]
        assert texts == ["Use jest testing framework."]

    def test_non_runner_falls_back_to_first_detection(self) -> None:
        assert main_framework(["cypress", "playwright"]) == "cypress"
        assert main_framework([]) is None

    def test_nothing_detected(self, project_dir, run_scan) -> None:
        project_dir.mkdir("test")
        assert run_scan(TestingFrameworkScanner(), project_dir.root) == []


class TestJestScanner:
    def test_config_file_rules(self, project_dir, run_scan) -> None:
        project_dir.write("jest.config.js", JEST_CONFIG)
        project_dir.package_json({"devDependencies": {"jest": "^29.7.0", "ts-jest": "^29"}})
        rules = run_scan(JestScanner(), project_dir.root)
        texts = [r.text for r in rules]
        assert texts[0] == JEST_BASE_RULE
        assert texts[1:] == [
            "Tests run in jsdom environment. DOM APIs are available for testing React/Vue components.",
            "Setup files loaded after test environment: <rootDir>/src/test-setup.ts. "
            "Use these for test framework configuration like jest-dom matchers.",
            "Write tests in TypeScript. Import types from @types/jest for better type safety: "
            'import { expect, test, describe } from "@jest/globals".',
            "Code coverage is enabled. Write comprehensive tests to achieve good coverage metrics.",
            "Coverage thresholds are enforced. Ensure tests meet the configured coverage requirements.",
            "Module path mapping is configured. Use mapped paths in imports: ^@/(.*)$, \\.(css|less|scss|sass)$.",
            "CSS/style imports are mocked in tests. Focus on component logic rather than styling in unit tests.",
            "Fake timers are configured. Use jest.advanceTimersByTime() and jest.runAllTimers() "
            "to control time in tests.",
            "Test timeout is set to 10000ms. Use async/await for asynchronous tests "
            "and ensure they complete within the timeout.",
        ]
        assert {r.category for r in rules} == {Category.JEST}

    def test_package_json_config(self, project_dir, run_scan) -> None:
        project_dir.package_json(
            {"devDependencies": {"jest": "^29"}, "jest": {"testEnvironment": "node", "testMatch": ["**/*.spec.js"]}}
        )
        texts = [r.text for r in run_scan(JestScanner(), project_dir.root)]
        assert texts[1:] == [
            "Tests run in Node.js environment. Use Node.js APIs and avoid browser-specific code.",
            "Test files must match patterns: **/*.spec.js. Name test files accordingly.",
        ]

    def test_dependency_without_config(self, project_dir, run_scan) -> None:
        project_dir.package_json({"devDependencies": {"@types/jest": "^29"}})
        texts = [r.text for r in run_scan(JestScanner(), project_dir.root)]
        assert texts == [
            JEST_BASE_RULE,
            "Place test files in __tests__ directory or alongside source files with .test.js or .spec.js suffix.",
        ]

    def test_config_file_without_dependency(self, project_dir, run_scan) -> None:
        project_dir.write("jest.config.json", '{"testEnvironment": "node"}')
        assert [r.text for r in run_scan(JestScanner(), project_dir.root)] == [JEST_BASE_RULE]

    def test_absent(self, project_dir, run_scan) -> None:
        project_dir.package_json({"devDependencies": {"mocha": "*"}})
        assert run_scan(JestScanner(), project_dir.root) == []


class TestAvaScanner:
    def test_config_file_rules(self, project_dir, run_scan) -> None:
        project_dir.write("ava.config.js", AVA_CONFIG)
        project_dir.package_json({"devDependencies": {"ava": "^6"}})
        rules = run_scan(AvaScanner(), project_dir.root)
        texts = [r.text for r in rules]
        assert texts[1:] == [
            "Place test files in: test/unit.test.js. Use descriptive filenames ending with .test.js or .spec.js.",
            "Avoid placing test files in: test/fixtures. These directories are excluded from test discovery.",
            "Write unit tests that test individual functions or components in isolation. "
            'Use "unit" in test names or filenames.',
            "Use async/await for asynchronous tests. AVA automatically handles promise-based tests. "
            "Consider using t.timeout() for individual test timeouts.",
            "Setup files are automatically loaded: @babel/register. "
            "Use these for global test setup, mocks, or environment configuration.",
            "Tests must match patterns: *unit*. Include these keywords in test names to ensure they run.",
            "Default test timeout is 10s. For longer-running tests, use t.timeout(ms) "
            "to override individual test timeouts.",
        ]
        assert {r.category for r in rules} == {Category.AVA}

    def test_typescript_options_from_package_json(self, project_dir, run_scan) -> None:
        project_dir.package_json(
            {
                "devDependencies": {"ava": "^6"},
                "ava": {"files": ["test/**/*"], "typescript": {"rewritePaths": {"src/": "build/"}}},
            }
        )
        texts = [r.text for r in run_scan(AvaScanner(), project_dir.root)]
        assert any(t.startswith("Write tests in TypeScript.") for t in texts)
        assert any(t.startswith("Import from source paths") for t in texts)

    def test_dependency_without_config(self, project_dir, run_scan) -> None:
        project_dir.package_json({"devDependencies": {"ava": "^6"}})
        texts = [r.text for r in run_scan(AvaScanner(), project_dir.root)]
        assert texts[-1] == (
            "Place test files in test/ directory or alongside source files with .test.js or .spec.js suffix."
        )
        assert len(texts) == 2

    def test_absent(self, project_dir, run_scan) -> None:
        assert run_scan(AvaScanner(), project_dir.root) == []

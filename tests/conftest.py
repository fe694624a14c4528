import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'psst'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from psst.core.stdlib_logging import reset_logging_for_tests  # noqa: E402
from psst.data import clear_caches  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_psst_state(monkeypatch: pytest.MonkeyPatch):
    """Drop PSST_* env overrides and reset logging/data caches around each test."""
    import os

    for key in list(os.environ):
        if key.startswith("PSST_"):
            monkeypatch.delenv(key, raising=False)
    clear_caches()
    yield
    reset_logging_for_tests()
    clear_caches()


class ProjectBuilder:
    """Write a throwaway project tree for scanner tests."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(self, relpath: str, content: str = "") -> Path:
        path = self.root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def package_json(self, data: Dict[str, Any]) -> Path:
        return self.write("package.json", json.dumps(data, indent=2))

    def mkdir(self, relpath: str) -> Path:
        path = self.root / relpath
        path.mkdir(parents=True, exist_ok=True)
        return path


@pytest.fixture
def project_dir(tmp_path: Path) -> ProjectBuilder:
    """An empty project root with helpers for writing files into it."""
    root = tmp_path / "project"
    root.mkdir()
    return ProjectBuilder(root)


@pytest.fixture
def run_scan() -> Callable:
    """Run one scanner synchronously: ``run_scan(scanner, root)``."""
    import asyncio

    def _run(scanner, root: Path):
        return asyncio.run(scanner.scan(Path(root)))

    return _run

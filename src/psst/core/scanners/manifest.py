"""Reader for a project's ``package.json`` dependency manifest."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"
DEPENDENCY_GROUPS: Tuple[str, ...] = ("dependencies", "devDependencies", "peerDependencies")


@dataclass(frozen=True)
class PackageManifest:
    """Parsed ``package.json`` (empty when missing or unreadable).

    Attributes:
        path: Location the manifest was read from
        data: Parsed top-level object ({} when absent/invalid)
        exists: Whether the file was present on disk
        error: Read/parse error message, if the file existed but was unusable
    """

    path: Path
    data: Mapping[str, Any] = field(default_factory=dict)
    exists: bool = False
    error: Optional[str] = None

    @classmethod
    def load(cls, root: Path) -> "PackageManifest":
        path = Path(root) / MANIFEST_NAME
        if not path.is_file():
            return cls(path=path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return cls(path=path, exists=True, error=str(exc))
        if not isinstance(raw, dict):
            logger.warning("Ignoring %s: top-level value is not an object", path)
            return cls(path=path, exists=True, error="top-level value is not an object")
        return cls(path=path, data=raw, exists=True)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def section(self, key: str) -> Optional[Dict[str, Any]]:
        """Return a dict-valued top-level field, or None."""
        value = self.data.get(key)
        return value if isinstance(value, dict) else None

    def has_dependency(self, name: str, groups: Iterable[str] = DEPENDENCY_GROUPS) -> bool:
        """True when ``name`` is declared in any of the given dependency groups."""
        for group in groups:
            deps = self.section(group)
            if deps is not None and name in deps:
                return True
        return False

    def has_any_dependency(self, names: Iterable[str], groups: Iterable[str] = DEPENDENCY_GROUPS) -> bool:
        groups = tuple(groups)
        return any(self.has_dependency(n, groups) for n in names)

    @property
    def package_manager(self) -> Optional[str]:
        """Package manager name from the ``packageManager`` field (``pnpm@9.1.0`` -> ``pnpm``)."""
        value = self.data.get("packageManager")
        if isinstance(value, str) and value.strip():
            return value.strip().split("@")[0] or None
        return None

    @property
    def engines(self) -> Dict[str, Any]:
        return self.section("engines") or {}

    @property
    def scripts(self) -> Dict[str, str]:
        scripts = self.section("scripts") or {}
        return {str(k): str(v) for k, v in scripts.items() if isinstance(v, str)}


__all__ = ["DEPENDENCY_GROUPS", "MANIFEST_NAME", "PackageManifest"]

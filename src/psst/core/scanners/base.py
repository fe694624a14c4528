"""
Scanner contract shared by every detector.

A scanner inspects a project root for one convention and returns an ordered
list of Rules. Scanners are read-only and idempotent. Expected absence of
their target yields ``[]``; unexpected I/O failures are logged and degrade to
an empty or partial result instead of propagating.
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional, Protocol, Tuple, Union, runtime_checkable

from psst.core.config_literal import ConfigLiteral, Unparseable, read_config_file
from psst.core.rules import Category, Rule, ScanResult
from psst.core.scanners.manifest import PackageManifest


def _first_existing(root: Path, names: Tuple[str, ...]) -> Optional[str]:
    for name in names:
        if (root / name).exists():
            return name
    return None


@runtime_checkable
class Scanner(Protocol):
    """Capability implemented by every detector."""

    name: str

    async def scan(self, root_path: Path) -> ScanResult:
        ...


class BaseScanner(ABC):
    """Convenience base class: logger, rule factory and non-raising file helpers."""

    name: str = ""
    category: Optional[Category] = None

    def __init__(self) -> None:
        if not self.name:
            self.name = type(self).__name__
        self.logger = logging.getLogger(f"psst.scanners.{self.name}")

    @abstractmethod
    async def scan(self, root_path: Path) -> ScanResult:
        """Inspect ``root_path`` and return the detected rules in order."""

    def rule(self, text: str, category: Optional[Category] = None) -> Rule:
        return Rule(text=text, category=category or self.category)

    # ---- filesystem helpers -----------------------------------------------------

    async def exists(self, root: Path, *parts: str) -> bool:
        return await asyncio.to_thread(Path(root, *parts).exists)

    async def first_existing(self, root: Path, names: Iterable[str]) -> Optional[str]:
        """Return the first of ``names`` that exists under ``root``."""
        return await asyncio.to_thread(_first_existing, Path(root), tuple(names))

    async def read_text(self, path: Path) -> Optional[str]:
        """Read a UTF-8 file off the event loop; None (logged) when unreadable."""
        try:
            return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.error("Error reading %s: %s", path, exc)
            return None

    async def load_manifest(self, root: Path) -> PackageManifest:
        return await asyncio.to_thread(PackageManifest.load, Path(root))

    async def load_config_literal(self, path: Path) -> Union[ConfigLiteral, Unparseable]:
        """Parse a JSON or JS/TS config file; logs at debug level when unparseable."""
        result = await asyncio.to_thread(read_config_file, Path(path))
        if isinstance(result, Unparseable):
            self.logger.debug("Could not parse %s: %s", path, result.reason)
        return result


__all__ = ["BaseScanner", "Scanner"]

"""Scan orchestration.

The orchestrator runs every registered scanner against one project root and
merges their results:

- scanners run concurrently (one asyncio task each) or sequentially,
- a scanner that raises or exceeds the timeout contributes nothing, and the
  failure is logged instead of aborting the scan,
- items that are not Rules are dropped with a warning,
- the merged list follows registration order regardless of completion order.
"""
from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from psst.core.rules import Rule
from psst.core.scanners import DEFAULT_SCANNERS
from psst.core.scanners.base import Scanner

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """Fault-isolated, order-preserving fan-out over a scanner registry."""

    def __init__(
        self,
        scanners: Optional[Iterable[Scanner]] = None,
        *,
        parallel: bool = True,
        timeout: Optional[float] = None,
    ) -> None:
        self._scanners: List[Scanner] = list(scanners or [])
        self.parallel = parallel
        # 0 and None both mean "no limit".
        self.timeout = timeout or None

    @property
    def scanners(self) -> Tuple[Scanner, ...]:
        return tuple(self._scanners)

    def register(self, scanner: Scanner) -> None:
        self._scanners.append(scanner)

    async def _run_one(self, scanner: Scanner, root_path: Path) -> List[Rule]:
        name = getattr(scanner, "name", type(scanner).__name__)
        start = time.perf_counter()
        try:
            if self.timeout is not None:
                result = await asyncio.wait_for(scanner.scan(root_path), timeout=self.timeout)
            else:
                result = await scanner.scan(root_path)
        except asyncio.TimeoutError:
            logger.error("Scanner %s timed out after %ss", name, self.timeout)
            return []
        except Exception as exc:
            logger.error("Scanner %s failed: %s", name, exc, exc_info=logger.isEnabledFor(logging.DEBUG))
            return []

        if result is None:
            result = []
        if not isinstance(result, (list, tuple)):
            logger.error("Scanner %s returned %s instead of a list of rules", name, type(result).__name__)
            return []

        rules: List[Rule] = []
        for item in result:
            if isinstance(item, Rule):
                rules.append(item)
            else:
                logger.warning("Scanner %s returned a non-Rule item; dropping %r", name, item)
        logger.debug("Scanner %s produced %d rule(s) in %.3fs", name, len(rules), time.perf_counter() - start)
        return rules

    async def scan(self, root_path: Path) -> List[Rule]:
        """Run every registered scanner and concatenate their rules."""
        root = Path(root_path)
        logger.info("Scanning %s with %d scanner(s)", root, len(self._scanners))

        if self.parallel:
            per_scanner = await asyncio.gather(*(self._run_one(s, root) for s in self._scanners))
        else:
            per_scanner = [await self._run_one(s, root) for s in self._scanners]

        merged: List[Rule] = []
        for rules in per_scanner:
            merged.extend(rules)
        logger.info("Scan finished with %d rule(s)", len(merged))
        return merged

    def run_all(self, root_path: Path) -> List[Rule]:
        """Synchronous entry point: ``asyncio.run(self.scan(root_path))``."""
        return asyncio.run(self.scan(root_path))


def default_orchestrator(config: Optional[Dict[str, Any]] = None) -> ScanOrchestrator:
    """Build an orchestrator over the built-in detectors.

    Honors ``scan.parallel``, ``scan.timeout_seconds`` and ``scan.disabled``.
    """
    scan_cfg = (config or {}).get("scan", {}) or {}
    disabled = set(scan_cfg.get("disabled") or [])
    orchestrator = ScanOrchestrator(
        parallel=bool(scan_cfg.get("parallel", True)),
        timeout=scan_cfg.get("timeout_seconds"),
    )
    for scanner_cls in DEFAULT_SCANNERS:
        if scanner_cls.name in disabled:
            logger.debug("Scanner %s disabled by configuration", scanner_cls.name)
            continue
        orchestrator.register(scanner_cls())
    return orchestrator


__all__ = ["ScanOrchestrator", "default_orchestrator"]

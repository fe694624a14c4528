"""Small helpers shared by detectors that read tool configuration objects."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from psst.core.config_literal import Unparseable
from psst.core.scanners.base import BaseScanner
from psst.core.scanners.manifest import PackageManifest


def string_list(value: Any) -> List[str]:
    """``value`` as a list of strings ([] when it is not a list)."""
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def split_negated(patterns: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split glob patterns into (include, exclude); excludes lose their ``!``."""
    include = [p for p in patterns if not p.startswith("!")]
    exclude = [p[1:] for p in patterns if p.startswith("!")]
    return include, exclude


async def load_tool_config(
    scanner: BaseScanner,
    root_path: Path,
    config_file: Optional[str],
    manifest: PackageManifest,
    manifest_key: str,
) -> Optional[Mapping[str, Any]]:
    """Tool options from ``config_file`` when parseable, else from ``package.json``."""
    if config_file:
        parsed = await scanner.load_config_literal(Path(root_path) / config_file)
        if not isinstance(parsed, Unparseable):
            return parsed
    return manifest.section(manifest_key)


__all__ = ["load_tool_config", "split_negated", "string_list"]

"""Detect the Node.js version a project targets (.nvmrc, then engines.node)."""
from __future__ import annotations

from pathlib import Path

from psst.core.rules import Category, ScanResult
from psst.core.scanners.base import BaseScanner


class NodeVersionScanner(BaseScanner):
    name = "node_version"
    category = Category.NODE_VERSION

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for Node.js version")

        nvmrc = await self.read_text(Path(root_path) / ".nvmrc")
        if nvmrc is not None and nvmrc.strip():
            version = nvmrc.strip()
            return [self.rule(f"Use the nodejs version specified in the .nvmrc file ({version}).")]

        manifest = await self.load_manifest(root_path)
        if not manifest.exists:
            return []

        node = manifest.engines.get("node")
        if node is not None:
            return [self.rule(f"Use Node.js version {node} as specified in package.json.")]

        return [self.rule("Use the latest LTS version of Node.js.")]

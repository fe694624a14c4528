"""Tests for the package.json reader."""
from __future__ import annotations

import logging

from psst.core.scanners.manifest import PackageManifest


def test_missing_manifest_is_empty(project_dir) -> None:
    manifest = PackageManifest.load(project_dir.root)
    assert manifest.exists is False
    assert manifest.error is None
    assert manifest.data == {}
    assert manifest.has_dependency("react") is False
    assert manifest.package_manager is None


def test_dependency_lookup_across_groups(project_dir) -> None:
    project_dir.package_json(
        {
            "dependencies": {"next": "14.0.0"},
            "devDependencies": {"jest": "^29.0.0"},
            "peerDependencies": {"react": ">=18"},
        }
    )
    manifest = PackageManifest.load(project_dir.root)
    assert manifest.has_dependency("next")
    assert manifest.has_dependency("jest")
    assert manifest.has_dependency("react")
    assert not manifest.has_dependency("react", ("dependencies", "devDependencies"))
    assert manifest.has_any_dependency(["vue", "jest"])


def test_package_manager_field_strips_version(project_dir) -> None:
    project_dir.package_json({"packageManager": "pnpm@9.1.0"})
    assert PackageManifest.load(project_dir.root).package_manager == "pnpm"


def test_invalid_json_degrades_with_warning(project_dir, caplog) -> None:
    project_dir.write("package.json", "{ not json")
    with caplog.at_level(logging.WARNING, logger="psst"):
        manifest = PackageManifest.load(project_dir.root)
    assert manifest.exists is True
    assert manifest.error
    assert manifest.data == {}
    assert "Could not read" in caplog.text


def test_non_object_manifest_is_ignored(project_dir) -> None:
    project_dir.write("package.json", "[1, 2, 3]")
    manifest = PackageManifest.load(project_dir.root)
    assert manifest.exists is True
    assert manifest.data == {}


def test_scripts_and_engines(project_dir) -> None:
    project_dir.package_json({"scripts": {"test": "ava", "build": 3}, "engines": {"node": ">=18"}})
    manifest = PackageManifest.load(project_dir.root)
    assert manifest.scripts == {"test": "ava"}
    assert manifest.engines == {"node": ">=18"}

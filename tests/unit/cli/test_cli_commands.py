"""Tests for the psst command line."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from psst import __version__
from psst.cli._dispatcher import build_parser, discover_commands, main
from psst.cli.commands.scan import BANNER_END, BANNER_START
from psst.core.rendering import END_MARKER, START_MARKER


@pytest.fixture
def node_project(tmp_path: Path) -> Path:
    root = tmp_path / "app"
    root.mkdir()
    (root / "yarn.lock").write_text("", encoding="utf-8")
    (root / "package.json").write_text(
        json.dumps({"engines": {"node": ">=18"}, "devDependencies": {"eslint": "^8.0.0"}}),
        encoding="utf-8",
    )
    return root


def test_discovers_commands() -> None:
    assert {"scan", "categories"} <= set(discover_commands())


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "usage: psst" in capsys.readouterr().out


def test_categories_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["categories", "--json"]) == 0
    rows = json.loads(capsys.readouterr().out)["categories"]
    assert {"category": "nextjs", "title": "Next.js"} in rows
    assert rows[0] == {"category": "general", "title": "General"}


def test_categories_text(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["categories"]) == 0
    out = capsys.readouterr().out
    assert "package_manager  Package Manager" in out


def test_scan_prints_framed_markdown(node_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(node_project)]) == 0
    out = capsys.readouterr().out
    assert BANNER_START in out and BANNER_END in out
    assert "## Package Manager\n\n- Use yarn as the package manager." in out
    assert "- Use Node.js version >=18 as specified in package.json." in out


def test_scan_flat_and_quiet(node_project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_file = tmp_path / "out" / "rules.md"
    assert main(["scan", str(node_project), "--no-header", "-q", "-o", str(out_file)]) == 0
    assert capsys.readouterr().out == ""
    written = out_file.read_text(encoding="utf-8")
    assert written.startswith("- Use yarn as the package manager.")
    assert "##" not in written
    assert written.endswith("\n")


def test_scan_injects_into_file(node_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = node_project / "README.md"
    target.write_text(f"# App\n\n{START_MARKER}\n{END_MARKER}\n\nMore docs.\n", encoding="utf-8")
    assert main(["scan", str(node_project), "-f", str(target), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["injection"] == {"path": str(target.resolve()), "action": "replaced", "changed": True}
    assert payload["output"] is None
    text = target.read_text(encoding="utf-8")
    assert text.startswith(f"# App\n\n{START_MARKER}\n## ")
    assert text.endswith(f"{END_MARKER}\n\nMore docs.\n")

    assert main(["scan", str(node_project), "-f", str(target), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["injection"]["action"] == "unchanged"


def test_scan_json_payload(node_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(node_project), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["mode"] == "categorized"
    assert payload["written"] == []
    assert {"text": "Use yarn as the package manager.", "category": "package_manager",
            "title": "Package Manager"} in payload["rules"]


def test_scan_writes_document_to_output_dir(
    node_project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_dir = tmp_path / ".github"
    assert main(["scan", str(node_project), "--output-dir", str(out_dir), "-q"]) == 0
    doc = (out_dir / "copilot-instructions.md").read_text(encoding="utf-8")
    assert doc.startswith("# GitHub Copilot Instructions\n\nWhen generating code")
    assert "## Linting" in doc


def test_scan_respects_project_config(node_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (node_project / ".psst.yaml").write_text(
        "render:\n  mode: flat\nscan:\n  disabled: [node_version]\n", encoding="utf-8"
    )
    assert main(["scan", str(node_project), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["mode"] == "flat"
    assert all(r["category"] != "node_version" for r in payload["rules"])
    assert payload["output"].startswith("- ")


def test_scan_missing_directory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(tmp_path / "nope")]) == 1
    assert "Error: Not a directory" in capsys.readouterr().err


def test_scan_missing_injection_target_reports_json_error(
    node_project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    target = node_project / "absent.md"
    assert main(["scan", str(node_project), "-f", str(target), "--json", "-q"]) == 1
    error = json.loads(capsys.readouterr().err)
    assert error["error"] == "InjectionTargetError"
    assert error["code"] == "InjectionTargetError"
    assert error["context"] == {"path": str(target.resolve())}
    assert not target.exists()

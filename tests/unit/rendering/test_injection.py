"""Tests for splicing rendered rules between sentinel markers."""
from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

import pytest

from psst.core.exceptions import InjectionTargetError, PsstError
from psst.core.rendering import END_MARKER, START_MARKER, RenderMode, inject, inject_file
from psst.core.rules import Category, Rule

RULES = [
    Rule("Use npm as the package manager.", Category.PACKAGE_MANAGER),
    Rule("Use eslint for linting.", Category.LINTING),
]

DOCUMENT = f"""# Project notes

Hand-written intro.

{START_MARKER}
stale content
{END_MARKER}

Footer stays.
"""


class TestInject:
    def test_replaces_only_the_marked_region(self) -> None:
        result = inject(DOCUMENT, RULES)
        assert result.changed is True
        assert result.action == "replaced"
        head, rest = result.text.split(START_MARKER)
        block, tail = rest.split(END_MARKER)
        assert head == DOCUMENT.split(START_MARKER)[0]
        assert tail == DOCUMENT.split(END_MARKER)[1]
        assert block == (
            "\n## Linting\n\n- Use eslint for linting.\n\n"
            "## Package Manager\n\n- Use npm as the package manager.\n"
        )
        assert "stale content" not in result.text

    def test_second_injection_is_a_no_op(self) -> None:
        once = inject(DOCUMENT, RULES).text
        again = inject(once, RULES)
        assert again.changed is False
        assert again.action == "unchanged"
        assert again.text == once

    def test_flat_mode(self) -> None:
        text = inject(DOCUMENT, RULES, RenderMode.FLAT).text
        assert "##" not in text.split(START_MARKER)[1].split(END_MARKER)[0]

    def test_empty_rules_clear_the_region(self) -> None:
        text = inject(DOCUMENT, []).text
        assert f"{START_MARKER}\n\n{END_MARKER}" in text

    @pytest.mark.parametrize(
        "text",
        [
            "no markers at all\n",
            f"{START_MARKER}\nonly a start\n",
            f"only an end\n{END_MARKER}\n",
            f"{END_MARKER}\nreversed\n{START_MARKER}\n",
        ],
    )
    def test_missing_markers_leave_text_untouched(self, text: str, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="psst.core.rendering.injection"):
            result = inject(text, RULES)
        assert result.text == text
        assert result.changed is False
        assert result.action == "missing-markers"
        assert any("not found" in rec.getMessage() for rec in caplog.records)

    def test_custom_markers(self) -> None:
        text = "a\n<!-- s -->\n<!-- e -->\nb\n"
        result = inject(text, [Rule("r")], RenderMode.FLAT, start_marker="<!-- s -->", end_marker="<!-- e -->")
        assert result.text == "a\n<!-- s -->\n- r\n<!-- e -->\nb\n"

    def test_crlf_outside_markers_is_preserved(self) -> None:
        text = f"intro\r\n{START_MARKER}\r\nold\r\n{END_MARKER}\r\noutro\r\n"
        result = inject(text, [Rule("r")], RenderMode.FLAT)
        assert result.text.startswith(f"intro\r\n{START_MARKER}\n- r\n{END_MARKER}")
        assert result.text.endswith(f"{END_MARKER}\r\noutro\r\n")


class TestInjectFile:
    def test_writes_when_changed(self, tmp_path: Path) -> None:
        target = tmp_path / "README.md"
        target.write_text(DOCUMENT, encoding="utf-8")
        result = inject_file(target, RULES)
        assert result.changed is True
        assert target.read_text(encoding="utf-8") == result.text

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_rewrite_keeps_file_mode(self, tmp_path: Path) -> None:
        target = tmp_path / "README.md"
        target.write_text(DOCUMENT, encoding="utf-8")
        target.chmod(0o644)
        assert inject_file(target, [Rule("r")]).changed is True
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_does_not_touch_unchanged_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        target = tmp_path / "README.md"
        target.write_text(inject(DOCUMENT, RULES).text, encoding="utf-8")

        calls = []
        monkeypatch.setattr(
            "psst.core.rendering.injection.atomic_write_text", lambda *a, **k: calls.append(a)
        )
        result = inject_file(target, RULES)
        assert result.action == "unchanged"
        assert calls == []

    def test_missing_markers_do_not_write(self, tmp_path: Path) -> None:
        target = tmp_path / "notes.md"
        target.write_text("plain\n", encoding="utf-8")
        result = inject_file(target, RULES)
        assert result.action == "missing-markers"
        assert target.read_text(encoding="utf-8") == "plain\n"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        target = tmp_path / "absent.md"
        with pytest.raises(InjectionTargetError) as excinfo:
            inject_file(target, RULES)
        assert isinstance(excinfo.value, FileNotFoundError)
        assert isinstance(excinfo.value, PsstError)
        assert excinfo.value.context == {"path": str(target)}
        assert not target.exists()

"""File I/O helpers.

Writes go through a temp file in the target directory followed by
``os.replace`` so a reader never observes a half-written file.
"""
from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: PathLike, content: str, *, encoding: str = "utf-8") -> None:
    """Write ``content`` to ``path`` atomically using a temp file + fsync + rename.

    An existing target keeps its permission bits.
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            delete=False,
            newline="",
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        if path.exists():
            os.chmod(str(tmp_path), stat.S_IMODE(path.stat().st_mode))
        os.replace(str(tmp_path), str(path))
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def read_text(path: PathLike, *, encoding: str = "utf-8") -> str:
    """Read a text file without newline translation."""
    with open(path, "r", encoding=encoding, newline="") as f:
        return f.read()


__all__ = ["PathLike", "ensure_parent_dir", "atomic_write_text", "read_text"]

"""Shared fixtures for the tarballer test-suite."""

from pathlib import Path

import pytest


def _snapshot(root: Path) -> dict[str, bytes | None]:
    """Return every path under *root* mapped to its bytes (``None`` for folders)."""
    return {
        str(p.relative_to(root)): (p.read_bytes() if p.is_file() else None)
        for p in sorted(root.rglob("*"))
    }


@pytest.fixture
def snapshot():
    """Return a helper capturing the full state of a directory tree."""
    return _snapshot


@pytest.fixture
def target(tmp_path: Path) -> Path:
    """Target directory holding folders ``a/`` and ``b/`` plus a file ``c.txt``."""
    root = tmp_path / "target"
    (root / "a" / "nested").mkdir(parents=True)
    (root / "a" / "one.txt").write_text("one")
    (root / "a" / "nested" / "two.bin").write_bytes(bytes(range(256)))
    (root / "b").mkdir()
    (root / "b" / "three.txt").write_text("three")
    (root / "c.txt").write_text("loose file")
    return root

import os
from pathlib import Path

import pytest

from tarballer.pipelines.scan import archive_targets, scan
from tarballer.utils.errors import ScanError


def test_scan_only_returns_folders(target: Path):
    found = scan(target)
    assert found == {"a.tar": target / "a", "b.tar": target / "b"}


def test_scan_ignores_files_regardless_of_count(tmp_path: Path):
    for i in range(3):
        (tmp_path / f"dir{i}").mkdir()
    for i in range(7):
        (tmp_path / f"file{i}.txt").write_text(str(i))

    found = scan(tmp_path)
    assert sorted(found) == ["dir0.tar", "dir1.tar", "dir2.tar"]


def test_scan_independent_of_listing_order(target: Path, monkeypatch):
    expected = list(scan(target).items())

    original = Path.iterdir
    monkeypatch.setattr(Path, "iterdir", lambda self: reversed(list(original(self))))

    assert list(scan(target).items()) == expected


def test_scan_empty_directory(tmp_path: Path):
    assert scan(tmp_path) == {}


def test_scan_does_not_recurse(target: Path):
    found = scan(target)
    assert "nested.tar" not in found


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_scan_follows_directory_symlinks(tmp_path: Path):
    real = tmp_path / "real"
    real.mkdir()
    root = tmp_path / "root"
    root.mkdir()
    (root / "linked").symlink_to(real, target_is_directory=True)
    (root / "dangling").symlink_to(tmp_path / "nowhere")

    assert scan(root) == {"linked.tar": root / "linked"}


def test_scan_missing_root_raises(tmp_path: Path):
    with pytest.raises(ScanError):
        scan(tmp_path / "gone")


def test_archive_targets_derive_paths(target: Path):
    targets = archive_targets(target, scan(target))
    assert [t.name for t in targets] == ["a.tar", "b.tar"]
    assert targets[0].archive == target / "a.tar"
    assert targets[1].source == target / "b"


def test_scan_unreadable_entry_raises_scan_error(target: Path, monkeypatch):
    original = Path.is_dir

    def _denied(self, *args, **kwargs):
        if self.parent == target:
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "is_dir", _denied)

    with pytest.raises(ScanError) as info:
        scan(target)
    assert info.value.root == target
    assert isinstance(info.value.__cause__, PermissionError)

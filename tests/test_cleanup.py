import errno
import os
import shutil
from pathlib import Path

import pytest

from tarballer.models import RemovalOutcome
from tarballer.utils import cleanup
from tarballer.utils.cleanup import classify_error, remove_tree
from tarballer.utils.retry import FailFast, RemovalErrorKind


class RecordingPolicy:
    """Retry policy that records every call and answers from a script."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = []

    def should_retry(self, path, kind, attempt):
        self.calls.append((path, kind, attempt))
        return self.answers.pop(0)


def _flaky_rmtree(monkeypatch, errors):
    """Make ``shutil.rmtree`` raise *errors* in turn before really deleting."""
    pending = list(errors)
    real = shutil.rmtree

    def _rmtree(path, *args, **kwargs):
        if pending:
            raise pending.pop(0)
        real(path, *args, **kwargs)

    monkeypatch.setattr(cleanup.shutil, "rmtree", _rmtree)


@pytest.mark.parametrize(
    "exc, kind",
    [
        (FileNotFoundError(errno.ENOENT, "gone"), RemovalErrorKind.NOT_FOUND),
        (OSError(errno.EBUSY, "busy"), RemovalErrorKind.BUSY),
        (PermissionError(errno.EACCES, "denied"), RemovalErrorKind.PERMISSION_DENIED),
        (OSError(errno.EPERM, "not permitted"), RemovalErrorKind.PERMISSION_DENIED),
        (OSError(errno.EIO, "io"), RemovalErrorKind.OTHER),
        (OSError("no errno"), RemovalErrorKind.OTHER),
    ],
)
def test_classify_error(exc, kind):
    assert classify_error(exc) is kind


def test_remove_existing_tree(target: Path):
    assert remove_tree(target / "a", FailFast()) is RemovalOutcome.REMOVED
    assert not (target / "a").exists()
    assert (target / "b").exists()


def test_remove_missing_path_is_success(tmp_path: Path):
    policy = RecordingPolicy([])
    assert remove_tree(tmp_path / "never-existed", policy) is RemovalOutcome.ABSENT
    assert policy.calls == []


def test_busy_folder_is_retried_until_removed(target: Path, monkeypatch):
    _flaky_rmtree(
        monkeypatch,
        [OSError(errno.EBUSY, "busy"), PermissionError(errno.EACCES, "denied")],
    )
    policy = RecordingPolicy([True, True])

    outcome = remove_tree(target / "a", policy)

    assert outcome is RemovalOutcome.REMOVED
    assert not (target / "a").exists()
    assert [(kind, attempt) for _, kind, attempt in policy.calls] == [
        (RemovalErrorKind.BUSY, 1),
        (RemovalErrorKind.PERMISSION_DENIED, 2),
    ]


def test_policy_can_give_up(target: Path, monkeypatch):
    _flaky_rmtree(monkeypatch, [OSError(errno.EBUSY, "busy")])

    outcome = remove_tree(target / "a", RecordingPolicy([False]))

    assert outcome is RemovalOutcome.GAVE_UP
    assert (target / "a").exists()


def test_other_errors_are_not_retried(target: Path, monkeypatch):
    _flaky_rmtree(monkeypatch, [OSError(errno.EIO, "io error")])
    policy = RecordingPolicy([])

    outcome = remove_tree(target / "a", policy)

    assert outcome is RemovalOutcome.FAILED
    assert policy.calls == []
    assert (target / "a").exists()


def test_not_found_during_retry_ends_loop(target: Path, monkeypatch):
    _flaky_rmtree(
        monkeypatch,
        [OSError(errno.EBUSY, "busy"), FileNotFoundError(errno.ENOENT, "gone")],
    )
    assert remove_tree(target / "a", RecordingPolicy([True])) is RemovalOutcome.ABSENT


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinked_folder_only_loses_the_link(tmp_path: Path):
    real = tmp_path / "real"
    real.mkdir()
    (real / "keep.txt").write_text("keep")
    link = tmp_path / "alias"
    link.symlink_to(real, target_is_directory=True)

    assert remove_tree(link, FailFast()) is RemovalOutcome.REMOVED
    assert not link.exists() and not link.is_symlink()
    assert (real / "keep.txt").read_text() == "keep"

"""
Typed, immutable value objects that circulate between pipeline stages.

Every class inherits from :class:`pydantic.BaseModel` with ``frozen=True`` so
that a :class:`RunConfig` written once by the CLI cannot be mutated by any of
the components that read it.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

RetryPolicyName = Literal["prompt", "bounded", "fail-fast"]


class RetrySettings(BaseModel, frozen=True):
    """How the removal supervisor reacts to busy or permission-denied errors.

    Attributes
    ----------
    policy
        ``"prompt"`` waits for the operator after every failure,
        ``"bounded"`` retries automatically with a linear back-off and
        ``"fail-fast"`` gives up on the first recoverable error.
    max_attempts
        Total number of removal attempts for the ``"bounded"`` policy.
    backoff
        Base delay in seconds between two ``"bounded"`` attempts.
    """

    policy: RetryPolicyName = "prompt"
    max_attempts: int = Field(5, ge=1)
    backoff: float = Field(1.0, ge=0)


class RunConfig(BaseModel, frozen=True):
    """Settings for one run, resolved once at start-up.

    Attributes
    ----------
    root
        Absolute path of the directory whose sub-folders are tarballed.
    verbose
        Emit INFO-level progress messages.
    remove
        Delete each folder once its tar file was written.
    dry_run
        Report what would happen without touching the file-system.
    keep_going
        Record an archive failure and continue with the next folder instead
        of aborting the run.
    retry
        Retry behaviour of the removal supervisor.
    """

    root: Path
    verbose: bool = False
    remove: bool = False
    dry_run: bool = False
    keep_going: bool = False
    retry: RetrySettings = RetrySettings()


class ArchiveTarget(BaseModel, frozen=True):
    """One folder and the tar file derived from it."""

    name: str
    source: Path
    archive: Path


class RemovalOutcome(str, Enum):
    """Terminal state reached by :func:`tarballer.utils.cleanup.remove_tree`."""

    REMOVED = "removed"
    ABSENT = "absent"
    FAILED = "failed"
    GAVE_UP = "gave-up"

    @property
    def ok(self) -> bool:
        """``True`` when the folder no longer exists."""
        return self in (RemovalOutcome.REMOVED, RemovalOutcome.ABSENT)


class EntryResult(BaseModel, frozen=True):
    """What happened to a single :class:`ArchiveTarget` during a run.

    ``removal`` is *None* when no removal was attempted (flag not set, dry-run
    or failed archive).  ``error`` holds the archive error message of an entry
    skipped under ``keep_going``.
    """

    target: ArchiveTarget
    archived: bool = False
    removal: RemovalOutcome | None = None
    error: str | None = None


class RunReport(BaseModel, frozen=True):
    """Summary returned by :func:`tarballer.pipelines.tarball.run_tarball`."""

    root: Path
    dry_run: bool = False
    entries: list[EntryResult] = Field(default_factory=list)

    @property
    def archived(self) -> list[ArchiveTarget]:
        """Targets whose tar file was written."""
        return [e.target for e in self.entries if e.archived]

    @property
    def removed(self) -> list[ArchiveTarget]:
        """Targets whose source folder is gone after the run."""
        return [e.target for e in self.entries if e.removal is not None and e.removal.ok]

    @property
    def failed(self) -> list[EntryResult]:
        """Entries that hit an archive error or an abandoned removal."""
        return [
            e
            for e in self.entries
            if e.error is not None
            or (e.removal is not None and not e.removal.ok)
        ]

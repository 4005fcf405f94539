"""
Tarball every folder found by the scanner and optionally remove it.

:func:`run_tarball` processes one folder at a time, strictly in sequence:

1. ``--dry-run`` only reports what would happen.
2. Otherwise the folder is written to ``<root>/<name>.tar``.
3. With ``--remove`` the folder is deleted, but only after the tar file was
   written and reads back as a valid archive.

An archive failure aborts the run unless ``keep_going`` is set, in which case
the entry is recorded as failed and the next folder is processed.  Removal
failures never abort the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tarballer.models import EntryResult, RunConfig, RunReport
from tarballer.utils.archive import build_archive, is_valid_tarball
from tarballer.utils.cleanup import remove_tree
from tarballer.utils.display import echo_dry_run, echo_entry
from tarballer.utils.errors import ArchiveError
from tarballer.utils.retry import RetryPolicy, policy_from_settings
from .scan import archive_targets, scan

log = logging.getLogger(__name__)

__all__ = ["run_tarball", "tarball_directory"]


def run_tarball(
    config: RunConfig,
    scan_result: dict[str, Path],
    *,
    policy: RetryPolicy | None = None,
    logger: logging.Logger | None = None,
) -> RunReport:
    """Archive (and optionally remove) every folder in *scan_result*.

    Args:
        config: Settings for this run.
        scan_result: Output of :func:`tarballer.pipelines.scan.scan`.
        policy: Retry policy for the removal step.  Built from
            ``config.retry`` when *None*.
        logger: Logger receiving progress messages.

    Returns:
        A :class:`RunReport` with one entry per folder.

    Raises:
        ArchiveError: When a tar file cannot be written and
            ``config.keep_going`` is *False*.
    """
    logger = logger or log
    if policy is None and config.remove and not config.dry_run:
        policy = policy_from_settings(config.retry)

    entries: list[EntryResult] = []
    for target in archive_targets(config.root, scan_result):
        logger.info("Folder %s -> %s", target.source, target.archive)
        if config.verbose:
            echo_entry(target.source, target.archive)

        if config.dry_run:
            echo_dry_run(target.source, config.remove)
            entries.append(EntryResult(target=target))
            continue

        logger.info("Tarballing folder: %s", target.source)
        try:
            build_archive(target.source, target.archive)
            if not is_valid_tarball(target.archive):
                raise ArchiveError(
                    target.source, target.archive, "archive did not read back"
                )
        except ArchiveError as exc:
            if not config.keep_going:
                raise
            logger.error("Skipping %s: %s", target.source, exc)
            entries.append(EntryResult(target=target, error=str(exc)))
            continue
        logger.info("Tarball created: %s", target.archive)

        if not config.remove:
            logger.info("Not removing folder: %s", target.source)
            entries.append(EntryResult(target=target, archived=True))
            continue

        outcome = remove_tree(target.source, policy, logger=logger)
        entries.append(EntryResult(target=target, archived=True, removal=outcome))

    return RunReport(root=config.root, dry_run=config.dry_run, entries=entries)


def tarball_directory(
    config: RunConfig,
    *,
    policy: RetryPolicy | None = None,
    logger: logging.Logger | None = None,
) -> RunReport:
    """Scan ``config.root`` and run :func:`run_tarball` on the result.

    Raises:
        ScanError: When the root directory cannot be listed.
        ArchiveError: See :func:`run_tarball`.
    """
    found = scan(config.root, logger=logger)
    return run_tarball(config, found, policy=policy, logger=logger)

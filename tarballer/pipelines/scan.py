"""
Discover the folders to tarball.

:func:`scan` looks at the **direct** children of a root directory only and
returns a mapping ``{"<name>.tar": <folder path>}``.  Files and symlinks that
do not point at a directory are skipped.  Symlinks to directories count as
folders because :meth:`pathlib.Path.is_dir` follows links.

The mapping is built in sorted name order so that two scans of the same
directory state yield identical results whatever order the file-system lists
entries in.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tarballer.models import ArchiveTarget
from tarballer.utils.archive import archive_name
from tarballer.utils.errors import ScanError

log = logging.getLogger(__name__)

__all__ = ["scan", "archive_targets"]


def scan(root: Path, logger: logging.Logger | None = None) -> dict[str, Path]:
    """Map ``<folder>.tar`` to the folder path for every sub-folder of *root*.

    Args:
        root: Existing directory to inspect (non-recursive).
        logger: Logger receiving per-entry DEBUG messages.

    Returns:
        Dictionary keyed by archive name, ordered by name.  Empty when *root*
        holds no sub-folders.

    Raises:
        ScanError: When *root* cannot be listed or one of its entries
            cannot be inspected.
    """
    logger = logger or log
    logger.info("Working directory: %s", root)

    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
        folders = [(entry, entry.is_dir()) for entry in entries]
    except OSError as exc:
        logger.error("Could not list %s: %s", root, exc)
        raise ScanError(root, exc) from exc

    found: dict[str, Path] = {}
    for entry, is_folder in folders:
        if not is_folder:
            logger.debug("Skipping non-folder: %s", entry)
            continue
        name = archive_name(entry)
        logger.debug("Folder %s -> %s", entry, name)
        found[name] = entry

    logger.info("Found %d folder(s) under %s", len(found), root)
    return found


def archive_targets(root: Path, scan_result: dict[str, Path]) -> list[ArchiveTarget]:
    """Turn a :func:`scan` result into :class:`ArchiveTarget` objects."""
    return [
        ArchiveTarget(name=name, source=source, archive=root / name)
        for name, source in sorted(scan_result.items())
    ]

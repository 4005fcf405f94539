"""
Write and check the tar files produced for each folder.

The module is the only place that talks to :mod:`tarfile`.  It exposes two
helpers:

* :func:`build_archive` – stream a folder tree into an uncompressed tar file.
* :func:`is_valid_tarball` – cheap sanity-check used before a source folder
  is deleted.

No cleanup happens on failure.  A partially written tar file stays on disk and
the caller decides what to do with it.
"""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path

from .errors import ArchiveError

log = logging.getLogger(__name__)

#: Suffix appended to a folder name to obtain its archive name.
TAR_SUFFIX = ".tar"

_READ_CHUNK = 1 << 20


def archive_name(folder: Path) -> str:
    """Return the tar file name for *folder* (``<basename>.tar``)."""
    return f"{folder.name}{TAR_SUFFIX}"


def build_archive(source: Path, destination: Path) -> Path:
    """Write the full recursive contents of *source* into *destination*.

    Members are rooted at the folder itself, i.e. ``a/`` becomes ``a``,
    ``a/x.txt``, ``a/sub/y.txt`` … so extracting the archive next to *source*
    recreates the folder.  :mod:`tarfile` walks directories in sorted order,
    which makes the member order independent of the file-system.

    A *source* that is a symlink to a directory is archived through its
    target.  Symlinks found deeper in the tree are stored as links.

    Args:
        source: Folder to archive.
        destination: Tar file to create or truncate.

    Returns:
        *destination*, for chaining.

    Raises:
        ArchiveError: When *destination* cannot be written or a file under
            *source* becomes unreadable while archiving.
    """
    tree = source.resolve() if source.is_symlink() else source
    log.debug("Writing %s from %s", destination, tree)
    try:
        with tarfile.open(destination, "w") as tf:
            tf.add(tree, arcname=source.name, recursive=True)
    except (OSError, tarfile.TarError) as exc:
        log.error("Failed to tarball %s: %s", source, exc)
        raise ArchiveError(source, destination, exc) from exc
    return destination


def is_valid_tarball(path: Path) -> bool:
    """Return *True* when *path* is a complete, readable tar file.

    Every member header is parsed and every regular file is read to the end,
    and the archive must close with the end-of-archive marker.  A file cut
    short while being written therefore fails the check.

        >>> is_valid_tarball(Path("missing.tar"))
        False
    """
    if not path.is_file():
        return False
    try:
        with tarfile.open(path, "r:") as tf:
            for member in tf:
                if not member.isfile():
                    continue
                data = tf.extractfile(member)
                while data.read(_READ_CHUNK):
                    pass
            end = tf.offset
    except (OSError, tarfile.TarError) as exc:
        log.warning("%s is not a valid tarball: %s", path, exc)
        return False
    if end + 2 * tarfile.BLOCKSIZE > path.stat().st_size:
        log.warning("%s is missing its end-of-archive marker", path)
        return False
    return True

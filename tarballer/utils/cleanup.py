"""Delete a source folder once its tar file exists.

:func:`remove_tree` is a small state machine around :func:`shutil.rmtree`:

* success or an already-missing folder ends the loop successfully;
* *busy* and *permission denied* errors are handed to a
  :class:`~tarballer.utils.retry.RetryPolicy` which decides whether to try
  again (the default policy waits for the operator);
* any other error is logged and the folder is left in place.

The function never raises for filesystem errors.  A failed removal only
affects the folder at hand, so the tar file that was already written is kept.
"""

from __future__ import annotations

import errno
import logging
import shutil
from pathlib import Path

from tarballer.models import RemovalOutcome
from .retry import InteractivePrompt, RemovalErrorKind, RetryPolicy

log = logging.getLogger(__name__)

_BUSY_ERRNOS = {errno.EBUSY, errno.ETXTBSY}
_PERMISSION_ERRNOS = {errno.EACCES, errno.EPERM}

# ─────────────────────────────────────────────────────────────────────────────
# classify_error / _rm_tree – internal primitives
# ─────────────────────────────────────────────────────────────────────────────


def classify_error(exc: OSError) -> RemovalErrorKind:
    """Map *exc* onto a :class:`RemovalErrorKind`.

    Subclass checks come first; the raw ``errno`` covers plain
    :class:`OSError` instances raised by some platforms for busy files.
    """
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return RemovalErrorKind.NOT_FOUND
    if exc.errno in _BUSY_ERRNOS:
        return RemovalErrorKind.BUSY
    if isinstance(exc, PermissionError) or exc.errno in _PERMISSION_ERRNOS:
        return RemovalErrorKind.PERMISSION_DENIED
    return RemovalErrorKind.OTHER


def _rm_tree(path: Path) -> None:
    """Delete *path* recursively; a symlinked folder only loses its link."""
    if path.is_symlink():
        path.unlink()
    else:
        shutil.rmtree(path)


# ─────────────────────────────────────────────────────────────────────────────
# Public helper
# ─────────────────────────────────────────────────────────────────────────────


def remove_tree(
    path: Path,
    policy: RetryPolicy | None = None,
    logger: logging.Logger | None = None,
) -> RemovalOutcome:
    """Remove *path* and block until it is gone or cannot be removed.

    Args:
        path: Folder to delete.
        policy: Consulted after each busy / permission-denied failure.
            Defaults to :class:`~tarballer.utils.retry.InteractivePrompt`.
        logger: Logger receiving progress messages.  Defaults to the module
            logger.

    Returns:
        :attr:`RemovalOutcome.REMOVED` or :attr:`RemovalOutcome.ABSENT` on
        success, :attr:`RemovalOutcome.GAVE_UP` when the policy stopped
        retrying and :attr:`RemovalOutcome.FAILED` for any other error.
    """
    logger = logger or log
    policy = policy or InteractivePrompt()
    attempt = 0

    while True:
        attempt += 1
        logger.info("Attempting to remove folder: %s", path)
        try:
            _rm_tree(path)
        except OSError as exc:
            error = exc
            kind = classify_error(exc)
        else:
            logger.info("Removed folder: %s", path)
            return RemovalOutcome.REMOVED

        if kind is RemovalErrorKind.NOT_FOUND:
            logger.info("Folder not found: %s", path)
            return RemovalOutcome.ABSENT

        if not kind.recoverable:
            logger.error("Error removing folder %s: %s", path, error)
            return RemovalOutcome.FAILED

        logger.warning("Could not remove %s (%s): %s", path, kind.value, error)
        if not policy.should_retry(path, kind, attempt):
            return RemovalOutcome.GAVE_UP

"""
Retry policies consulted by the removal supervisor.

A policy answers a single question: after a *busy* or *permission denied*
error on attempt *n*, should the removal be attempted again?  Three policies
ship with the package:

* :class:`InteractivePrompt` – the default for terminal use.  It explains the
  problem and blocks until the operator presses Enter.  There is no limit on
  the number of rounds.
* :class:`BoundedRetry` – unattended retries with a linear back-off.
* :class:`FailFast` – give up immediately.

Non-interactive deployments (cron, CI) should pick one of the last two; the
interactive prompt would otherwise wait forever on a locked folder.
"""

from __future__ import annotations

import enum
import logging
import time
from pathlib import Path
from typing import Callable, Protocol

import click

from tarballer.models import RetrySettings

log = logging.getLogger(__name__)

__all__ = [
    "RemovalErrorKind",
    "RetryPolicy",
    "InteractivePrompt",
    "BoundedRetry",
    "FailFast",
    "policy_from_settings",
]


class RemovalErrorKind(enum.Enum):
    """Classification of an error raised while deleting a folder tree."""

    NOT_FOUND = "not-found"
    BUSY = "busy"
    PERMISSION_DENIED = "permission-denied"
    OTHER = "other"

    @property
    def recoverable(self) -> bool:
        """``True`` for the kinds an operator can usually fix."""
        return self in (RemovalErrorKind.BUSY, RemovalErrorKind.PERMISSION_DENIED)


class RetryPolicy(Protocol):
    """Decide whether a failed removal is attempted again."""

    def should_retry(self, path: Path, kind: RemovalErrorKind, attempt: int) -> bool:
        ...


# ─────────────────────────────────────────────────────────────────────────────
# Policies
# ─────────────────────────────────────────────────────────────────────────────
_PROMPTS = {
    RemovalErrorKind.BUSY: (
        "Folder is busy: {path}\n"
        "Please close any open files in the folder and press Enter to retry."
    ),
    RemovalErrorKind.PERMISSION_DENIED: (
        "Permission denied: {path}\n"
        "Please check your permissions (you may have a file open inside the "
        "directory) and press Enter to retry."
    ),
}


class InteractivePrompt:
    """Ask the operator to fix the problem, then retry.  Never gives up.

    The answer itself is discarded; only the Enter key press matters.
    End-of-input and Ctrl-C surface as :class:`click.Abort`, which stops the
    whole run rather than spinning on a closed stdin.
    """

    def __init__(self, echo: Callable[[str], None] = click.echo) -> None:
        self._echo = echo

    def should_retry(self, path: Path, kind: RemovalErrorKind, attempt: int) -> bool:
        self._echo(_PROMPTS[kind].format(path=path))
        click.prompt("", default="", show_default=False, prompt_suffix="")
        return True


class BoundedRetry:
    """Retry automatically up to *max_attempts* attempts in total.

    The wait before attempt ``n + 1`` is ``backoff * n`` seconds.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        backoff: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff = backoff
        self._sleep = sleep

    def should_retry(self, path: Path, kind: RemovalErrorKind, attempt: int) -> bool:
        if attempt >= self.max_attempts:
            log.warning(
                "Giving up on %s after %d attempt(s) (%s)", path, attempt, kind.value
            )
            return False
        delay = self.backoff * attempt
        log.info(
            "Removal of %s failed (%s); retrying in %.1fs [%d/%d]",
            path,
            kind.value,
            delay,
            attempt,
            self.max_attempts,
        )
        if delay:
            self._sleep(delay)
        return True


class FailFast:
    """Never retry."""

    def should_retry(self, path: Path, kind: RemovalErrorKind, attempt: int) -> bool:
        log.warning("Not retrying removal of %s (%s)", path, kind.value)
        return False


def policy_from_settings(settings: RetrySettings) -> RetryPolicy:
    """Instantiate the policy named in *settings*."""
    if settings.policy == "bounded":
        return BoundedRetry(settings.max_attempts, settings.backoff)
    if settings.policy == "fail-fast":
        return FailFast()
    return InteractivePrompt()

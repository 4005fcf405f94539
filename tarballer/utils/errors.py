"""Custom exceptions raised by the tarballer pipeline."""

from __future__ import annotations

from pathlib import Path


class TarballerError(RuntimeError):
    """Base class for every unrecoverable tarballer error."""

    pass


class ScanError(TarballerError):
    """Raised when the target directory cannot be listed."""

    def __init__(self, root: Path, reason: object) -> None:
        self.root = root
        super().__init__(f"Could not list {root}: {reason}")


class ArchiveError(TarballerError):
    """Raised when a tar file cannot be written for one source folder."""

    def __init__(self, source: Path, destination: Path, reason: object) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"Could not tarball {source} into {destination}: {reason}")


class ConfigError(TarballerError):
    """Raised when a YAML configuration file is unreadable or invalid."""

    pass

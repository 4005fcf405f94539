"""
Pydantic model that mirrors the YAML configuration consumed by *tarballer*.

The file only carries defaults for the run flags.  The target directory is
never part of it; it always comes from the command line.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from tarballer.models import RetrySettings, RunConfig


class ConfigSchema(BaseModel):
    """Top-level configuration document.

    Unknown keys are rejected so that a misspelt ``remvoe: true`` fails loudly
    instead of being ignored.
    """

    model_config = ConfigDict(extra="forbid")

    remove: bool = False
    dry_run: bool = False
    keep_going: bool = False
    retry: RetrySettings = RetrySettings()

    def to_run_config(
        self,
        root: Path,
        *,
        verbose: bool = False,
        remove: bool = False,
        dry_run: bool = False,
        keep_going: bool = False,
        retry: dict | None = None,
    ) -> RunConfig:
        """Merge command-line values over the file values.

        Boolean flags are OR-ed with the file so a flag can only switch a
        feature on.  *retry* holds only the retry keys given on the command
        line.
        """
        settings = self.retry.model_copy(update=retry or {})
        return RunConfig(
            root=root,
            verbose=verbose,
            remove=remove or self.remove,
            dry_run=dry_run or self.dry_run,
            keep_going=keep_going or self.keep_going,
            retry=RetrySettings.model_validate(settings.model_dump()),
        )

"""Command-line entry point for ``tarballer-cli``.

Tarball every folder in a directory into ``<folder>.tar`` next to it.

Key flags
------------
* ``--remove``      – delete each folder once its tar file was written.
* ``--dry-run``     – list what would be tarballed/removed; touch nothing.
* ``--keep-going``  – skip a folder whose tar file cannot be written instead
  of aborting the run.
* ``--retry``       – what to do when a folder is busy or permission is
  denied during removal (``prompt``, ``bounded`` or ``fail-fast``).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict

import click
import structlog

from tarballer import __version__
from tarballer.config import load_config
from tarballer.pipelines.tarball import tarball_directory
from tarballer.utils.display import echo_banner, echo_failure, echo_success
from tarballer.utils.errors import TarballerError
from tarballer.utils.logging import setup_logging

log = structlog.get_logger()

_CTX: Dict[str, Any] = dict(
    help_option_names=["-h", "--help"],
    max_content_width=120,
)


@click.command(
    name="tarballer-cli",
    context_settings=_CTX,
    help="Tarball every folder in TARGET_DIR (default: current directory).",
)
@click.version_option(__version__)
@click.argument(
    "target_dir",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("-v", "--verbose", is_flag=True, help="Print verbose output.")
@click.option("--debug", is_flag=True, help="DEBUG console output with tracebacks.")
# ------------ run flags -----------------------------------------------------
@click.option("-r", "--remove", is_flag=True,
              help="Remove folders after tarballing.")
@click.option("-d", "--dry-run", is_flag=True,
              help="List folders to be tarballed but do not create tarballs.")
@click.option("--keep-going", is_flag=True,
              help="Continue with the next folder when a tarball cannot be written.")
# ------------ removal retry -------------------------------------------------
@click.option("--retry", "retry_policy",
              type=click.Choice(["prompt", "bounded", "fail-fast"]),
              help="Behaviour when a folder is busy or permission is denied.")
@click.option("--max-attempts", type=click.IntRange(min=1),
              help="Removal attempts for --retry bounded.")
@click.option("--backoff", type=click.FloatRange(min=0),
              help="Base delay in seconds between bounded retries.")
# ------------ configuration / logging ---------------------------------------
@click.option("-c", "--config", "config_path",
              type=click.Path(dir_okay=False, path_type=Path),
              help="YAML file with default flag values.")
@click.option(
    "--save-logfile",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Mirror console log output into this plain-text file.",
)
def main(
    target_dir: Path | None,
    verbose: bool,
    debug: bool,
    remove: bool,
    dry_run: bool,
    keep_going: bool,
    retry_policy: str | None,
    max_attempts: int | None,
    backoff: float | None,
    config_path: Path | None,
    save_logfile: Path | None,
) -> None:
    """Entry-point for ``tarballer-cli``.

    Raises:
        click.ClickException: On an invalid configuration file, an unreadable
            target directory or a tarball that cannot be written.
    """
    setup_logging(verbose=verbose, debug=debug, extra_text_log=save_logfile)

    root = (target_dir or Path(".")).resolve()
    log.info("Target directory: %s", root)

    retry_overrides = {
        key: value
        for key, value in (
            ("policy", retry_policy),
            ("max_attempts", max_attempts),
            ("backoff", backoff),
        )
        if value is not None
    }

    try:
        cfg = load_config(config_path)
        run_cfg = cfg.to_run_config(
            root,
            verbose=verbose or debug,
            remove=remove,
            dry_run=dry_run,
            keep_going=keep_going,
            retry=retry_overrides,
        )
    except TarballerError as exc:
        raise click.ClickException(str(exc)) from exc

    echo_banner("Dry run" if run_cfg.dry_run else "Tarball folders")

    try:
        report = tarball_directory(run_cfg)
    except TarballerError as exc:
        raise click.ClickException(str(exc)) from exc

    if not report.entries:
        click.echo(f"No folders found under {root}")
        return
    if report.dry_run:
        return

    echo_success(f"{len(report.archived)} folder(s) tarballed")
    if run_cfg.remove:
        echo_success(f"{len(report.removed)} folder(s) removed")

    archive_errors = False
    for entry in report.failed:
        if entry.error is not None:
            archive_errors = True
            echo_failure(entry.error)
        else:
            echo_failure(f"{entry.target.source} was not removed ({entry.removal.value})")

    if archive_errors:
        sys.exit(1)


cli = main
__all__: list[str] = ["main"]

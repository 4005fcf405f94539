"""
Package-level logging configuration.

* Rich console output (colourised, nicely formatted).
* Rotating **JSON** log file when ``$TARBALLER_LOG_DIR`` is set.  Nothing is
  written to disk by default so that ``--dry-run`` leaves the file-system
  untouched.
* Optional plain-text mirror controlled via ``--save-logfile`` on the CLI.

The public helper :func:`setup_logging` wires everything and should be the
sole entry-point used by the CLI.
"""

from __future__ import annotations

import atexit
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

import structlog
from rich.logging import RichHandler
from structlog.dev import ConsoleRenderer as StructlogConsoleRenderer
from structlog.stdlib import LoggerFactory

__all__ = ["setup_logging", "LOG_DIR_ENV"]

#: Environment variable enabling the rotating JSON log file.
LOG_DIR_ENV = "TARBALLER_LOG_DIR"


# --------------------------------------------------------------------------- #
# Internal helpers – file-based handlers                                      #
# --------------------------------------------------------------------------- #
def _json_file_handler(log_dir: Path | None, level: int) -> logging.Handler | None:
    """Return a rotating *JSON* file handler or *None* when disabled.

    Args:
        log_dir: Explicit log directory.  ``$TARBALLER_LOG_DIR`` is used when
            *None*.
        level: Log-level for the handler.

    Returns:
        Handler writing ``tarballer.log`` inside the chosen directory, or
        *None* when neither *log_dir* nor the environment variable is set.
    """
    if log_dir is None:
        env_dir = os.environ.get(LOG_DIR_ENV)
        if not env_dir:
            return None
        log_dir = Path(env_dir)

    logdir = log_dir.expanduser()
    logdir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=logdir / "tarballer.log",
        maxBytes=5_000_000,  # ~5 MB before rollover
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _plain_text_file_handler(
    path: Optional[Path], level: int
) -> logging.Handler | None:
    """Return a plain-text file handler or *None* when *path* is *None*.

    Args:
        path: Destination file.
        level: Log-level for the handler.
    """
    if path is None:
        return None

    path = path.expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8", mode="a")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    # Ensure the buffer is flushed on interpreter exit.
    atexit.register(handler.close)
    return handler


# --------------------------------------------------------------------------- #
# Public API – main entry-point                                               #
# --------------------------------------------------------------------------- #
def setup_logging(
    *,
    verbose: bool = False,
    debug: bool = False,
    extra_text_log: Optional[Path] = None,
    log_dir: Optional[Path] = None,
) -> None:
    """Configure rich console logging and optional file mirrors.

    Args:
        verbose: Emit INFO-level messages to the console.
        debug: Emit DEBUG-level messages plus rich tracebacks with locals.
        extra_text_log: Optional path for a plain-text mirror of console output.
        log_dir: Directory for the rotating JSON log.  Falls back to
            ``$TARBALLER_LOG_DIR``; no JSON log is written when both are unset.
    """
    console_lvl = (
        logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    )
    file_lvl = logging.DEBUG if debug else logging.INFO

    handlers: list[logging.Handler] = [
        RichHandler(
            level=console_lvl,
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            markup=False,
            show_path=debug,
        )
    ]

    json_handler = _json_file_handler(log_dir, file_lvl)
    if json_handler:
        handlers.append(json_handler)

    txt_handler = _plain_text_file_handler(extra_text_log, console_lvl)
    if txt_handler:
        handlers.append(txt_handler)

    # --- Configure root logger --------------------------------------------------
    logging.basicConfig(
        level=logging.DEBUG,  # root logger stays at DEBUG
        handlers=handlers,
        format="%(message)s",  # Rich/structlog handle formatting
        force=True,
    )

    # --- structlog binds --------------------------------------------------------
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            (
                StructlogConsoleRenderer(colors=False)
                if verbose or debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(console_lvl),
        logger_factory=LoggerFactory(),
    )

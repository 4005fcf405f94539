"""Utility functions to print formatted CLI messages for progress updates."""

from __future__ import annotations

from pathlib import Path

import click

__all__ = ["echo_banner", "echo_entry", "echo_dry_run", "echo_success", "echo_failure"]


def echo_banner(text: str) -> None:
    """Print a colourful banner announcing a processing step.

    Args:
        text: Banner text.
    """
    click.secho(f"\n=== {text} ===", fg="cyan")


def echo_entry(source: Path, archive: Path) -> None:
    """Echo a bullet naming a folder and the tar file it goes into."""
    click.echo(f"  • {source} -> {archive.name}")


def echo_dry_run(source: Path, remove: bool) -> None:
    """Report what a real run would do with *source*.

    Args:
        source: Folder that would be tarballed.
        remove: Whether the folder would be deleted afterwards.
    """
    click.echo(f"Dry run - would tarball folder: {source}")
    if remove:
        click.echo(f"Dry run - would remove folder: {source}")
    else:
        click.echo(f"Dry run - would NOT remove folder: {source}")


def echo_success(text: str) -> None:
    """Echo a green success message prefixed with a tick.

    Args:
        text: Message to display.
    """
    click.secho(f"✓ {text}", fg="green")


def echo_failure(text: str) -> None:
    """Echo a red warning line on stderr."""
    click.secho(f"✗ {text}", fg="red", err=True)

"""
Module entry-point that makes the package runnable with

    python -m tarballer

The behaviour is identical to the *tarballer-cli* console script because the
Click command imported below performs all argument handling.
"""

from tarballer.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()

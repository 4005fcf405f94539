"""
tarballer package initialisation.

The module performs two small tasks:

1. **Expose the version string**
   ``tarballer.__version__`` is resolved at import-time from the installed
   distribution metadata so that all runtime contexts (install, editable,
   source checkout) surface the same canonical value.

2. **Re-export the public entry points**
   :func:`tarballer.pipelines.tarball.tarball_directory` and
   :func:`tarballer.config.load_config` are re-exported at the top level so
   call-sites can simply do::

       from tarballer import load_config, tarball_directory
"""

from importlib.metadata import PackageNotFoundError, version

# --------------------------------------------------------------------------- #
# Version resolution
# --------------------------------------------------------------------------- #
try:
    __version__: str = version("tarballer")
except PackageNotFoundError:
    # Source tree without an installed wheel.  The sentinel makes missing
    # packaging metadata obvious in logs/tests.
    __version__ = "0.0.0"

# --------------------------------------------------------------------------- #
# Public re-exports
# --------------------------------------------------------------------------- #
from .config import load_config  # noqa: E402
from .pipelines.tarball import tarball_directory  # noqa: E402

__all__: list[str] = ["load_config", "tarball_directory", "__version__"]

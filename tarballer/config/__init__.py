"""
Configuration package façade.

Exports the small, stable surface that external callers rely on:

* :func:`load_config` – Locate, parse and validate the YAML configuration
  into a single :class:`ConfigSchema` instance.
* :class:`ConfigSchema` – Pydantic model representing the validated file.
"""

from .loader import CONFIG_ENV, load_config  # noqa: F401
from .schema import ConfigSchema  # noqa: F401

__all__: list[str] = ["load_config", "ConfigSchema", "CONFIG_ENV"]

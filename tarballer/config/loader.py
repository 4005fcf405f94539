"""
YAML configuration loader.

This helper locates, reads and validates the configuration file before
returning a :class:`tarballer.config.schema.ConfigSchema` instance.

Search precedence (first match wins)
1. An explicit path argument (``--config`` on the CLI).
2. The file named by ``$TARBALLER_CONFIG``.
3. The packaged default shipped inside the wheel.

The target directory is never searched, so scanning it stays read-only and a
stray YAML file there cannot change what a run does.
"""

from __future__ import annotations

import os
from importlib.resources import as_file, files
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from tarballer.utils.errors import ConfigError
from .schema import ConfigSchema

#: Environment variable pointing at a configuration file.
CONFIG_ENV = "TARBALLER_CONFIG"

_DEFAULT_CONFIG = files("tarballer.resources") / "default_config.yaml"


# --------------------------------------------------------------------------- #
# Helper functions                                                            #
# --------------------------------------------------------------------------- #
def _from_env() -> Optional[Path]:
    """Return the path stored in ``$TARBALLER_CONFIG`` or *None*."""
    value = os.environ.get(CONFIG_ENV)
    return Path(value).expanduser().resolve() if value else None


def _load_yaml(path: Path) -> dict:
    """Read a YAML mapping from *path*.

    Args:
        path: Location of the YAML document.

    Returns:
        Dictionary parsed from the file, or an empty dict if the file is empty.

    Raises:
        ConfigError: When the file cannot be read, is not valid YAML or does
            not hold a mapping.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read configuration {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #
def load_config(config_path: Optional[str | Path] = None) -> ConfigSchema:
    """Return a fully validated :class:`ConfigSchema`.

    Args:
        config_path: Explicit YAML file.  ``None`` triggers the search
            sequence described in the module doc-string.

    Returns:
        A :class:`ConfigSchema` object ready for downstream use.

    Raises:
        ConfigError: When the file is missing, unreadable or fails validation.
    """
    explicit = Path(config_path).expanduser().resolve() if config_path else None
    chosen = explicit or _from_env()

    if chosen is not None:
        if not chosen.is_file():
            raise ConfigError(f"Configuration file not found: {chosen}")
        raw = _load_yaml(chosen)
        source = str(chosen)
    else:
        with as_file(_DEFAULT_CONFIG) as p:
            raw = _load_yaml(p)
        source = "packaged default"

    try:
        return ConfigSchema(**raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration ({source}) – {exc}") from exc

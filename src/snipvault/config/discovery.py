"""Locate the ``snipvault.toml`` in effect.

Resolution order: the ``--config`` flag, then ``SNIPVAULT_CONFIG``, then a
walk up from the starting directory (the way git finds ``.git/``).  The
directory holding the file found by walk-up becomes the vault root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "snipvault.toml"
CONFIG_ENV_VAR = "SNIPVAULT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``snipvault.toml`` at or above *start* (default: cwd).

    A set ``SNIPVAULT_CONFIG`` replaces the walk-up entirely, so a variable
    pointing at a missing file yields None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _existing(Path(env_path), CONFIG_ENV_VAR)

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | None, start: Path | None = None) -> Path | None:
    """The config file for a CLI invocation: *explicit* if given, else discovery."""
    if explicit:
        return _existing(Path(explicit), "--config")
    return find_config(start)


def _existing(path: Path, source: str) -> Path | None:
    if path.is_file():
        return path
    logger.warning("Config file from %s not found, using defaults: %s", source, path)
    return None

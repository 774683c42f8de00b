"""Locating and reading spamctl.toml.

The nearest spamctl.toml in the working directory or one of its parents
wins, unless SPAMCTL_CONFIG names a file.  ``spamctl --config`` bypasses
the search entirely.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from spamctl.config.models import SpamConfig

CONFIG_FILENAME = "spamctl.toml"
CONFIG_ENV_VAR = "SPAMCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for spamctl.toml.

    Checks SPAMCTL_CONFIG first; returns None if nothing is found.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def load_config(path: Path | None = None, cwd: Path | None = None) -> SpamConfig:
    """Load and validate config from a TOML file (defaults if none found)."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        return SpamConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return SpamConfig.model_validate(data)

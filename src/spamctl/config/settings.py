"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs (CLI flags passed by Click)
  2. Env vars (``SPAMCTL_*`` prefix, ``__`` for nested fields)
  3. TOML file (``spamctl.toml`` discovered via walk-up)
  4. Code defaults (baked into the section models)
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from spamctl.config.discovery import find_config
from spamctl.config.models import DomainsConfig, FiltersConfig, ProviderConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``spamctl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed from from_cli() to settings_customise_sources().
_tls = threading.local()


class SpamSettings(BaseSettings):
    """Settings for the whole spamctl CLI, frozen after construction.

    Attributes:
        root: Base directory for relative paths (parent of ``spamctl.toml``,
            or CWD if no config was found).
        config_path: The config file in use, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SPAMCTL_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    filters: FiltersConfig = Field(default_factory=FiltersConfig)
    domains: DomainsConfig = Field(default_factory=DomainsConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> SpamSettings:
        """Construct settings from a CLI invocation.

        Discovers ``spamctl.toml`` via walk-up (or explicit *config_path*),
        resolves *root* from the config file's directory, and merges CLI
        flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(root=resolved_root, config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    def resolve(self, path: str) -> Path:
        """Resolve a configured path against :attr:`root`."""
        p = Path(path).expanduser()
        return p if p.is_absolute() else self.root / p

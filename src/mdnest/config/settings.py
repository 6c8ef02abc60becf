"""MdnSettings: one frozen object built from CLI flags, env vars and TOML.

Sources, highest priority first: keyword arguments (CLI flags), ``MDNEST_*``
environment variables (``__`` separates nested sections), the discovered
``mdnest.toml``, then the defaults in :mod:`mdnest.config.models`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from mdnest.config.discovery import find_config
from mdnest.config.models import DocumentsConfig, TreeConfig

# TOML file for the settings instance currently being built.
_active_toml: ContextVar[Path | None] = ContextVar("mdnest_active_toml", default=None)


def default_data_dir() -> Path:
    """Per-user directory holding the store database."""
    return Path.home() / ".mdnest"


def _resolve_config(config_path: str | None, start: Path | None) -> Path | None:
    if config_path:
        explicit = Path(config_path)
        return explicit if explicit.is_file() else None
    return find_config(start)


class MdnSettings(BaseSettings):
    """Runtime settings shared by the CLI, services and workspace.

    Attributes:
        data_dir: Directory holding ``mdnest.db`` (the persistent stores).
        config_path: The TOML file that was loaded, if any.
        sync: Dispatch plugin events in the calling thread.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="MDNEST_",
        env_nested_delimiter="__",
    )

    data_dir: Path = Field(default_factory=default_data_dir)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    sync: bool = False

    tree: TreeConfig = Field(default_factory=TreeConfig)
    documents: DocumentsConfig = Field(default_factory=DocumentsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_path = _active_toml.get()
        if toml_path is None:
            return init_settings, env_settings
        return init_settings, env_settings, TomlConfigSettingsSource(settings_cls, toml_path)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> MdnSettings:
        """Build settings for one CLI invocation.

        *config_path* wins over walk-up discovery from *start* (default: cwd).
        Flags passed as None are left to the lower-priority sources.

        Raises:
            click.ClickException: The TOML file cannot be parsed.
        """
        toml_path = _resolve_config(config_path, start)
        overrides = {name: value for name, value in cli_flags.items() if value is not None}

        token = _active_toml.set(toml_path)
        try:
            return cls(config_path=toml_path, **overrides)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _active_toml.reset(token)

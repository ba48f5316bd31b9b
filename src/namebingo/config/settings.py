"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``NAMEBINGO_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``namebingo.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from namebingo.config.models import CardConfig, GridConfig, ServeConfig, SourceConfig

CONFIG_FILENAME = "namebingo.toml"
CONFIG_ENV_VAR = "NAMEBINGO_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate ``namebingo.toml``.

    ``NAMEBINGO_CONFIG`` wins when set (and names an existing file);
    otherwise walks up from *start* (default: cwd) like git looks for ``.git/``.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a discovered ``namebingo.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path has to reach settings_customise_sources, which is a classmethod.
_tls = threading.local()


class BingoSettings(BaseSettings):
    """Frozen settings for one namebingo invocation.

    Attributes:
        root: Directory holding ``namebingo.toml`` (or the cwd). Template
            overrides and local plugins are looked up under ``root/.namebingo``.
        config_path: The TOML file in use, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NAMEBINGO_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False
    seed: int | None = None

    # --- TOML sections ---
    grid: GridConfig = Field(default_factory=GridConfig)
    card: CardConfig = Field(default_factory=CardConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    serve: ServeConfig = Field(default_factory=ServeConfig)

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
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @property
    def state_dir(self) -> Path:
        """Per-project directory for template overrides and local plugins."""
        return self.root / ".namebingo"

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> BingoSettings:
        """Construct settings from a CLI invocation.

        Flags left at ``None`` are dropped so they do not mask env or TOML
        values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                raise click.ClickException(f"Config file not found: {p}")
            toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        flags = {key: value for key, value in cli_flags.items() if value is not None}
        _tls.toml_path = toml_path
        try:
            return cls(root=resolved_root, config_path=toml_path, **flags)
        except ValidationError as exc:
            raise click.ClickException(f"Invalid configuration: {exc}") from exc
        finally:
            _tls.toml_path = None

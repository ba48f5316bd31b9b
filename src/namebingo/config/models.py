"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, namebingo.toml only contains
overrides. A card needs nothing beyond ``[grid]`` and a name source.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_NAME = "Joker"


class GridConfig(BaseModel):
    """[grid] section. Both dimensions must be given somewhere before use."""

    model_config = {"frozen": True}

    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)


class CardConfig(BaseModel):
    """[card] section."""

    model_config = {"frozen": True}

    center: str | None = None
    default_name: str = DEFAULT_NAME
    title: str | None = None
    description: str | None = None
    strict: bool = False


class SourceConfig(BaseModel):
    """[source] section."""

    model_config = {"frozen": True}

    kind: str | None = None
    locator: str | None = None
    ldap_attribute: str = "cn"
    ldap_filter: str = "(objectClass=person)"
    timeout: float = Field(default=30.0, gt=0)


class ServeConfig(BaseModel):
    """[serve] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=0, le=65535)


"""Shared Jinja2 template loading with per-project override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
)


def build_template_environment(group: str, *, state_dir: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    Overrides are loaded from ``<state_dir>/templates/``. Both a namespaced
    directory (for example ``.namebingo/templates/card/``) and the shared
    root are searched, in that order.

    Autoescaping is always on: every template in the package emits HTML.
    """
    loaders: list[BaseLoader] = []
    if state_dir is not None:
        template_root = state_dir / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("namebingo", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )

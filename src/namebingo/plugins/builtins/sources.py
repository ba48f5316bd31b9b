"""Built-in plugin registering the file, ldap, and command name sources."""

from __future__ import annotations

from namebingo.infrastructure.sources import BUILTIN_SOURCES, NameSource
from namebingo.plugins.hookspecs import hookimpl


class BuiltinSourcesPlugin:
    """Provides the name sources that ship with namebingo."""

    @hookimpl
    def register_name_sources(self) -> dict[str, type[NameSource]]:
        return dict(BUILTIN_SOURCES)

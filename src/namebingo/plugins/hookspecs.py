"""Pluggy hook specifications for namebingo."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from namebingo.infrastructure.sources import NameSource

PROJECT_NAME = "namebingo"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class NamebingoHookSpec:
    """Hook specifications for the namebingo plugin system."""

    @hookspec
    def register_name_sources(self) -> dict[str, type[NameSource]] | None:
        """Return kind -> NameSource class mappings.

        Later registrations of an existing kind replace the earlier class.
        """

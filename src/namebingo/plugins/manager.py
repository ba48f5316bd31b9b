"""Plugin discovery and the name source registry.

Discovery: entry points (pip-installed) read through importlib.metadata,
plus local single-file plugins from ``.namebingo/plugins/``.
"""

from __future__ import annotations

import importlib.metadata
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

from namebingo.domain.errors import ConfigurationError
from namebingo.plugins.hookspecs import PROJECT_NAME, NamebingoHookSpec

if TYPE_CHECKING:
    from namebingo.infrastructure.sources import NameSource

ENTRY_POINT_GROUP = "namebingo.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Loads plugins and collects the name source kinds they provide."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(NamebingoHookSpec)
        self._sources: dict[str, type[NameSource]] | None = None

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Register built-ins, entry-point plugins, and local plugins.

        Returns the names of all registered plugins.
        """
        from namebingo.plugins.builtins.sources import BuiltinSourcesPlugin

        self.register_plugin(BuiltinSourcesPlugin(), name="builtin-sources")
        self._load_entry_points()
        if local_dir is not None:
            self._discover_local(local_dir)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        self._sources = None
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Name sources
    # ------------------------------------------------------------------

    @property
    def sources(self) -> dict[str, type[NameSource]]:
        """All registered source kinds; later plugins override earlier ones."""
        if self._sources is None:
            self._sources = self._collect_sources()
        return dict(self._sources)

    def create_source(self, kind: str, locator: str, **options: object) -> NameSource:
        """Instantiate the source registered for *kind*."""
        source_cls = self.sources.get(kind)
        if source_cls is None:
            known = ", ".join(sorted(self.sources)) or "none"
            raise ConfigurationError(f"Unknown name source {kind!r} (known: {known})", kind=kind)
        return source_cls.from_locator(locator, **options)

    def _collect_sources(self) -> dict[str, type[NameSource]]:
        from namebingo.infrastructure.sources import NameSource

        collected: dict[str, type[NameSource]] = {}
        # get_hookimpls() lists implementations in registration order.
        for impl in self._pm.hook.register_name_sources.get_hookimpls():
            try:
                mapping = impl.function()
            except Exception:
                logger.warning(
                    "Failed to collect name sources from plugin %s",
                    impl.plugin_name,
                    exc_info=True,
                )
                continue
            if mapping is None:
                continue
            if not isinstance(mapping, dict):
                logger.warning("Plugin %s returned non-dict name sources", impl.plugin_name)
                continue
            for kind, source_cls in mapping.items():
                if not (inspect.isclass(source_cls) and issubclass(source_cls, NameSource)):
                    logger.warning(
                        "Skipping name source %r from plugin %s: not a NameSource",
                        kind,
                        impl.plugin_name,
                    )
                    continue
                collected[kind] = source_cls
        return collected

    # ------------------------------------------------------------------
    # Discovery helpers
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Load ``*.py`` files in *local_dir* (``_``-prefixed names skipped).

        Classes defined in each module that carry hookimpl-decorated methods
        are instantiated and registered.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"namebingo_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name or not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=f"{module_name}.{obj.__name__}")
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _load_entry_points(self) -> None:
        """Register plugins from the ``namebingo.plugins`` entry-point group.

        An entry point may name a module, an instance, or a class; classes are
        instantiated since hook calls against a class leave ``self`` unbound.
        """
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            if self._pm.get_plugin(ep.name) is not None or self._pm.is_blocked(ep.name):
                continue
            try:
                plugin = ep.load()
                if inspect.isclass(plugin) and self._has_hook_impls(plugin):
                    plugin = plugin()
                self.register_plugin(plugin, name=ep.name)
            except Exception:
                logger.warning(
                    "Failed to load entry-point plugin %s (%s)", ep.name, ep.value, exc_info=True
                )

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Whether *cls* has a method marked by ``HookimplMarker("namebingo")``."""
        marker = f"{PROJECT_NAME}_impl"
        return any(
            callable(getattr(cls, name, None)) and getattr(getattr(cls, name), marker, None)
            for name in dir(cls)
            if not name.startswith("_")
        )

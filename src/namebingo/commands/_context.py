"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Plugins are loaded lazily so ``--help`` never imports
third-party plugin code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from namebingo.output.formatters import format_result

if TYPE_CHECKING:
    from namebingo.config.settings import BingoSettings
    from namebingo.plugins.manager import PluginManager
    from namebingo.services.card import CardService
    from namebingo.services.result import ServiceResult


class AppContext:
    """Settings, plugins, and result emission for one CLI invocation."""

    def __init__(self, settings: BingoSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from namebingo.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from namebingo.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (loaded on first access)."""
        if self._plugins is None:
            from namebingo.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load(local_dir=self.settings.state_dir / "plugins")
        return self._plugins

    @property
    def service(self) -> CardService:
        from namebingo.services.card import CardService

        return CardService(self.settings, self.plugins)

    def emit(self, result: ServiceResult, *, to_stdout: bool = False) -> None:
        """Report *result* with correct stream routing and exit semantics.

        stdout belongs to the rendered card, so status output goes to stderr
        (and only with ``-v``) unless *to_stdout* asks for a listing.

        * Success: warnings to stderr, summary as described above.
        * Failure: error to stderr, exit code 1.
        """
        if not result.ok:
            self.fail(result)
        output = format_result(result, verbose=self.settings.verbose)
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
        if to_stdout:
            click.echo(output)
        elif self.settings.verbose:
            click.echo(output, err=True)

    def fail(self, result: ServiceResult) -> NoReturn:
        """Print the failed *result* to stderr and exit 1."""
        click.echo(format_result(result, verbose=self.settings.verbose), err=True)
        raise SystemExit(1)

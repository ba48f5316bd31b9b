"""Root CLI group for namebingo with global flags and command registration."""

from __future__ import annotations

import click

from namebingo import __version__
from namebingo.commands import register_commands
from namebingo.commands._context import AppContext
from namebingo.config.settings import BingoSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="namebingo")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--config", "config_path", default=None, help="Override config file path.")
@click.option("--seed", type=int, default=None, help="Fixed shuffle seed (every card identical).")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    seed: int | None,
) -> None:
    """namebingo — randomized name bingo cards as HTML."""
    settings = BingoSettings.from_cli(
        config_path=config_path,
        verbose=verbose or None,
        log_json=log_json or None,
        seed=seed,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

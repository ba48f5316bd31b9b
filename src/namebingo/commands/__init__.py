"""Subcommand modules for namebingo.

Provides register_commands() which uses deferred imports to keep
``namebingo --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from namebingo.commands.generate import generate
    from namebingo.commands.serve import serve
    from namebingo.commands.sources import sources

    cli.add_command(generate)
    cli.add_command(serve)
    cli.add_command(sources)

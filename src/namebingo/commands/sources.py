"""sources — list the registered name source kinds."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from namebingo.commands._base import BingoCommand

if TYPE_CHECKING:
    from namebingo.commands._context import AppContext


@click.command(
    cls=BingoCommand,
    examples="""\
  namebingo sources
  namebingo -v sources""",
)
@click.pass_obj
def sources(app: AppContext) -> None:
    """List name source kinds usable with --source KIND:LOCATOR."""
    app.emit(app.service.list_sources(), to_stdout=True)

"""generate — render one card to a file or standard output."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from namebingo.commands._base import BingoCommand
from namebingo.commands._options import (
    card_options,
    load_generator,
    resolve_card_options,
    resolve_grid,
    resolve_source,
    source_options,
)
from namebingo.services.delivery import FileDelivery, StdoutDelivery

if TYPE_CHECKING:
    from namebingo.commands._context import AppContext


@click.command(
    cls=BingoCommand,
    examples="""\
  # 5x5 card from a name list, written to stdout
  namebingo generate -f names.txt -x 5 -y 5

  # Free center cell, custom filler, saved to a file
  namebingo generate -f names.txt -x 5 -y 5 -c FREE -d "Gustav Geier" -o card.html

  # Names from LDAP, with a heading
  namebingo generate -l ldap://ds.example.com:389/dc=example,dc=com -x 4 -y 4 --title "Team Bingo"

  # Names from any command
  namebingo generate --command "git log --format=%an" -x 3 -y 3""",
)
@source_options
@card_options
@click.option(
    "-o",
    "--output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="File for the HTML output (default: stdout).",
)
@click.pass_obj
def generate(
    app: AppContext,
    file: str | None,
    ldap: str | None,
    command_line: str | None,
    source_spec: str | None,
    width: int | None,
    height: int | None,
    center: str | None,
    default_name: str | None,
    strict: bool,
    title: str | None,
    description: str | None,
    output: Path | None,
) -> None:
    """Render a single bingo card as HTML."""
    settings = app.settings
    source = resolve_source(
        settings, file=file, ldap=ldap, command_line=command_line, source_spec=source_spec
    )
    spec = resolve_grid(settings, width=width, height=height)
    options = resolve_card_options(
        settings,
        center=center,
        default_name=default_name,
        strict=strict,
        title=title,
        description=description,
    )
    generator = load_generator(app, op="generate", source=source, spec=spec, options=options)
    target = FileDelivery(output) if output is not None else StdoutDelivery()
    app.emit(app.service.generate(generator, target))

"""serve — render a new card for every HTTP request."""

from __future__ import annotations

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
from namebingo.services.delivery import HttpDelivery

if TYPE_CHECKING:
    from namebingo.commands._context import AppContext


@click.command(
    cls=BingoCommand,
    examples="""\
  # Serve 5x5 cards on http://127.0.0.1:8000/
  namebingo serve -f names.txt -x 5 -y 5

  # Listen on all interfaces, port 9000, with a free center
  namebingo serve -f names.txt -x 5 -y 5 -c FREE --host 0.0.0.0 --port 9000""",
)
@source_options
@card_options
@click.option("--host", default=None, help="Bind address (default: 127.0.0.1).")
@click.option(
    "--port", default=None, type=click.IntRange(0, 65535), help="Listen port (default: 8000)."
)
@click.pass_obj
def serve(
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
    host: str | None,
    port: int | None,
) -> None:
    """Serve freshly shuffled cards over HTTP (GET /)."""
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
    # Names are read once at startup; every request reshuffles the same pool.
    generator = load_generator(app, op="serve", source=source, spec=spec, options=options)
    target = HttpDelivery(
        host=host if host is not None else settings.serve.host,
        port=port if port is not None else settings.serve.port,
    )
    app.emit(app.service.generate(generator, target))

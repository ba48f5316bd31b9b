"""Options shared by ``generate`` and ``serve``.

CLI values win over ``namebingo.toml`` / ``NAMEBINGO_*`` values, which win
over code defaults.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, ParamSpec, TypeVar

import click

from namebingo.domain.errors import BingoError
from namebingo.domain.types import GridSpec
from namebingo.services.card import CardGenerator, CardOptions
from namebingo.services.result import ServiceResult

if TYPE_CHECKING:
    from namebingo.commands._context import AppContext
    from namebingo.config.settings import BingoSettings

P = ParamSpec("P")
R = TypeVar("R")


def source_options(func: Callable[P, R]) -> Callable[P, R]:
    """Attach the mutually exclusive name source flags."""
    func = click.option(
        "--source",
        "source_spec",
        default=None,
        metavar="KIND:LOCATOR",
        help="Any registered source kind, e.g. file:names.txt (see `namebingo sources`).",
    )(func)
    func = click.option(
        "--command",
        "command_line",
        default=None,
        help="Command printing one name per line.",
    )(func)
    func = click.option(
        "-l",
        "--ldap",
        default=None,
        metavar="URL",
        help="LDAP base DN, e.g. ldap://ds.example.com:389/dc=example,dc=com",
    )(func)
    func = click.option(
        "-f",
        "--file",
        "file",
        default=None,
        type=click.Path(dir_okay=False),
        help="File containing names, one per line.",
    )(func)
    return func


def card_options(func: Callable[P, R]) -> Callable[P, R]:
    """Attach grid size and card text flags."""
    func = click.option("--description", default=None, help="Text shown below the grid.")(func)
    func = click.option("--title", default=None, help="Page title and heading.")(func)
    func = click.option(
        "--strict",
        is_flag=True,
        help="Fail when names run out instead of padding with the default name.",
    )(func)
    func = click.option(
        "-d",
        "--default",
        "default_name",
        default=None,
        help="Name used when the list runs out of names (default: Joker).",
    )(func)
    func = click.option(
        "-c", "--center", default=None, help="Replace the center cell with custom text."
    )(func)
    func = click.option(
        "-y", "--height", type=click.IntRange(min=1), default=None, help="Height of the grid."
    )(func)
    func = click.option(
        "-x", "--width", type=click.IntRange(min=1), default=None, help="Width of the grid."
    )(func)
    return func


def resolve_source(
    settings: BingoSettings,
    *,
    file: str | None,
    ldap: str | None,
    command_line: str | None,
    source_spec: str | None,
) -> tuple[str, str]:
    """Pick the single name source as ``(kind, locator)``."""
    chosen = [
        (kind, locator)
        for kind, locator in (("file", file), ("ldap", ldap), ("command", command_line))
        if locator is not None
    ]
    if source_spec is not None:
        kind, sep, locator = source_spec.partition(":")
        if not (sep and kind and locator):
            raise click.BadParameter("expected KIND:LOCATOR", param_hint="'--source'")
        chosen.append((kind, locator))

    if len(chosen) > 1:
        raise click.UsageError("--file, --ldap, --command and --source are mutually exclusive.")
    if chosen:
        return chosen[0]
    if settings.source.kind and settings.source.locator:
        return settings.source.kind, settings.source.locator
    raise click.UsageError(
        "No name source. Pass --file, --ldap, --command or --source, "
        "or set [source] kind and locator in namebingo.toml."
    )


def resolve_grid(settings: BingoSettings, *, width: int | None, height: int | None) -> GridSpec:
    width = width if width is not None else settings.grid.width
    height = height if height is not None else settings.grid.height
    missing = [
        flag for flag, value in (("-x/--width", width), ("-y/--height", height)) if value is None
    ]
    if missing:
        raise click.UsageError(
            f"Missing grid size: {', '.join(missing)} (or set [grid] in namebingo.toml)."
        )
    assert width is not None and height is not None
    return GridSpec(width, height)


def resolve_card_options(
    settings: BingoSettings,
    *,
    center: str | None,
    default_name: str | None,
    strict: bool,
    title: str | None,
    description: str | None,
) -> CardOptions:
    card = settings.card
    if default_name is None:
        default_name = card.default_name
    return CardOptions(
        center=center if center is not None else card.center,
        default_name=None if strict or card.strict else default_name,
        title=title if title is not None else card.title,
        description=description if description is not None else card.description,
    )


def load_generator(
    app: AppContext,
    *,
    op: str,
    source: tuple[str, str],
    spec: GridSpec,
    options: CardOptions,
) -> CardGenerator:
    """Read the names once and build the card generator, exiting 1 on failure."""
    loaded = app.service.load_names(*source)
    app.emit(loaded)
    names: Sequence[str] = loaded.data["names"]
    try:
        return app.service.build_generator(names, spec, options)
    except BingoError as exc:
        app.fail(ServiceResult.failure(op, exc))

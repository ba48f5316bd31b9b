"""Shuffle-and-layout engine.

Maps a name pool onto a fixed-size grid:

1. shuffle a copy of the pool with the injected random source,
2. append an endless run of the default token,
3. keep the first ``width * height`` entries,
4. replace the center cell when a center text is given.

The center index is ``(height // 2) * width + (width // 2)`` for every grid,
including even-sized ones.

INVARIANT: ``layout()`` never mutates its inputs and keeps no state between
calls, so concurrent callers may share the pool freely.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from itertools import chain, islice, repeat

from namebingo.domain.errors import ConfigurationError
from namebingo.domain.types import Cell, CellKind, GridSpec, LaidOutGrid

# SystemRandom draws from os.urandom and keeps no internal state.
_SYSTEM_RANDOM = random.SystemRandom()


def center_index(spec: GridSpec) -> int:
    """Flattened index of the center cell."""
    return (spec.height // 2) * spec.width + (spec.width // 2)


def needs_padding(pool_size: int, spec: GridSpec) -> bool:
    """Whether a pool of *pool_size* names is too short to fill *spec*."""
    return pool_size < spec.cell_count


def check_fillable(pool_size: int, spec: GridSpec, default_token: str | None) -> None:
    """Raise ConfigurationError when the pool cannot fill the grid without padding."""
    if default_token is None and needs_padding(pool_size, spec):
        msg = (
            f"{pool_size} name(s) cannot fill a {spec.width}x{spec.height} grid "
            f"({spec.cell_count} cells) and no default name is configured"
        )
        raise ConfigurationError(msg, names=pool_size, cells=spec.cell_count)


def layout(
    pool: Sequence[str],
    spec: GridSpec,
    *,
    default_token: str | None = None,
    center: str | None = None,
    rng: random.Random | None = None,
) -> LaidOutGrid:
    """Shuffle *pool* and lay it out on *spec*.

    Args:
        pool: Names to place. Duplicates are kept.
        spec: Grid dimensions.
        default_token: Filler for every slot past the end of the pool.
        center: Replacement text for the center cell.
        rng: Random source; a fresh system-backed order is drawn when omitted.

    Raises:
        ConfigurationError: The pool is shorter than the grid and no
            *default_token* was supplied.
    """
    check_fillable(len(pool), spec, default_token)

    shuffled = list(pool)
    (rng or _SYSTEM_RANDOM).shuffle(shuffled)

    filler: Iterable[str] = repeat(default_token) if default_token is not None else ()
    tokens = islice(chain(shuffled, filler), spec.cell_count)
    cells = [Cell(token) for token in tokens]

    if center is not None and cells:
        cells[center_index(spec)] = Cell(center, CellKind.CENTER)
    return tuple(cells)

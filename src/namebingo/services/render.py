"""Grid renderer — LaidOutGrid to a self-contained HTML document.

Rendering is a pure function of its inputs: the same grid, spec, and text
options always produce the same bytes. Cell kinds only select a CSS class;
the markup structure is identical for every cell.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from namebingo.domain.errors import InvariantViolation
from namebingo.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from jinja2 import Environment

    from namebingo.domain.types import GridSpec, LaidOutGrid

CARD_TEMPLATE = "card.html"


def default_environment() -> Environment:
    """Template environment with only the packaged card templates."""
    return build_template_environment("card")


def _cell_context(grid: LaidOutGrid, spec: GridSpec) -> list[dict[str, Any]]:
    cells = []
    for index, cell in enumerate(grid):
        row, col = spec.position(index)
        cells.append({"text": cell.text, "kind": cell.kind.value, "row": row, "col": col})
    return cells


def render_card(
    grid: LaidOutGrid,
    spec: GridSpec,
    *,
    title: str | None = None,
    description: str | None = None,
    env: Environment | None = None,
) -> str:
    """Render *grid* as HTML with CSS sized to *spec*.

    Raises:
        InvariantViolation: ``len(grid)`` differs from ``spec.cell_count``.
    """
    if len(grid) != spec.cell_count:
        msg = (
            f"Grid has {len(grid)} cells but a {spec.width}x{spec.height} "
            f"card needs {spec.cell_count}"
        )
        raise InvariantViolation(msg, cells=len(grid), expected=spec.cell_count)

    template = (env or default_environment()).get_template(CARD_TEMPLATE)
    return template.render(
        width=spec.width,
        height=spec.height,
        cells=_cell_context(grid, spec),
        title=title,
        description=description,
    )

"""Grid value types: cell kinds, cells, and grid dimensions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from namebingo.domain.errors import ConfigurationError


class CellKind(StrEnum):
    """Presentation tag for a laid-out cell."""

    CENTER = "center"
    NORMAL = "normal"


@dataclass(frozen=True)
class Cell:
    """One grid position: the token shown and how it is styled."""

    text: str
    kind: CellKind = CellKind.NORMAL


@dataclass(frozen=True)
class GridSpec:
    """Grid dimensions.

    Zero-sized grids are legal and lay out to no cells at all. Negative
    dimensions are rejected.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            msg = f"Grid dimensions must not be negative (got {self.width}x{self.height})"
            raise ConfigurationError(msg, width=self.width, height=self.height)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def position(self, index: int) -> tuple[int, int]:
        """Return ``(row, column)`` of a flattened row-major *index*."""
        return divmod(index, self.width)


# Row-major sequence of exactly ``GridSpec.cell_count`` cells.
LaidOutGrid = tuple[Cell, ...]

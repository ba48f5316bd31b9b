"""Rich Console factory and theme for namebingo status output.

Consoles render into a StringIO buffer so callers decide where the text
goes (stderr for status, stdout for listings). Rich drops color codes
automatically outside a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BINGO_THEME = Theme(
    {
        "bingo.ok": "bold green",
        "bingo.error": "bold red",
        "bingo.warning": "bold yellow",
        "bingo.op": "bold cyan",
        "bingo.key": "dim",
        "bingo.kind": "bold blue",
        "bingo.path": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=BINGO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()

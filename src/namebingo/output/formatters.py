"""Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op``; unknown ops fall through to a
generic key-value renderer. Large payloads (the name list) are summarized
rather than printed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from namebingo.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from namebingo.services.result import ServiceResult


def format_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* to plain or styled text."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="bingo.ok"), Text(f"  {result.op}", style="bingo.op"))


def _field(console: Console, key: str, value: Any) -> None:
    style = "bingo.path" if key in {"output", "locator", "url"} else ""
    console.print(Text.assemble((f"  {key}: ", "bingo.key"), (str(value), style)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_telemetry_tree(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_telemetry_tree(console: Console, span: dict[str, Any], indent: int = 4) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="bingo.error"),
        Text(f"  {result.op}{code}", style="bingo.op"),
        Text(" — "),
        Text(msg),
        soft_wrap=True,
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


def _render_load_names(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "source", f"{data.get('kind')}:{data.get('locator')}")
    _field(console, "names", len(data.get("names", [])))
    if verbose:
        _render_meta(console, result)


def _render_generate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "mode", data.get("mode"))
    _field(console, "grid", f"{data.get('width')}x{data.get('height')}")
    for key in ("names", "output", "url", "bytes"):
        if key in data:
            _field(console, key, data[key])
    if verbose:
        _render_meta(console, result)


def _render_sources(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Kind", style="bingo.kind", no_wrap=True)
    table.add_column("Description")
    if verbose:
        table.add_column("Class", style="dim")
    for item in result.data.get("items", []):
        row = [item["kind"], item["description"]]
        if verbose:
            row.append(item["class"])
        table.add_row(*row)
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "load_names": _render_load_names,
    "generate": _render_generate,
    "list_sources": _render_sources,
}

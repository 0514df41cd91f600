"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from wimt.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from wimt.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict) and "id" in item)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def format_ms(value: float | None) -> str:
    """Raw millisecond value as text: ``3723000``, ``12.5`` or ``-`` when unset.

    Timestamps and durations are shown unconverted; whole floats (SQLite
    REAL columns) drop their ``.0``.
    """
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(
        Text.assemble(("OK", "wimt.ok"), "  ", (result.op, "wimt.op")),
    )


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented ``key: value`` line."""
    if key == "id" or key.endswith("_id"):
        style = "wimt.id"
    elif key == "state":
        style = style_for_state(str(value))
    elif key == "name":
        style = "wimt.name"
    elif key == "duration_ms":
        style = "wimt.duration"
    else:
        style = ""
    console.print(Text.assemble((f"  {key}: ", "wimt.key"), (str(value), style)))


def _warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text(f"  ! {warning}", style="wimt.warning"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "wimt.error"), "  ", (result.op, "wimt.op"), ": ", msg)
    )

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Session renderers ─────────────────────────────────────────────────


def _render_session(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single session snapshot."""
    d = result.data
    _status_line(console, result)
    _field(console, "id", d.get("id"))
    _field(console, "category_id", d.get("category_id"))
    _field(console, "state", d.get("state"))
    _field(console, "created_at", format_ms(d.get("created_at")))
    if d.get("stopped_at") is not None:
        _field(console, "stopped_at", format_ms(d["stopped_at"]))
    active = d.get("active_segment")
    if active:
        _field(console, "running_since", format_ms(active.get("started_at")))
    history = d.get("history", [])
    _field(console, "segments", len(history))
    if d.get("duration_ms") is not None:
        _field(console, "duration_ms", format_ms(d["duration_ms"]))

    if verbose and history:
        console.print()
        console.print(_segment_table(history))
    _warnings(console, result)


def _segment_table(segments: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Segment", style="wimt.id", no_wrap=True)
    table.add_column("Started (ms)", justify="right")
    table.add_column("Stopped (ms)", justify="right")
    table.add_column("Duration (ms)", style="wimt.duration", justify="right")
    for seg in segments:
        started, stopped = seg.get("started_at"), seg.get("stopped_at")
        elapsed = stopped - started if started is not None and stopped is not None else None
        table.add_row(
            str(seg.get("id", "")),
            format_ms(started),
            format_ms(stopped),
            format_ms(elapsed),
        )
    return table


def _render_session_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="wimt.id", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("State")
    table.add_column("Created (ms)", justify="right")
    table.add_column("Segments", justify="right")
    table.add_column("Duration (ms)", style="wimt.duration", justify="right")
    for item in items:
        state = str(item.get("state", ""))
        table.add_row(
            str(item.get("id", "")),
            str(item.get("category_id", "")),
            Text(state, style=style_for_state(state)),
            format_ms(item.get("created_at")),
            str(len(item.get("history", []))),
            format_ms(item.get("duration_ms")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} sessions")


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "total_sessions", d.get("total_sessions", 0))
    _field(console, "active_sessions", d.get("active_sessions", 0))
    for key in (
        "total_duration_ms",
        "average_duration_ms",
        "longest_session_ms",
        "today_duration_ms",
        "this_week_duration_ms",
    ):
        _field(console, key, format_ms(d.get(key)))


# ── Category renderers ────────────────────────────────────────────────


def _render_category(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("id", "name", "color", "icon"):
        if result.data.get(key) is not None:
            _field(console, key, result.data[key])


def _render_category_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="wimt.id", no_wrap=True)
    table.add_column("Name", style="wimt.name")
    table.add_column("Color")
    table.add_column("Icon")
    for item in items:
        table.add_row(
            str(item.get("id", "")),
            str(item.get("name", "")),
            str(item.get("color") or ""),
            str(item.get("icon") or ""),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} categories")


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    _warnings(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Session
    "session_start": _render_session,
    "session_pause": _render_session,
    "session_resume": _render_session,
    "session_stop": _render_session,
    "session_current": _render_session,
    "session_get": _render_session,
    "session_list": _render_session_table,
    "session_stats": _render_stats,
    # Category
    "category_create": _render_category,
    "category_rename": _render_category,
    "category_list": _render_category_table,
}

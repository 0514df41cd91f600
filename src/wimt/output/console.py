"""Rich Console factory and theme for wimt output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

WIMT_THEME = Theme(
    {
        "wimt.ok": "bold green",
        "wimt.error": "bold red",
        "wimt.warning": "bold yellow",
        "wimt.op": "bold cyan",
        "wimt.key": "dim",
        "wimt.id": "bold blue",
        "wimt.name": "bold",
        "wimt.duration": "magenta",
        "wimt.state.active": "green",
        "wimt.state.paused": "yellow",
        "wimt.state.stopped": "dim",
    }
)

_STATE_STYLES: dict[str, str] = {
    "active": "wimt.state.active",
    "paused": "wimt.state.paused",
    "stopped": "wimt.state.stopped",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=WIMT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Return the Rich style name for a session state."""
    return _STATE_STYLES.get(state, "")

"""Session command group: start, pause, resume, stop, status, show, list, stats."""

from __future__ import annotations

import click

from wimt.commands._base import WimtGroup
from wimt.commands._context import AppContext
from wimt.domain.lifecycle import SessionState


@click.group(
    cls=WimtGroup,
    examples="""\
  wimt session start 3f0c...e1      # start tracking under a category
  wimt session pause                # pause the active session
  wimt session resume               # resume the latest paused session
  wimt session stop                 # stop the current session
  wimt session stats                # totals over all sessions
  wimt --json session list --state stopped""",
)
def session() -> None:
    """Track time: start, pause, resume and stop sessions."""


@session.command()
@click.argument("category_id")
@click.pass_obj
def start(app: AppContext, category_id: str) -> None:
    """Start a new session under CATEGORY_ID."""
    from wimt.services.session import SessionService

    app.emit(app.run(SessionService(app.tracker).start(category_id)))


@session.command()
@click.argument("session_id", required=False)
@click.pass_obj
def pause(app: AppContext, session_id: str | None) -> None:
    """Pause SESSION_ID (default: the active session)."""
    from wimt.services.session import SessionService

    app.emit(app.run(SessionService(app.tracker).pause(session_id)))


@session.command()
@click.argument("session_id", required=False)
@click.pass_obj
def resume(app: AppContext, session_id: str | None) -> None:
    """Resume SESSION_ID (default: the latest paused session)."""
    from wimt.services.session import SessionService

    app.emit(app.run(SessionService(app.tracker).resume(session_id)))


@session.command()
@click.argument("session_id", required=False)
@click.pass_obj
def stop(app: AppContext, session_id: str | None) -> None:
    """Stop SESSION_ID (default: the current session)."""
    from wimt.services.session import SessionService

    app.emit(app.run(SessionService(app.tracker).stop(session_id)))


@session.command()
@click.pass_obj
def status(app: AppContext) -> None:
    """Show the active (or latest paused) session."""
    from wimt.services.session import SessionService

    app.emit(SessionService(app.tracker).current())


@session.command()
@click.argument("session_id")
@click.pass_obj
def show(app: AppContext, session_id: str) -> None:
    """Show one session with its segments."""
    from wimt.services.session import SessionService

    app.emit(SessionService(app.tracker).get(session_id))


@session.command("list")
@click.option("--category", "category_id", default=None, help="Filter by category id.")
@click.option(
    "--state",
    type=click.Choice([s.value for s in SessionState]),
    default=None,
    help="Filter by session state.",
)
@click.pass_obj
def list_cmd(app: AppContext, category_id: str | None, state: str | None) -> None:
    """List sessions, oldest first."""
    from wimt.services.session import SessionService

    app.emit(SessionService(app.tracker).list_sessions(category_id=category_id, state=state))


@session.command()
@click.pass_obj
def stats(app: AppContext) -> None:
    """Total, average, longest, today and this-week durations in ms."""
    from wimt.services.session import SessionService

    app.emit(SessionService(app.tracker).stats())

"""Subcommand modules for wimt.

Provides register_commands() which attaches every command group to the
root CLI group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from wimt.commands.category import category
    from wimt.commands.session import session

    cli.add_command(category)
    cli.add_command(session)

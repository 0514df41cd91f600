"""Category command group: create, list, rename."""

from __future__ import annotations

import click

from wimt.commands._base import WimtGroup
from wimt.commands._context import AppContext


@click.group(
    cls=WimtGroup,
    examples="""\
  wimt category create "Deep work" --color "#3366ff" --icon brain
  wimt category list --search work
  wimt category rename 3f0c...e1 "Writing\"""",
)
def category() -> None:
    """Manage the categories sessions are filed under."""


@category.command()
@click.argument("name")
@click.option("--color", default=None, help="Hex color, e.g. #3366ff.")
@click.option("--icon", default=None, help="Icon label.")
@click.pass_obj
def create(app: AppContext, name: str, color: str | None, icon: str | None) -> None:
    """Create a category called NAME."""
    from wimt.services.category import CategoryService

    app.emit(app.run(CategoryService(app.tracker).create(name, color=color, icon=icon)))


@category.command("list")
@click.option("--search", default=None, help="Case-insensitive name filter.")
@click.pass_obj
def list_cmd(app: AppContext, search: str | None) -> None:
    """List categories, oldest first."""
    from wimt.services.category import CategoryService

    app.emit(CategoryService(app.tracker).list_categories(search=search))


@category.command()
@click.argument("category_id")
@click.argument("name")
@click.pass_obj
def rename(app: AppContext, category_id: str, name: str) -> None:
    """Rename CATEGORY_ID to NAME."""
    from wimt.services.category import CategoryService

    app.emit(app.run(CategoryService(app.tracker).rename(category_id, name)))

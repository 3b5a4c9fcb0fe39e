"""Command group: categories (list, create, rename, delete, reorder, restore)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from snipvault.commands._base import SnipGroup
from snipvault.services.vault import VaultService

if TYPE_CHECKING:
    from snipvault.commands._context import AppContext


_CATEGORY_EXAMPLES = """\
  snipvault category list
  snipvault category create "Prompt Ideas"
  snipvault category rename cat_seed_3 "Code Generation"
  snipvault category reorder cat_seed_2 cat_seed_1 cat_seed_3
  snipvault category delete cat_seed_7
  snipvault category restore "Docs/Comments\""""


@click.group(cls=SnipGroup, examples=_CATEGORY_EXAMPLES)
def category() -> None:
    """Create, rename, delete and reorder categories."""


@category.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List categories in manual order."""
    app.emit(VaultService(app.vault).list_categories())


@category.command(examples='  snipvault category create "Prompt Ideas"')
@click.argument("name")
@click.pass_obj
def create(app: AppContext, name: str) -> None:
    """Create a category at the end of the list."""
    app.emit(VaultService(app.vault).create_category(name))


@category.command()
@click.argument("category_id")
@click.argument("name")
@click.pass_obj
def rename(app: AppContext, category_id: str, name: str) -> None:
    """Rename a category."""
    app.emit(VaultService(app.vault).rename_category(category_id, name))


@category.command()
@click.argument("category_id")
@click.pass_obj
def delete(app: AppContext, category_id: str) -> None:
    """Delete a category; its items become uncategorized.

    Deleted default categories are not re-created until restored.
    """
    app.emit(VaultService(app.vault).delete_category(category_id))


@category.command(
    examples="""\
  snipvault category reorder cat_seed_2 cat_seed_1
  snipvault --json category reorder $(snipvault -q category list | tac)"""
)
@click.argument("ids", nargs=-1, required=True)
@click.pass_obj
def reorder(app: AppContext, ids: tuple[str, ...]) -> None:
    """Set the category order to IDS (listed first = top)."""
    app.emit(VaultService(app.vault).reorder_categories(ids))


@category.command()
@click.argument("name")
@click.pass_obj
def restore(app: AppContext, name: str) -> None:
    """Re-create a deleted default category NAME."""
    app.emit(VaultService(app.vault).restore_default_category(name))

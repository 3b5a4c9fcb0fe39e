"""Command group: items (list, create, update, delete, move, reorder)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from snipvault.commands._base import SnipGroup
from snipvault.domain.models import UNCATEGORIZED
from snipvault.services.vault import VaultService

if TYPE_CHECKING:
    from snipvault.commands._context import AppContext


_ITEM_EXAMPLES = """\
  snipvault item list --favorites
  snipvault item list --category cat_seed_3 --search refactor
  snipvault item create "Explain like I'm new" --text "Explain {topic} simply." --favorite
  snipvault item update p_k2j9x1 --no-favorite
  snipvault item move p_k2j9x1 cat_seed_2
  snipvault item reorder p_b p_a p_c --category cat_seed_2"""


@click.group(cls=SnipGroup, examples=_ITEM_EXAMPLES)
def item() -> None:
    """Create, edit, move and reorder items."""


@item.command("list")
@click.option("--category", "category_id", default=None, help="Only items in this category.")
@click.option("--uncategorized", is_flag=True, help="Only uncategorized items.")
@click.option("--favorites", is_flag=True, help="Only favorites.")
@click.option("--search", "query", default="", help="Case-insensitive title/text match.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    category_id: str | None,
    uncategorized: bool,
    favorites: bool,
    query: str,
) -> None:
    """List items in manual order."""
    if category_id and uncategorized:
        raise click.UsageError("--category and --uncategorized are mutually exclusive")
    svc = VaultService(app.vault)
    app.emit(
        svc.list_items(
            category_id=category_id,
            favorites=favorites,
            query=query,
            uncategorized=uncategorized,
        )
    )


@item.command()
@click.argument("title")
@click.option("--text", default="", help="Item body.")
@click.option("--category", "category_id", default=UNCATEGORIZED, help="Category ID.")
@click.option("--favorite", is_flag=True, help="Mark as favorite.")
@click.pass_obj
def create(app: AppContext, title: str, text: str, category_id: str, favorite: bool) -> None:
    """Create an item at the end of its category."""
    svc = VaultService(app.vault)
    app.emit(svc.create_item(title, text, category_id=category_id, favorite=favorite))


@item.command()
@click.argument("item_id")
@click.option("--title", default=None, help="New title.")
@click.option("--text", default=None, help="New text.")
@click.option("--favorite/--no-favorite", default=None, help="Set or clear the favorite flag.")
@click.pass_obj
def update(
    app: AppContext,
    item_id: str,
    title: str | None,
    text: str | None,
    favorite: bool | None,
) -> None:
    """Change an item's title, text or favorite flag."""
    changes: dict[str, Any] = {
        key: value
        for key, value in (("title", title), ("text", text), ("favorite", favorite))
        if value is not None
    }
    if not changes:
        raise click.UsageError("Nothing to update: pass --title, --text or --favorite")
    app.emit(VaultService(app.vault).update_item(item_id, **changes))


@item.command()
@click.argument("item_id")
@click.pass_obj
def delete(app: AppContext, item_id: str) -> None:
    """Delete an item."""
    app.emit(VaultService(app.vault).delete_item(item_id))


@item.command()
@click.argument("item_id")
@click.argument("category_id", required=False, default=UNCATEGORIZED)
@click.pass_obj
def move(app: AppContext, item_id: str, category_id: str) -> None:
    """Move an item to CATEGORY_ID (omit to uncategorize)."""
    app.emit(VaultService(app.vault).move_item(item_id, category_id))


@item.command()
@click.argument("ids", nargs=-1, required=True)
@click.option(
    "--category",
    "category_id",
    default=UNCATEGORIZED,
    help="Reorder within this category (default: the global order).",
)
@click.pass_obj
def reorder(app: AppContext, ids: tuple[str, ...], category_id: str) -> None:
    """Set the item order to IDS (listed first = top)."""
    app.emit(VaultService(app.vault).reorder_items(category_id, ids))

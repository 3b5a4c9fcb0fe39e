"""Item list views: category filter, favorites, free-text search."""

from __future__ import annotations

from collections.abc import Iterable

from snipvault.domain.models import UNCATEGORIZED, Item
from snipvault.domain.ordering import ordered


def matches_query(item: Item, query: str) -> bool:
    """Case-insensitive substring match on title or text. Empty query matches all."""
    if not query:
        return True
    needle = query.casefold()
    return needle in item.title.casefold() or needle in item.text.casefold()


def filter_items(
    items: Iterable[Item],
    *,
    category_id: str | None = None,
    favorites: bool = False,
    query: str = "",
    uncategorized: bool = False,
) -> list[Item]:
    """Return the items visible in a view, sorted by ``(order, id)``.

    Args:
        items: The full item collection.
        category_id: Restrict to one category (None: no restriction).
        favorites: Restrict to favorited items.
        query: Free-text filter over title and text.
        uncategorized: Restrict to items without a category. Overrides
            *category_id*.
    """
    if uncategorized:
        category_id = UNCATEGORIZED
    selected = [
        it
        for it in items
        if (category_id is None or it.category_id == category_id)
        and (not favorites or it.favorite)
        and matches_query(it, query.strip())
    ]
    return ordered(selected)

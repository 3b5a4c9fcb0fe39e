"""Manual ordering — scopes, reorder and move.

Three scopes carry comparable ``order`` values:

- :class:`CategoryList` — every category.
- :class:`ItemsInCategory` — items sharing one ``category_id``.
- :class:`AllItems` — every item regardless of category.  The All view and
  the Favorites view both reorder in this scope.

Within a scope the total order is ``(order, id)``; values need not be
contiguous.  ``reorder`` assigns ``1 + position`` to every listed id that
belongs to the scope and leaves everything else untouched.  ``move`` only
changes ``category_id``: the moved item keeps its old ``order`` and may
collide with a sibling until the next ``reorder`` of its new scope.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar, assert_never

from snipvault.domain.ids import now_ms
from snipvault.domain.models import UNCATEGORIZED, Category, Item, Snapshot

T = TypeVar("T", Category, Item)


@dataclass(frozen=True)
class CategoryList:
    """The category collection."""


@dataclass(frozen=True)
class ItemsInCategory:
    """Items whose ``category_id`` equals *category_id*."""

    category_id: str


@dataclass(frozen=True)
class AllItems:
    """Every item (the global scope)."""


Scope = CategoryList | ItemsInCategory | AllItems


def item_scope(category_id: str) -> ItemsInCategory | AllItems:
    """Map a facade-level category id to an item scope.

    The empty category id selects the global scope.
    """
    if category_id == UNCATEGORIZED:
        return AllItems()
    return ItemsInCategory(category_id)


def ordered(entities: Iterable[T]) -> list[T]:
    """Sort entities by ``(order, id)``."""
    return sorted(entities, key=lambda e: (e.order, e.id))


def ordered_ids(entities: Iterable[Category] | Iterable[Item]) -> list[str]:
    return [e.id for e in ordered(entities)]


def scope_members(snapshot: Snapshot, scope: Scope) -> list[Category] | list[Item]:
    """Return the entities of *scope*, sorted by ``(order, id)``."""
    match scope:
        case CategoryList():
            return ordered(snapshot.categories)
        case ItemsInCategory(category_id=category_id):
            return ordered(it for it in snapshot.items if it.category_id == category_id)
        case AllItems():
            return ordered(snapshot.items)
        case _:
            assert_never(scope)


def array_move(ids: Sequence[str], from_index: int, to_index: int) -> list[str]:
    """Remove the element at *from_index* and reinsert it at *to_index*.

    Examples:
        >>> array_move(["a", "b", "c"], 0, 2)
        ['b', 'c', 'a']
        >>> array_move(["a", "b", "c"], 2, 0)
        ['c', 'a', 'b']
    """
    result = list(ids)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return result


def reorder(snapshot: Snapshot, scope: Scope, ids_in_order: Sequence[str]) -> Snapshot:
    """Assign ``order = 1 + position`` to each id of *scope* listed in *ids_in_order*."""
    positions = {entity_id: index + 1 for index, entity_id in enumerate(ids_in_order)}

    if isinstance(scope, CategoryList):
        categories = [
            cat.model_copy(update={"order": positions[cat.id]}) if cat.id in positions else cat
            for cat in snapshot.categories
        ]
        return snapshot.model_copy(update={"categories": categories})

    def in_scope(item: Item) -> bool:
        if isinstance(scope, ItemsInCategory):
            return item.category_id == scope.category_id
        return True

    items = [
        it.model_copy(update={"order": positions[it.id]})
        if it.id in positions and in_scope(it)
        else it
        for it in snapshot.items
    ]
    return snapshot.model_copy(update={"items": items})


def move(
    snapshot: Snapshot,
    item_id: str,
    category_id: str,
    *,
    now: int | None = None,
) -> Snapshot:
    """Reassign *item_id* to *category_id* without touching its order.

    Raises:
        KeyError: If *item_id* is not in the snapshot.
    """
    if snapshot.item(item_id) is None:
        raise KeyError(item_id)
    stamp = now if now is not None else now_ms()
    items = [
        it.model_copy(update={"category_id": category_id, "updated_at": stamp})
        if it.id == item_id
        else it
        for it in snapshot.items
    ]
    return snapshot.model_copy(update={"items": items})

"""VaultService — create, rename, delete, move and reorder operations.

Every public mutation is one ``read → reconcile → mutate → write`` cycle
(see :class:`BaseService`).  Cross-category drags are deliberately two
cycles (move, then reorder), so ordering in the destination category is
only loosely consistent between the two writes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any, assert_never

from snipvault.domain.gestures import (
    DragOutcome,
    DragSource,
    DropTarget,
    GestureClassifier,
    MoveToCategory,
    MoveToUncategorized,
    NoOp,
    ReorderCategories,
    ReorderItemsInScope,
    View,
)
from snipvault.domain.ids import CATEGORY_PREFIX, ITEM_PREFIX, generate_id, now_ms
from snipvault.domain.models import UNCATEGORIZED, Category, Item, Snapshot
from snipvault.domain.ordering import (
    AllItems,
    CategoryList,
    ItemsInCategory,
    Scope,
    item_scope,
    move,
    ordered,
    reorder,
    scope_members,
)
from snipvault.domain.views import filter_items
from snipvault.services.base import BaseService
from snipvault.services.result import ServiceResult

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("title", "text", "favorite", "category_id")


def _category_data(cat: Category, *, item_count: int | None = None) -> dict[str, Any]:
    data = cat.model_dump()
    if item_count is not None:
        data["item_count"] = item_count
    return data


def _item_data(item: Item, snapshot: Snapshot | None = None) -> dict[str, Any]:
    data = item.model_dump()
    if snapshot is not None:
        cat = snapshot.category(item.category_id) if item.category_id else None
        data["category"] = cat.name if cat is not None else ""
    return data


def _unknown_ids(ids: Iterable[str], known: Iterable[str]) -> list[str]:
    known_set = set(known)
    return [i for i in ids if i not in known_set]


class VaultService(BaseService):
    """Operations over the category and item collections."""

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read(self) -> ServiceResult:
        """Return the full reconciled snapshot."""
        snapshot = self._load()
        return ServiceResult(
            ok=True,
            op="read",
            data=snapshot.to_document(),
            meta={"categories": len(snapshot.categories), "items": len(snapshot.items)},
        )

    def snapshot(self) -> Snapshot:
        """The reconciled snapshot as a model (no ServiceResult wrapper)."""
        return self._load()

    def list_categories(self) -> ServiceResult:
        """Categories in manual order, with item counts."""
        snapshot = self._load()
        counts: dict[str, int] = {}
        for it in snapshot.items:
            counts[it.category_id] = counts.get(it.category_id, 0) + 1
        categories = [
            _category_data(cat, item_count=counts.get(cat.id, 0))
            for cat in ordered(snapshot.categories)
        ]
        return ServiceResult(
            ok=True,
            op="list_categories",
            data={
                "categories": categories,
                "count": len(categories),
                "uncategorized": counts.get(UNCATEGORIZED, 0),
            },
        )

    def list_items(
        self,
        *,
        category_id: str | None = None,
        favorites: bool = False,
        query: str = "",
        uncategorized: bool = False,
    ) -> ServiceResult:
        """Items visible in a view, sorted by ``(order, id)``."""
        op = "list_items"
        snapshot = self._load()
        if category_id and snapshot.category(category_id) is None:
            return self._fail(
                op, "CATEGORY_NOT_FOUND", f"No category found with ID: {category_id}"
            )
        items = filter_items(
            snapshot.items,
            category_id=category_id,
            favorites=favorites,
            query=query,
            uncategorized=uncategorized,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": [_item_data(it, snapshot) for it in items],
                "count": len(items),
            },
        )

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def create_category(self, name: str) -> ServiceResult:
        """Append a new category after the current maximum order."""
        op = "create_category"
        name = name.strip()
        if not name:
            return self._fail(op, "INVALID_NAME", "Category name must not be empty")

        snapshot = self._load()
        stamp = now_ms()
        category = Category(
            id=generate_id(CATEGORY_PREFIX),
            name=name,
            created_at=stamp,
            updated_at=stamp,
            order=snapshot.max_category_order() + 1,
        )
        self._commit(
            snapshot.model_copy(update={"categories": [*snapshot.categories, category]})
        )
        logger.debug("Created category %s (%r)", category.id, name)
        return ServiceResult(ok=True, op=op, data=_category_data(category))

    def rename_category(self, category_id: str, name: str) -> ServiceResult:
        op = "rename_category"
        name = name.strip()
        if not name:
            return self._fail(op, "INVALID_NAME", "Category name must not be empty")

        snapshot = self._load()
        current = snapshot.category(category_id)
        if current is None:
            return self._fail(op, "NOT_FOUND", f"No category found with ID: {category_id}")

        renamed = current.model_copy(update={"name": name, "updated_at": now_ms()})
        categories = [renamed if cat.id == category_id else cat for cat in snapshot.categories]
        self._commit(snapshot.model_copy(update={"categories": categories}))
        return ServiceResult(
            ok=True,
            op=op,
            data={**_category_data(renamed), "previous_name": current.name},
        )

    def delete_category(self, category_id: str) -> ServiceResult:
        """Delete a category; its items become uncategorized.

        Deleting a default category records it in the deleted-defaults
        registry so reconciliation does not bring it back.
        """
        op = "delete_category"
        snapshot = self._load()
        target = snapshot.category(category_id)
        if target is None:
            return self._fail(op, "NOT_FOUND", f"No category found with ID: {category_id}")

        stamp = now_ms()
        released = 0
        items: list[Item] = []
        for it in snapshot.items:
            if it.category_id == category_id:
                it = it.model_copy(update={"category_id": UNCATEGORIZED, "updated_at": stamp})
                released += 1
            items.append(it)
        categories = [cat for cat in snapshot.categories if cat.id != category_id]
        self._commit(snapshot.model_copy(update={"categories": categories, "items": items}))

        suppressed = self._vault.registry.record(target.name)
        if suppressed:
            logger.debug("Default category %r will not be re-seeded", target.name)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": target.id,
                "name": target.name,
                "uncategorized_items": released,
                "default_suppressed": suppressed,
            },
        )

    def reorder_categories(self, ids_in_order: Sequence[str]) -> ServiceResult:
        """Assign ``order = 1 + position`` to the listed categories."""
        op = "reorder_categories"
        snapshot = self._load()
        unknown = _unknown_ids(ids_in_order, (cat.id for cat in snapshot.categories))
        self._commit(reorder(snapshot, CategoryList(), ids_in_order))
        return ServiceResult(
            ok=True,
            op=op,
            data={"ids": list(ids_in_order), "count": len(ids_in_order) - len(unknown)},
            warnings=[f"Unknown category ID ignored: {i}" for i in unknown],
        )

    def restore_default_category(self, name: str) -> ServiceResult:
        """Allow a removed default category to be re-seeded, and re-seed it."""
        op = "restore_default_category"
        canonical = self._vault.catalog.canonical(name)
        if canonical is None:
            return self._fail(
                op,
                "NOT_A_DEFAULT",
                f"{name!r} is not a default category",
                defaults=list(self._vault.catalog.names),
            )

        restored = self._vault.registry.restore(canonical)
        snapshot = self._load()
        category = snapshot.category_by_name(canonical)
        warnings: list[str] = []
        if not restored:
            warnings.append(f"{canonical!r} was not marked as deleted")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": canonical,
                "restored": restored,
                "category": _category_data(category) if category is not None else None,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def create_item(
        self,
        title: str,
        text: str = "",
        *,
        category_id: str = UNCATEGORIZED,
        favorite: bool = False,
    ) -> ServiceResult:
        """Create an item at the end of its category's order."""
        op = "create_item"
        title = title.strip()
        if not title and not text.strip():
            return self._fail(op, "INVALID_ITEM", "An item needs a title or text")

        snapshot = self._load()
        if category_id and snapshot.category(category_id) is None:
            return self._fail(
                op, "CATEGORY_NOT_FOUND", f"No category found with ID: {category_id}"
            )

        stamp = now_ms()
        item = Item(
            id=generate_id(ITEM_PREFIX),
            title=title,
            text=text,
            category_id=category_id,
            favorite=favorite,
            order=snapshot.max_item_order(category_id) + 1,
            created_at=stamp,
            updated_at=stamp,
        )
        self._commit(snapshot.model_copy(update={"items": [*snapshot.items, item]}))
        return ServiceResult(ok=True, op=op, data=_item_data(item, snapshot))

    def update_item(self, item_id: str, **changes: Any) -> ServiceResult:
        """Replace any of ``title``, ``text``, ``favorite``, ``category_id``."""
        op = "update_item"
        unsupported = sorted(set(changes) - set(_UPDATABLE_FIELDS))
        if unsupported:
            return self._fail(
                op,
                "INVALID_FIELD",
                f"Cannot update field(s): {', '.join(unsupported)}",
                allowed=list(_UPDATABLE_FIELDS),
            )

        snapshot = self._load()
        current = snapshot.item(item_id)
        if current is None:
            return self._fail(op, "NOT_FOUND", f"No item found with ID: {item_id}")

        new_category = changes.get("category_id")
        if new_category and snapshot.category(new_category) is None:
            return self._fail(
                op, "CATEGORY_NOT_FOUND", f"No category found with ID: {new_category}"
            )

        fields_changed = [
            key for key, value in changes.items() if getattr(current, key) != value
        ]
        updated = current.model_copy(update={**changes, "updated_at": now_ms()})
        items = [updated if it.id == item_id else it for it in snapshot.items]
        self._commit(snapshot.model_copy(update={"items": items}))
        return ServiceResult(
            ok=True,
            op=op,
            data={**_item_data(updated, snapshot), "fields_changed": fields_changed},
        )

    def delete_item(self, item_id: str) -> ServiceResult:
        op = "delete_item"
        snapshot = self._load()
        target = snapshot.item(item_id)
        if target is None:
            return self._fail(op, "NOT_FOUND", f"No item found with ID: {item_id}")

        items = [it for it in snapshot.items if it.id != item_id]
        self._commit(snapshot.model_copy(update={"items": items}))
        return ServiceResult(ok=True, op=op, data={"id": target.id, "title": target.title})

    def move_item(self, item_id: str, category_id: str) -> ServiceResult:
        """Move an item to another category (``""``: uncategorized).

        The item keeps its ``order`` value; follow with :meth:`reorder_items`
        to settle its position in the new category.
        """
        op = "move_item"
        snapshot = self._load()
        current = snapshot.item(item_id)
        if current is None:
            return self._fail(op, "NOT_FOUND", f"No item found with ID: {item_id}")
        if category_id and snapshot.category(category_id) is None:
            return self._fail(
                op, "CATEGORY_NOT_FOUND", f"No category found with ID: {category_id}"
            )

        moved = move(snapshot, item_id, category_id)
        self._commit(moved)
        item = moved.item(item_id)
        assert item is not None
        return ServiceResult(
            ok=True,
            op=op,
            data={**_item_data(item, moved), "from_category_id": current.category_id},
        )

    def reorder_items(self, category_id: str, ids_in_order: Sequence[str]) -> ServiceResult:
        """Reorder items within *category_id* (``""``: the global scope)."""
        op = "reorder_items"
        if category_id:
            snapshot = self._load()
            if snapshot.category(category_id) is None:
                return self._fail(
                    op, "CATEGORY_NOT_FOUND", f"No category found with ID: {category_id}"
                )
        return self._reorder_scope(op, item_scope(category_id), ids_in_order)

    def _reorder_scope(
        self,
        op: str,
        scope: ItemsInCategory | AllItems,
        ids_in_order: Sequence[str],
    ) -> ServiceResult:
        snapshot = self._load()
        members = scope_members(snapshot, scope)
        unknown = _unknown_ids(ids_in_order, (it.id for it in members))
        self._commit(reorder(snapshot, scope, ids_in_order))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "scope": _scope_name(scope),
                "ids": list(ids_in_order),
                "count": len(ids_in_order) - len(unknown),
            },
            warnings=[f"Item not in scope, ignored: {i}" for i in unknown],
        )

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------

    def drag(
        self,
        source: DragSource,
        target: DropTarget | None,
        *,
        view: View,
        hovers: Sequence[DropTarget | None] = (),
    ) -> ServiceResult:
        """Replay a drag gesture (begin, hovers, drop) and apply its outcome."""
        classifier = GestureClassifier()
        classifier.begin(source)
        for hovered in hovers:
            classifier.hover(hovered)
        outcome = classifier.drop(target, snapshot=self._load(), view=view)
        return self.apply_drag(outcome)

    def apply_drag(self, outcome: DragOutcome) -> ServiceResult:
        """Execute a classified drag outcome."""
        op = "drag"
        match outcome:
            case NoOp(reason=reason):
                return ServiceResult(ok=True, op=op, data={"outcome": "noop", "reason": reason})
            case ReorderCategories(ids=ids):
                result = self.reorder_categories(ids)
                return _drag_result(result, "reorder_categories", ids=list(ids))
            case ReorderItemsInScope(scope=scope, ids=ids):
                result = self._reorder_scope(op, scope, ids)
                return _drag_result(
                    result, "reorder_items", scope=_scope_name(scope), ids=list(ids)
                )
            case MoveToCategory(item_id=item_id, category_id=category_id, then_reorder=ids):
                return self._move_then_reorder(item_id, category_id, ids, "move_to_category")
            case MoveToUncategorized(item_id=item_id, then_reorder=ids):
                return self._move_then_reorder(
                    item_id, UNCATEGORIZED, ids, "move_to_uncategorized"
                )
            case _:
                assert_never(outcome)

    def _move_then_reorder(
        self,
        item_id: str,
        category_id: str,
        ids: tuple[str, ...] | None,
        outcome: str,
    ) -> ServiceResult:
        moved = self.move_item(item_id, category_id)
        if not moved.ok or ids is None:
            return _drag_result(moved, outcome, item_id=item_id, category_id=category_id)
        reordered = self._reorder_scope("drag", ItemsInCategory(category_id), ids)
        return _drag_result(
            reordered,
            outcome,
            item_id=item_id,
            category_id=category_id,
            ids=list(ids),
        )


def _scope_name(scope: Scope) -> str:
    match scope:
        case CategoryList():
            return "categories"
        case ItemsInCategory(category_id=category_id):
            return f"category:{category_id}"
        case AllItems():
            return "all"
        case _:
            assert_never(scope)


def _drag_result(result: ServiceResult, outcome: str, **data: Any) -> ServiceResult:
    """Re-label a delegated result as a ``drag`` result."""
    if not result.ok:
        return result.model_copy(update={"op": "drag"})
    return ServiceResult(
        ok=True,
        op="drag",
        data={"outcome": outcome, **data},
        warnings=result.warnings,
    )

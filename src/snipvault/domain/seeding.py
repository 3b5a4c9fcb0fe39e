"""SeedReconciler — keeps the default catalog present in user data.

Two entry points:

- :meth:`SeedReconciler.initial_snapshot` runs once, when no snapshot has
  ever been stored.  It seeds every catalog category *and* its items.
- :meth:`SeedReconciler.reconcile` runs on every later read.  It appends
  catalog categories that are missing (case-insensitive name match) and
  not listed in the deleted-defaults set.  It never seeds items.

Both are pure given the injected clock and id factory.  ``reconcile`` is
idempotent: a reconciled snapshot comes back unchanged (same object).
"""

from __future__ import annotations

from collections.abc import Callable, Collection

from snipvault.domain.catalog import DEFAULT_CATALOG, DefaultCatalog
from snipvault.domain.ids import (
    CATEGORY_PREFIX,
    ITEM_PREFIX,
    generate_id,
    now_ms,
    seed_category_id,
)
from snipvault.domain.models import Category, Item, Snapshot


class SeedReconciler:
    """Reconciles a :class:`DefaultCatalog` into snapshots.

    Parameters:
        catalog: The default catalog to seed from.
        clock: Returns the current time in epoch milliseconds.
        id_factory: Generates a fresh id for a prefix.
    """

    def __init__(
        self,
        catalog: DefaultCatalog = DEFAULT_CATALOG,
        *,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[str], str] = generate_id,
    ) -> None:
        self._catalog = catalog
        self._clock = clock
        self._id_factory = id_factory

    @property
    def catalog(self) -> DefaultCatalog:
        return self._catalog

    def missing_names(self, snapshot: Snapshot, deleted: Collection[str] = ()) -> list[str]:
        """Catalog names that reconciliation would add, in catalog order."""
        present = {cat.name.casefold() for cat in snapshot.categories}
        removed = {name.casefold() for name in deleted}
        return [
            name
            for name in self._catalog.names
            if name.casefold() not in present and name.casefold() not in removed
        ]

    def reconcile(self, snapshot: Snapshot, deleted: Collection[str] = ()) -> Snapshot:
        """Append missing, non-deleted catalog categories after the current maximum order."""
        missing = self.missing_names(snapshot, deleted)
        if not missing:
            return snapshot

        stamp = self._clock()
        max_order = snapshot.max_category_order()
        added = [
            Category(
                id=self._id_factory(CATEGORY_PREFIX),
                name=name,
                created_at=stamp,
                updated_at=stamp,
                order=max_order + k,
            )
            for k, name in enumerate(missing, start=1)
        ]
        return snapshot.model_copy(update={"categories": [*snapshot.categories, *added]})

    def initial_snapshot(self, deleted: Collection[str] = ()) -> Snapshot:
        """Build the first-run snapshot: catalog categories plus their seed items.

        Category ``order`` equals the 1-based catalog position.  Item ``order``
        runs across the whole catalog so the All view lists seed items in
        catalog order.
        """
        stamp = self._clock()
        removed = {name.casefold() for name in deleted}
        categories: list[Category] = []
        items: list[Item] = []
        item_order = 1

        for position, entry in enumerate(self._catalog.entries, start=1):
            if entry.name.casefold() in removed:
                continue
            category_id = seed_category_id(position)
            categories.append(
                Category(
                    id=category_id,
                    name=entry.name,
                    created_at=stamp,
                    updated_at=stamp,
                    order=position,
                )
            )
            for seed in entry.items:
                items.append(
                    Item(
                        id=self._id_factory(ITEM_PREFIX),
                        title=seed.title,
                        text=seed.text,
                        category_id=category_id,
                        favorite=False,
                        order=item_order,
                        created_at=stamp,
                        updated_at=stamp,
                    )
                )
                item_order += 1

        return Snapshot(categories=categories, items=items)

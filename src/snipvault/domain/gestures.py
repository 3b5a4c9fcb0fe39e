"""Drag gesture classification.

A pointer drag is a ``begin → hover* → drop`` sequence.  The
:class:`GestureClassifier` state machine tracks it and hands the effective
drop target to :func:`classify_drop`, which turns it into exactly one
:data:`DragOutcome`:

==================  ==========================================================
Outcome             Produced when
==================  ==========================================================
MoveToCategory      item dropped on a category, or on an item of another
                    category (with a follow-up reorder of that category)
MoveToUncategorized item dropped on the uncategorized zone, or on an
                    uncategorized item while it lives elsewhere
ReorderCategories   category dropped on another category
ReorderItemsInScope item dropped on an item in the All or Favorites view
                    (global scope), or on a sibling of the same category
NoOp                anything else
==================  ==========================================================

A fast release may report no drop target at all; the most recent hover
target observed during the drag is used instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from snipvault.domain.models import UNCATEGORIZED, Snapshot
from snipvault.domain.ordering import (
    AllItems,
    ItemsInCategory,
    array_move,
    ordered_ids,
    scope_members,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Drag sources and drop targets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DragItem:
    item_id: str


@dataclass(frozen=True)
class DragCategory:
    category_id: str


DragSource = DragItem | DragCategory


@dataclass(frozen=True)
class CategoryTarget:
    """A category row; a drop zone for items and a sort target for categories."""

    category_id: str


@dataclass(frozen=True)
class UncategorizedTarget:
    """The uncategorized drop zone."""


@dataclass(frozen=True)
class ItemTarget:
    item_id: str


DropTarget = CategoryTarget | UncategorizedTarget | ItemTarget


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


class ViewKind(StrEnum):
    """Which item list is on screen while dragging."""

    ALL = "all"
    FAVORITES = "favorites"
    CATEGORY = "category"


@dataclass(frozen=True)
class View:
    kind: ViewKind = ViewKind.ALL
    category_id: str = UNCATEGORIZED

    @classmethod
    def all(cls) -> View:
        return cls(ViewKind.ALL)

    @classmethod
    def favorites(cls) -> View:
        return cls(ViewKind.FAVORITES)

    @classmethod
    def category(cls, category_id: str) -> View:
        return cls(ViewKind.CATEGORY, category_id)

    @property
    def is_global(self) -> bool:
        """True for views that reorder in the global item scope."""
        return self.kind in (ViewKind.ALL, ViewKind.FAVORITES)


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MoveToCategory:
    """Move *item_id* into *category_id*, then optionally reorder that category."""

    item_id: str
    category_id: str
    then_reorder: tuple[str, ...] | None = None


@dataclass(frozen=True)
class MoveToUncategorized:
    """Clear *item_id*'s category, then optionally reorder the uncategorized items."""

    item_id: str
    then_reorder: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ReorderCategories:
    ids: tuple[str, ...]


@dataclass(frozen=True)
class ReorderItemsInScope:
    scope: ItemsInCategory | AllItems
    ids: tuple[str, ...]


@dataclass(frozen=True)
class NoOp:
    reason: str = ""


DragOutcome = (
    MoveToCategory | MoveToUncategorized | ReorderCategories | ReorderItemsInScope | NoOp
)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _move_within(ids: list[str], source_id: str, target_id: str) -> list[str] | None:
    """``array_move`` from *source_id*'s index to *target_id*'s index, or None."""
    if source_id not in ids or target_id not in ids:
        return None
    from_index = ids.index(source_id)
    to_index = ids.index(target_id)
    if from_index == to_index:
        return None
    return array_move(ids, from_index, to_index)


def classify_drop(
    source: DragSource,
    target: DropTarget | None,
    *,
    snapshot: Snapshot,
    view: View,
) -> DragOutcome:
    """Classify a drop into a single structural outcome. First matching rule wins."""
    if target is None:
        return NoOp("no drop target")

    if isinstance(source, DragCategory):
        if not isinstance(target, CategoryTarget):
            return NoOp("categories only sort among categories")
        if target.category_id == source.category_id:
            return NoOp("dropped on itself")
        reordered = _move_within(
            ordered_ids(snapshot.categories), source.category_id, target.category_id
        )
        if reordered is None:
            return NoOp("unknown category")
        return ReorderCategories(tuple(reordered))

    dragged = snapshot.item(source.item_id)
    if dragged is None:
        return NoOp("unknown item")

    match target:
        case CategoryTarget(category_id=category_id):
            if snapshot.category(category_id) is None:
                return NoOp("unknown category")
            return MoveToCategory(dragged.id, category_id)
        case UncategorizedTarget():
            return MoveToUncategorized(dragged.id)

    if target.item_id == dragged.id:
        return NoOp("dropped on itself")
    over = snapshot.item(target.item_id)
    if over is None:
        return NoOp("unknown item")

    if view.is_global:
        # Favorites reuses the global scope: the whole item order moves,
        # not just the favorited subset.
        reordered = _move_within(ordered_ids(snapshot.items), dragged.id, over.id)
        if reordered is None:
            return NoOp("nothing to reorder")
        return ReorderItemsInScope(AllItems(), tuple(reordered))

    if dragged.category_id == over.category_id:
        siblings = [it.id for it in scope_members(snapshot, ItemsInCategory(over.category_id))]
        reordered = _move_within(siblings, dragged.id, over.id)
        if reordered is None:
            return NoOp("nothing to reorder")
        return ReorderItemsInScope(ItemsInCategory(over.category_id), tuple(reordered))

    destination = [
        it.id for it in scope_members(snapshot, ItemsInCategory(over.category_id))
    ]
    destination.insert(destination.index(over.id) + 1, dragged.id)
    if over.category_id == UNCATEGORIZED:
        return MoveToUncategorized(dragged.id, then_reorder=tuple(destination))
    return MoveToCategory(dragged.id, over.category_id, then_reorder=tuple(destination))


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class GestureState(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVER_TARGET = "hover_target"
    NO_TARGET = "no_target"


class GestureClassifier:
    """Tracks one drag at a time: ``Idle → Dragging → {HoverTarget | NoTarget} → Idle``.

    The most recent hover target survives a later ``hover(None)``; it is
    forgotten only when a new drag begins.
    """

    def __init__(self) -> None:
        self._state = GestureState.IDLE
        self._source: DragSource | None = None
        self._hover: DropTarget | None = None

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def source(self) -> DragSource | None:
        return self._source

    @property
    def hover_target(self) -> DropTarget | None:
        return self._hover

    def begin(self, source: DragSource) -> None:
        """Start dragging *source*, discarding any previously tracked hover target."""
        self._source = source
        self._hover = None
        self._state = GestureState.DRAGGING

    def hover(self, target: DropTarget | None) -> None:
        """Record the target currently under the pointer (None: over nothing)."""
        if self._state is GestureState.IDLE:
            return
        if target is None:
            self._state = GestureState.NO_TARGET
            return
        self._hover = target
        self._state = GestureState.HOVER_TARGET

    def drop(
        self,
        target: DropTarget | None,
        *,
        snapshot: Snapshot,
        view: View,
    ) -> DragOutcome:
        """Finish the drag and classify it. Always returns to Idle."""
        if self._state is GestureState.IDLE or self._source is None:
            return NoOp("no drag in progress")

        effective = target if target is not None else self._hover
        outcome = classify_drop(self._source, effective, snapshot=snapshot, view=view)
        logger.debug(
            "Drag ended: source=%s target=%s outcome=%s",
            self._source,
            effective,
            type(outcome).__name__,
        )
        self._source = None
        self._state = GestureState.IDLE
        return outcome

    def cancel(self) -> None:
        """Abort the current drag without producing an outcome."""
        self._source = None
        self._state = GestureState.IDLE

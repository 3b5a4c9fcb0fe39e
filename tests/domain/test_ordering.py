"""Tests for scopes, reorder, move and array_move."""

from __future__ import annotations

import pytest

from snipvault.domain.ordering import (
    AllItems,
    CategoryList,
    ItemsInCategory,
    array_move,
    item_scope,
    move,
    ordered_ids,
    reorder,
    scope_members,
)
from tests.conftest import make_category, make_item, make_snapshot


class TestArrayMove:
    def test_forward(self) -> None:
        assert array_move(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]

    def test_backward(self) -> None:
        assert array_move(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]

    def test_same_index(self) -> None:
        assert array_move(["a", "b"], 1, 1) == ["a", "b"]

    def test_input_untouched(self) -> None:
        ids = ["a", "b", "c"]
        array_move(ids, 0, 2)
        assert ids == ["a", "b", "c"]


class TestItemScope:
    def test_empty_category_is_global(self) -> None:
        assert item_scope("") == AllItems()

    def test_category(self) -> None:
        assert item_scope("c1") == ItemsInCategory("c1")


class TestOrdered:
    def test_ties_broken_by_id(self) -> None:
        items = [make_item("b", order=1), make_item("a", order=1), make_item("c", order=0)]
        assert ordered_ids(items) == ["c", "a", "b"]


class TestReorder:
    def test_categories(self) -> None:
        snap = make_snapshot(
            [
                make_category("c1", order=1),
                make_category("c2", order=2),
                make_category("c3", order=3),
            ]
        )
        out = reorder(snap, CategoryList(), ["c3", "c1", "c2"])
        assert ordered_ids(out.categories) == ["c3", "c1", "c2"]
        assert [c.order for c in out.categories] == [2, 3, 1]

    def test_within_category_leaves_others(self) -> None:
        snap = make_snapshot(
            [make_category("c1"), make_category("c2", order=2)],
            [
                make_item("a", category_id="c1", order=1),
                make_item("b", category_id="c1", order=2),
                make_item("x", category_id="c2", order=7),
            ],
        )
        out = reorder(snap, ItemsInCategory("c1"), ["b", "a", "x"])
        assert out.item("a").order == 2
        assert out.item("b").order == 1
        # x is listed but outside the scope
        assert out.item("x").order == 7

    def test_partial_list(self) -> None:
        snap = make_snapshot(
            items=[make_item("a", order=5), make_item("b", order=6), make_item("c", order=9)]
        )
        out = reorder(snap, AllItems(), ["c", "a"])
        assert [out.item(i).order for i in ("a", "b", "c")] == [2, 6, 1]

    def test_global_scope_spans_categories(self) -> None:
        snap = make_snapshot(
            [make_category("c1")],
            [make_item("a", category_id="c1", order=1), make_item("b", order=1)],
        )
        out = reorder(snap, AllItems(), ["b", "a"])
        assert ordered_ids(out.items) == ["b", "a"]

    def test_returns_new_snapshot(self) -> None:
        snap = make_snapshot(items=[make_item("a", order=3)])
        out = reorder(snap, AllItems(), ["a"])
        assert snap.item("a").order == 3
        assert out.item("a").order == 1


class TestMove:
    def test_keeps_order(self) -> None:
        snap = make_snapshot(
            [make_category("c1"), make_category("c2", order=2)],
            [make_item("a", category_id="c1", order=4)],
        )
        out = move(snap, "a", "c2", now=42)
        moved = out.item("a")
        assert moved.category_id == "c2"
        assert moved.order == 4
        assert moved.updated_at == 42

    def test_to_uncategorized(self) -> None:
        snap = make_snapshot([make_category("c1")], [make_item("a", category_id="c1")])
        assert move(snap, "a", "").item("a").category_id == ""

    def test_unknown_item(self) -> None:
        with pytest.raises(KeyError):
            move(make_snapshot(), "nope", "c1")


class TestScopeMembers:
    def test_members_sorted(self) -> None:
        snap = make_snapshot(
            [make_category("c1")],
            [
                make_item("b", category_id="c1", order=1),
                make_item("a", category_id="c1", order=1),
                make_item("z", order=0),
            ],
        )
        assert [i.id for i in scope_members(snap, ItemsInCategory("c1"))] == ["a", "b"]
        assert [i.id for i in scope_members(snap, AllItems())] == ["z", "a", "b"]
        assert [c.id for c in scope_members(snap, CategoryList())] == ["c1"]

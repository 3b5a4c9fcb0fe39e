"""Tests for operation-specific Rich renderers."""

from snipvault.output.renderers import render_quiet, render_result
from snipvault.services.result import ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _item(iid: str, title: str, category: str = "", **extra: object) -> dict[str, object]:
    return {"id": iid, "title": title, "category": category, "text": "", "order": 1, **extra}


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        result = ServiceResult.failure("rename_category", "INVALID_NAME", "Name required")
        output = render_result(result)
        assert "ERROR" in output
        assert "rename_category" in output
        assert "Name required" in output

    def test_verbose_shows_detail(self) -> None:
        result = ServiceResult.failure("import_csv", "CSV_IMPORT_FAILED", "Bad", imported=2)
        output = render_result(result, verbose=True)
        assert "CSV_IMPORT_FAILED" in output
        assert "imported: 2" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="x"))


# ── Listings ─────────────────────────────────────────────────────────


class TestListings:
    def test_category_table(self) -> None:
        result = _ok(
            "list_categories",
            categories=[
                {"id": "cat_seed_1", "name": "Asking", "order": 1, "item_count": 3},
                {"id": "cat_b", "name": "Mine", "order": 2, "item_count": 0},
            ],
            count=2,
            uncategorized=4,
        )
        output = render_result(result)
        assert "cat_seed_1" in output
        assert "Asking" in output
        assert "2 categories, 4 uncategorized items" in output

    def test_item_table(self) -> None:
        result = _ok(
            "list_items",
            items=[_item("p_a", "Alpha", "Coding", favorite=True), _item("p_b", "Beta")],
            count=2,
        )
        output = render_result(result)
        assert "p_a" in output
        assert "Coding" in output
        assert "uncategorized" in output
        assert "★" in output
        assert "2 items" in output

    def test_item_table_verbose_preview(self) -> None:
        long_text = "word " * 40
        result = _ok("list_items", items=[_item("p_a", "Alpha", text=long_text)], count=1)
        output = render_result(result, verbose=True)
        assert "…" in output

    def test_snapshot(self) -> None:
        result = ServiceResult(
            ok=True,
            op="read",
            data={
                "categories": [
                    {"id": "c2", "name": "Second", "order": 2},
                    {"id": "c1", "name": "First", "order": 1},
                ],
                "items": [
                    {"id": "p_a", "title": "In first", "categoryId": "c1", "order": 1},
                    {"id": "p_b", "title": "Loose", "categoryId": "", "order": 1},
                ],
            },
            meta={"categories": 2, "items": 2},
        )
        output = render_result(result)
        assert output.index("First") < output.index("In first") < output.index("Second")
        assert "(empty)" in output
        assert "Uncategorized" in output
        assert "2 categories, 2 items" in output


# ── Mutations and drags ──────────────────────────────────────────────


class TestMutationRenderer:
    def test_rename(self) -> None:
        output = render_result(
            _ok("rename_category", id="cat_1", name="New", previous_name="Old", order=1)
        )
        assert output.startswith("OK")
        assert "previous_name: Old" in output
        assert "order" not in output

    def test_update_fields_changed(self) -> None:
        output = render_result(_ok("update_item", id="p_a", title="T", fields_changed=[]))
        assert "fields_changed: none" in output

    def test_drag_noop(self) -> None:
        output = render_result(_ok("drag", outcome="noop", reason="dropped on itself"))
        assert "noop" in output
        assert "dropped on itself" in output

    def test_drag_move(self) -> None:
        output = render_result(
            _ok("drag", outcome="move_to_uncategorized", item_id="p_a", category_id="")
        )
        assert "category_id: uncategorized" in output

    def test_transfer(self) -> None:
        output = render_result(
            _ok("import_csv", path="in.csv", imported=3, skipped=0, categories_created=["X"])
        )
        assert "imported: 3" in output
        assert "categories_created: 1" in output

    def test_generic_fallback(self) -> None:
        output = render_result(_ok("something_else", thing=[1, 2]))
        assert "thing: [1,2]" in output


class TestQuiet:
    def test_ids_for_listings(self) -> None:
        result = _ok("list_categories", categories=[{"id": "c1"}, {"id": "c2"}])
        assert render_quiet(result) == "c1\nc2"

    def test_status_for_mutations(self) -> None:
        assert render_quiet(_ok("delete_item", id="p_a")) == "OK: delete_item"

    def test_error(self) -> None:
        result = ServiceResult.failure("delete_item", "NOT_FOUND", "gone")
        assert render_quiet(result) == "ERROR: delete_item — gone"

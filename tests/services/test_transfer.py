"""Tests for TransferService — JSON and CSV import/export."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from snipvault.services.transfer import TransferService, is_favorite_token
from snipvault.services.vault import VaultService
from tests.conftest import create_category, create_item, make_category, make_item, make_snapshot

if TYPE_CHECKING:
    from snipvault.infrastructure.vault import Vault


@pytest.fixture
def svc(vault: Vault) -> TransferService:
    return TransferService(vault)


class TestExportJson:
    def test_pretty_printed_snapshot(self, svc: TransferService, tmp_path: Path) -> None:
        out = tmp_path / "out" / "backup.json"
        result = svc.export_json(out)
        assert result.ok
        assert result.data == {"path": str(out), "categories": 7, "items": 21}
        raw = out.read_text(encoding="utf-8")
        assert raw.startswith('{\n  "categories"')
        doc = json.loads(raw)
        assert "categoryId" in doc["items"][0]


class TestExportCsv:
    def test_rows(self, vault: Vault, svc: TransferService, tmp_path: Path) -> None:
        create_item(vault, "Loose", text="line one\nline two", favorite=True)
        out = tmp_path / "items.csv"
        assert svc.export_csv(out).data["items"] == 22
        with out.open(newline="", encoding="utf-8") as fh:
            rows = list(csv.DictReader(fh))
        assert list(rows[0]) == ["title", "text", "category", "favorite"]
        loose = next(r for r in rows if r["title"] == "Loose")
        assert loose == {
            "title": "Loose",
            "text": "line one\nline two",
            "category": "",
            "favorite": "1",
        }
        seeded = [r for r in rows if r["title"] != "Loose"]
        assert {r["category"] for r in seeded} >= {"Asking", "Docs/Comments"}
        assert {r["favorite"] for r in seeded} == {"0"}


class TestImportDispatch:
    def test_unsupported_type(self, svc: TransferService, tmp_path: Path) -> None:
        result = svc.import_file(tmp_path / "notes.txt")
        assert not result.ok
        assert result.error.code == "UNSUPPORTED_FILE_TYPE"
        assert result.error.message == "Unsupported file type. Please import JSON or CSV."

    def test_extension_case_insensitive(self, svc: TransferService, tmp_path: Path) -> None:
        path = tmp_path / "DATA.CSV"
        path.write_text("title,text\nHello,World\n", encoding="utf-8")
        assert svc.import_file(path).op == "import_csv"


class TestImportJson:
    def test_replaces_snapshot(self, vault: Vault, svc: TransferService, tmp_path: Path) -> None:
        snap = make_snapshot(
            [make_category("c1", "Imported", order=1)],
            [make_item("p_1", category_id="c1")],
        )
        path = tmp_path / "in.json"
        path.write_text(json.dumps(snap.to_document()), encoding="utf-8")
        result = svc.import_file(path)
        assert result.ok
        stored = vault.store.read()
        assert stored == snap

    def test_roundtrip_through_export(
        self, vault: Vault, svc: TransferService, tmp_path: Path
    ) -> None:
        create_category(vault, "Extra")
        path = tmp_path / "backup.json"
        svc.export_json(path)
        before = VaultService(vault).snapshot()
        VaultService(vault).delete_category("cat_seed_1")
        assert svc.import_file(path).ok
        assert vault.store.read() == before

    def test_legacy_prompts_key(self, vault: Vault, svc: TransferService, tmp_path: Path) -> None:
        path = tmp_path / "old.json"
        path.write_text(
            json.dumps({"categories": [], "prompts": [{"id": "p_old", "title": "Old"}]}),
            encoding="utf-8",
        )
        assert svc.import_file(path).ok
        assert [it.id for it in vault.store.read().items] == ["p_old"]

    @pytest.mark.parametrize(
        "payload",
        [
            "{not json",
            '{"categories": 5}',
            '{"categories": [{"id": "c", "name": "x"}, {"id": "c", "name": "y"}]}',
        ],
        ids=["syntax", "schema", "duplicate-ids"],
    )
    def test_invalid_aborts_atomically(
        self, vault: Vault, svc: TransferService, tmp_path: Path, payload: str
    ) -> None:
        before = VaultService(vault).snapshot()
        path = tmp_path / "bad.json"
        path.write_text(payload, encoding="utf-8")
        result = svc.import_file(path)
        assert not result.ok
        assert result.error.code == "INVALID_JSON"
        assert vault.store.read() == before

    def test_dangling_category_cleared(
        self, vault: Vault, svc: TransferService, tmp_path: Path
    ) -> None:
        snap = make_snapshot(items=[make_item("p_1", category_id="gone")])
        path = tmp_path / "in.json"
        path.write_text(json.dumps(snap.to_document()), encoding="utf-8")
        result = svc.import_file(path)
        assert result.ok
        assert result.warnings
        assert vault.store.read().item("p_1").category_id == ""


class TestImportCsv:
    def test_rows_and_categories(self, vault: Vault, svc: TransferService, tmp_path: Path) -> None:
        path = tmp_path / "in.csv"
        path.write_text(
            "Title,Prompt,Category,Favorite\n"
            "One,first,coding,yes\n"
            "Two,second,New Cat,0\n"
            "Three,third,new cat,Y\n"
            ",,,\n"
            "Four,fourth,,\n",
            encoding="utf-8",
        )
        result = svc.import_file(path)
        assert result.ok
        assert result.data["imported"] == 4
        assert result.data["skipped"] == 1
        assert result.data["categories_created"] == ["New Cat"]

        snap = VaultService(vault).snapshot()
        by_title = {it.title: it for it in snap.items}
        assert by_title["One"].category_id == "cat_seed_3"
        assert by_title["One"].favorite is True
        assert by_title["Two"].category_id == by_title["Three"].category_id
        assert by_title["Three"].favorite is True
        assert by_title["Four"].category_id == ""
        assert by_title["Two"].text == "second"

    def test_byte_order_mark_header(
        self, vault: Vault, svc: TransferService, tmp_path: Path
    ) -> None:
        path = tmp_path / "excel.csv"
        path.write_text("title,text\nFrom Excel,body\n", encoding="utf-8-sig")
        result = svc.import_file(path)
        assert result.ok
        titles = {it.title for it in VaultService(vault).snapshot().items}
        assert "From Excel" in titles

    def test_partial_failure_keeps_earlier_rows(
        self, vault: Vault, svc: TransferService, tmp_path: Path
    ) -> None:
        path = tmp_path / "broken.csv"
        path.write_text(
            'title,text\nFirst,ok\nSecond,ok\nThird,"unterminated\n',
            encoding="utf-8",
        )
        result = svc.import_file(path)
        assert not result.ok
        assert result.error.code == "CSV_IMPORT_FAILED"
        assert result.error.detail["imported"] == 2
        titles = {it.title for it in VaultService(vault).snapshot().items}
        assert {"First", "Second"} <= titles
        assert "Third" not in titles

    def test_missing_file(self, svc: TransferService, tmp_path: Path) -> None:
        result = svc.import_file(tmp_path / "absent.csv")
        assert result.error.code == "CSV_IMPORT_FAILED"
        assert result.error.detail["imported"] == 0


@pytest.mark.parametrize(
    ("token", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("y", True), ("0", False), ("", False)],
)
def test_favorite_tokens(token: str, expected: bool) -> None:
    assert is_favorite_token(token) is expected

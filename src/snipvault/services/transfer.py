"""TransferService — JSON and CSV import/export.

JSON carries the full snapshot and imports atomically: the document is
parsed and validated completely before anything is written.

CSV carries one row per item (``title, text, category, favorite``).  Import
is row-by-row through :class:`VaultService`, creating unknown categories on
the fly; a failure partway through leaves earlier rows committed.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from snipvault.domain.models import UNCATEGORIZED, Snapshot
from snipvault.domain.ordering import ordered
from snipvault.services.base import BaseService
from snipvault.services.result import ServiceResult
from snipvault.services.vault import VaultService

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("title", "text", "category", "favorite")
FAVORITE_TOKENS = frozenset({"1", "true", "yes", "y"})

# Accepted header spellings, first match wins.
_CSV_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("title", "Title"),
    "text": ("text", "Prompt", "Text"),
    "category": ("category", "Category"),
    "favorite": ("favorite", "Favorite"),
}

_IMPORTERS = {".json": "import_json", ".csv": "import_csv"}


class CsvRowError(Exception):
    """A CSV row could not be committed."""


def _cell(row: dict[str | None, Any], column: str) -> str:
    for key in _CSV_ALIASES[column]:
        value = row.get(key)
        if value:
            return str(value).strip()
    return ""


def is_favorite_token(value: str) -> bool:
    """True for the truthy tokens ``1``, ``true``, ``yes``, ``y`` (any case)."""
    return value.strip().lower() in FAVORITE_TOKENS


class TransferService(BaseService):
    """Import and export the vault as JSON or CSV documents."""

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_json(self, path: Path) -> ServiceResult:
        """Write the full snapshot, pretty-printed, to *path*."""
        snapshot = self._load()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(snapshot.to_document(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        return ServiceResult(
            ok=True,
            op="export_json",
            data={
                "path": str(path),
                "categories": len(snapshot.categories),
                "items": len(snapshot.items),
            },
        )

    def export_csv(self, path: Path) -> ServiceResult:
        """Write one row per item to *path*."""
        snapshot = self._load()
        names = {cat.id: cat.name for cat in snapshot.categories}
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for item in ordered(snapshot.items):
                writer.writerow(
                    {
                        "title": item.title,
                        "text": item.text,
                        "category": names.get(item.category_id, ""),
                        "favorite": "1" if item.favorite else "0",
                    }
                )
        return ServiceResult(
            ok=True,
            op="export_csv",
            data={"path": str(path), "items": len(snapshot.items)},
        )

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def import_file(self, path: Path) -> ServiceResult:
        """Dispatch on the file extension. Unknown extensions are rejected unread."""
        method = _IMPORTERS.get(path.suffix.lower())
        if method is None:
            return self._fail(
                "import",
                "UNSUPPORTED_FILE_TYPE",
                "Unsupported file type. Please import JSON or CSV.",
                path=str(path),
            )
        result: ServiceResult = getattr(self, method)(path)
        return result

    def import_json(self, path: Path) -> ServiceResult:
        """Replace the whole snapshot with the document at *path*.

        Nothing is written unless the entire document parses and validates.
        """
        op = "import_json"
        try:
            raw = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            return self._fail(op, "READ_FAILED", f"Cannot read {path}: {exc}")

        try:
            snapshot = Snapshot.from_document(json.loads(raw))
        except json.JSONDecodeError as exc:
            return self._fail(op, "INVALID_JSON", "Invalid JSON file", reason=str(exc))
        except ValidationError as exc:
            return self._fail(
                op,
                "INVALID_JSON",
                "Invalid JSON file",
                errors=[err["msg"] for err in exc.errors()],
            )

        duplicates = snapshot.duplicate_ids()
        if duplicates:
            return self._fail(op, "INVALID_JSON", "Invalid JSON file", duplicate_ids=duplicates)

        warnings: list[str] = []
        category_ids = {cat.id for cat in snapshot.categories}
        dangling = [
            it.id
            for it in snapshot.items
            if it.category_id != UNCATEGORIZED and it.category_id not in category_ids
        ]
        if dangling:
            items = [
                it.model_copy(update={"category_id": UNCATEGORIZED}) if it.id in dangling else it
                for it in snapshot.items
            ]
            snapshot = snapshot.model_copy(update={"items": items})
            warnings.append(f"{len(dangling)} item(s) referenced unknown categories")

        self._commit(snapshot)
        logger.debug("Imported JSON snapshot from %s", path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "categories": len(snapshot.categories),
                "items": len(snapshot.items),
            },
            warnings=warnings,
        )

    def import_csv(self, path: Path) -> ServiceResult:
        """Create one item per row, creating missing categories by name.

        Not atomic: rows committed before a failure stay committed.
        """
        op = "import_csv"
        vault = VaultService(self._vault)
        imported = 0
        skipped = 0
        created_categories: list[str] = []
        line = 1

        try:
            with path.open(newline="", encoding="utf-8-sig") as fh:
                reader = csv.DictReader(fh, strict=True)
                for row in reader:
                    line = reader.line_num
                    title = _cell(row, "title")
                    text = _cell(row, "text")
                    if not title and not text:
                        skipped += 1
                        continue

                    category_id = UNCATEGORIZED
                    category_name = _cell(row, "category")
                    if category_name:
                        found = vault.snapshot().category_by_name(category_name)
                        if found is not None:
                            category_id = found.id
                        else:
                            created = vault.create_category(category_name)
                            if not created.ok:
                                raise CsvRowError(created.error_message)
                            category_id = created.data["id"]
                            created_categories.append(category_name)

                    result = vault.create_item(
                        title,
                        text,
                        category_id=category_id,
                        favorite=is_favorite_token(_cell(row, "favorite")),
                    )
                    if not result.ok:
                        raise CsvRowError(result.error_message)
                    imported += 1
        except (OSError, UnicodeDecodeError, csv.Error, CsvRowError) as exc:
            logger.warning("CSV import stopped at line %d after %d rows", line, imported)
            return self._fail(
                op,
                "CSV_IMPORT_FAILED",
                f"Failed to import CSV: {exc}",
                line=line,
                imported=imported,
                categories_created=created_categories,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "imported": imported,
                "skipped": skipped,
                "categories_created": created_categories,
            },
        )

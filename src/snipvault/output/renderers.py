"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from snipvault.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from snipvault.services.result import ServiceResult

_PREVIEW_WIDTH = 60


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: ids for listings, a status line otherwise."""
    if not result.ok:
        return f"ERROR: {result.op} — {result.error_message}"

    rows = result.data.get("items")
    if not isinstance(rows, list):
        rows = result.data.get("categories")
    if isinstance(rows, list):
        return "\n".join(str(row["id"]) for row in rows if isinstance(row, dict) and "id" in row)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="snip.ok"), Text(f"  {result.op}", style="snip.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="snip.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="snip.id")
    elif key == "path":
        v = Text(str(value), style="snip.path")
    elif key in ("title", "name"):
        v = Text(str(value), style="snip.title")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v)


def _preview(text: str) -> str:
    flat = " ".join(text.split())
    if len(flat) <= _PREVIEW_WIDTH:
        return flat
    return flat[: _PREVIEW_WIDTH - 1] + "…"


def _star(favorite: Any) -> Text:
    return Text("★", style="snip.favorite") if favorite else Text("")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(
        Text("ERROR", style="snip.error"),
        Text(f"  {result.op}", style="snip.op"),
        Text(" — "),
        result.error_message,
    )
    err = result.error
    if verbose and err and err.detail:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Listing renderers ─────────────────────────────────────────────────


def _render_category_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="snip.id", no_wrap=True)
    table.add_column("Name", style="snip.title")
    table.add_column("Items", justify="right")
    if verbose:
        table.add_column("Order", justify="right", style="dim")

    for position, cat in enumerate(result.data.get("categories", []), start=1):
        row = [str(position), str(cat["id"]), str(cat["name"]), str(cat.get("item_count", ""))]
        if verbose:
            row.append(str(cat["order"]))
        table.add_row(*row)

    console.print(table)
    console.print(
        f"\n{result.data.get('count', 0)} categories, "
        f"{result.data.get('uncategorized', 0)} uncategorized items"
    )


def _render_item_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="snip.id", no_wrap=True)
    table.add_column("", no_wrap=True)
    table.add_column("Title", style="snip.title")
    table.add_column("Category", style="snip.category")
    if verbose:
        table.add_column("Text", style="dim")
        table.add_column("Order", justify="right", style="dim")

    for item in items:
        category = item.get("category") or Text("uncategorized", style="snip.muted")
        row: list[Any] = [
            str(item["id"]),
            _star(item.get("favorite")),
            str(item.get("title", "")),
            category,
        ]
        if verbose:
            row.append(_preview(str(item.get("text", ""))))
            row.append(str(item.get("order", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} items")


def _render_snapshot(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render ``read``: every category in order with its items beneath it."""
    categories = sorted(result.data.get("categories", []), key=lambda c: (c["order"], c["id"]))
    items = sorted(result.data.get("items", []), key=lambda i: (i["order"], i["id"]))

    by_category: dict[str, list[dict[str, Any]]] = {}
    for item in items:
        by_category.setdefault(item.get("categoryId", ""), []).append(item)

    sections = [(cat["name"], cat["id"], by_category.get(cat["id"], [])) for cat in categories]
    if by_category.get(""):
        sections.append(("Uncategorized", "", by_category[""]))

    for name, cat_id, members in sections:
        heading = Text(name, style="snip.category")
        if cat_id:
            heading.append(f"  {cat_id}", style="snip.key")
        console.print(heading)
        if not members:
            console.print(Text("  (empty)", style="snip.muted"))
        for item in members:
            line = Text("  ")
            line.append(str(item["id"]), style="snip.id")
            line.append(" ")
            line.append_text(_star(item.get("favorite")))
            line.append(f" {item.get('title', '')}", style="snip.title")
            console.print(line)
            if verbose and item.get("text"):
                console.print(Text(f"      {_preview(str(item['text']))}", style="dim"))

    if result.meta:
        console.print(
            f"\n{result.meta.get('categories', 0)} categories, {result.meta.get('items', 0)} items"
        )


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create/rename/update/move/delete results."""
    _status_line(console, result)
    mutation_keys = (
        "id",
        "name",
        "previous_name",
        "title",
        "category",
        "category_id",
        "from_category_id",
        "favorite",
        "uncategorized_items",
        "default_suppressed",
        "restored",
    )
    for key in mutation_keys:
        if key in result.data:
            _field(console, key, result.data[key])
    if "fields_changed" in result.data:
        _field(console, "fields_changed", ", ".join(result.data["fields_changed"]) or "none")
    if verbose and "text" in result.data:
        _field(console, "text", _preview(str(result.data["text"])))


def _render_reorder(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    if "scope" in result.data:
        _field(console, "scope", result.data["scope"])
    _field(console, "count", result.data.get("count", 0))
    if verbose:
        _field(console, "ids", " ".join(result.data.get("ids", [])))


def _render_drag(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "outcome", d.get("outcome", ""))
    if d.get("outcome") == "noop":
        _field(console, "reason", d.get("reason", ""))
        return
    for key in ("item_id", "category_id", "scope"):
        if key in d:
            _field(console, key, d[key] or "uncategorized")
    if "ids" in d:
        if verbose:
            _field(console, "ids", " ".join(d["ids"]))
        else:
            _field(console, "reordered", len(d["ids"]))


# ── Transfer renderers ────────────────────────────────────────────────


def _render_transfer(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render import and export results with the path and counts."""
    _status_line(console, result)
    d = result.data
    for key in ("path", "categories", "items", "imported", "skipped"):
        if key in d:
            _field(console, key, d[key])
    created = d.get("categories_created")
    if created:
        _field(console, "categories_created", len(created))
        if verbose:
            for name in created:
                console.print(f"    {name}")


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Listings
    "read": _render_snapshot,
    "list_categories": _render_category_table,
    "list_items": _render_item_table,
    # Categories
    "create_category": _render_mutation,
    "rename_category": _render_mutation,
    "delete_category": _render_mutation,
    "restore_default_category": _render_mutation,
    "reorder_categories": _render_reorder,
    # Items
    "create_item": _render_mutation,
    "update_item": _render_mutation,
    "delete_item": _render_mutation,
    "move_item": _render_mutation,
    "reorder_items": _render_reorder,
    "drag": _render_drag,
    # Transfer
    "export_json": _render_transfer,
    "export_csv": _render_transfer,
    "import_json": _render_transfer,
    "import_csv": _render_transfer,
}

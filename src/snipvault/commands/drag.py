"""Standalone command: replay a drag-and-drop gesture.

Sources and targets are written as tokens:

- ``item:<id>`` — an item row
- ``category:<id>`` — a category row
- ``uncategorized`` — the uncategorized drop zone (targets only)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from snipvault.commands._base import SnipCommand
from snipvault.domain.gestures import (
    CategoryTarget,
    DragCategory,
    DragItem,
    DragSource,
    DropTarget,
    ItemTarget,
    UncategorizedTarget,
    View,
)
from snipvault.services.vault import VaultService

if TYPE_CHECKING:
    from snipvault.commands._context import AppContext

_UNCATEGORIZED_TOKEN = "uncategorized"


def _split(value: str) -> tuple[str, str]:
    kind, sep, ident = value.partition(":")
    if not sep or not ident:
        return kind, ""
    return kind, ident


class DragSourceType(click.ParamType):
    name = "source"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if isinstance(value, (DragItem, DragCategory)):
            return value
        kind, ident = _split(str(value))
        if ident and kind == "item":
            return DragItem(ident)
        if ident and kind == "category":
            return DragCategory(ident)
        self.fail(f"{value!r} is not item:<id> or category:<id>", param, ctx)


class DropTargetType(click.ParamType):
    name = "target"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if isinstance(value, (ItemTarget, CategoryTarget, UncategorizedTarget)):
            return value
        if value == _UNCATEGORIZED_TOKEN:
            return UncategorizedTarget()
        kind, ident = _split(str(value))
        if ident and kind == "item":
            return ItemTarget(ident)
        if ident and kind == "category":
            return CategoryTarget(ident)
        self.fail(
            f"{value!r} is not item:<id>, category:<id> or {_UNCATEGORIZED_TOKEN}", param, ctx
        )


class ViewType(click.ParamType):
    name = "view"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if isinstance(value, View):
            return value
        if value == "all":
            return View.all()
        if value == "favorites":
            return View.favorites()
        kind, ident = _split(str(value))
        if kind == "category" and ident:
            return View.category(ident)
        self.fail(f"{value!r} is not all, favorites or category:<id>", param, ctx)


@click.command(
    cls=SnipCommand,
    examples="""\
  snipvault drag item:p_a category:cat_seed_2
  snipvault drag item:p_a uncategorized
  snipvault drag category:cat_seed_5 category:cat_seed_1
  snipvault drag item:p_a item:p_c --view favorites
  snipvault drag item:p_a --hover item:p_b --hover item:p_c --view category:cat_seed_1""",
)
@click.argument("source", type=DragSourceType())
@click.argument("target", type=DropTargetType(), required=False)
@click.option(
    "--hover",
    "hovers",
    type=DropTargetType(),
    multiple=True,
    help="Targets passed over before the drop (repeatable).",
)
@click.option(
    "--view",
    type=ViewType(),
    default="all",
    show_default=True,
    help="Item list on screen: all, favorites or category:<id>.",
)
@click.pass_obj
def drag(
    app: AppContext,
    source: DragSource,
    target: DropTarget | None,
    hovers: tuple[DropTarget, ...],
    view: View,
) -> None:
    """Drag SOURCE and drop it on TARGET.

    Without TARGET the last --hover target is used, as a quick release
    would.
    """
    app.emit(VaultService(app.vault).drag(source, target, view=view, hovers=hovers))

"""Export group and import command (JSON and CSV)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from snipvault.commands._base import SnipCommand, SnipGroup
from snipvault.services.transfer import TransferService

if TYPE_CHECKING:
    from snipvault.commands._context import AppContext

_output_option = click.option(
    "-o",
    "--output",
    "output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="File to write.",
)


@click.group(
    cls=SnipGroup,
    examples="""\
  snipvault export json -o backup.json
  snipvault export csv -o items.csv""",
)
def export() -> None:
    """Export the vault as JSON or CSV."""


@export.command("json")
@_output_option
@click.pass_obj
def export_json(app: AppContext, output: Path) -> None:
    """Export the full snapshot as pretty-printed JSON."""
    app.emit(TransferService(app.vault).export_json(output))


@export.command("csv")
@_output_option
@click.pass_obj
def export_csv(app: AppContext, output: Path) -> None:
    """Export items as CSV (title, text, category, favorite)."""
    app.emit(TransferService(app.vault).export_csv(output))


@click.command(
    "import",
    cls=SnipCommand,
    examples="""\
  snipvault import backup.json
  snipvault import items.csv""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def import_cmd(app: AppContext, path: Path) -> None:
    """Import a .json snapshot (replaces everything) or a .csv of items (appends)."""
    app.emit(TransferService(app.vault).import_file(path))

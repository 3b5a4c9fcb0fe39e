"""Standalone command: show the whole vault."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from snipvault.commands._base import SnipCommand
from snipvault.services.vault import VaultService

if TYPE_CHECKING:
    from snipvault.commands._context import AppContext


@click.command(
    cls=SnipCommand,
    examples="""\
  snipvault show
  snipvault -v show
  snipvault --json show""",
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Show every category with its items."""
    app.emit(VaultService(app.vault).read())

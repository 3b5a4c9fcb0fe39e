"""Subcommand modules for snipvault.

Provides register_commands(), which imports command modules lazily so
``snipvault --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups and standalone commands on the root group."""
    # --- Groups ---
    from snipvault.commands.category import category
    from snipvault.commands.item import item
    from snipvault.commands.transfer import export

    cli.add_command(category)
    cli.add_command(item)
    cli.add_command(export)

    # --- Standalone commands ---
    from snipvault.commands.drag import drag
    from snipvault.commands.show import show
    from snipvault.commands.transfer import import_cmd

    cli.add_command(show)
    cli.add_command(drag)
    cli.add_command(import_cmd)

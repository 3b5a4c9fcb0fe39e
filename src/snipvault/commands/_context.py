"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  The vault is opened lazily so ``--help`` and
``--version`` never touch the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from snipvault.config.logging import configure_logging
from snipvault.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from snipvault.config.settings import SnipSettings
    from snipvault.infrastructure.vault import Vault
    from snipvault.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: SnipSettings) -> None:
        self.settings = settings
        self._vault: Vault | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def vault(self) -> Vault:
        """The vault instance (created lazily on first access)."""
        if self._vault is None:
            from snipvault.infrastructure.vault import Vault

            self._vault = Vault(self.settings)
        return self._vault

    def close(self) -> None:
        """Wait for background remote pushes and release the database."""
        if self._vault is not None:
            self._vault.close()
            self._vault = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout.  Warnings go to stderr unless ``--json`` already
          carries them in the payload.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

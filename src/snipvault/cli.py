"""Root CLI group for snipvault with global flags and command registration."""

from __future__ import annotations

import click

from snipvault import __version__
from snipvault.commands import register_commands
from snipvault.commands._context import AppContext
from snipvault.config.settings import SnipSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="snipvault")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (ids only for listings).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output and debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--sync", is_flag=True, help="Push to the remote mirror before returning.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    sync: bool,
) -> None:
    """snipvault — categorized prompt snippets with manual ordering."""
    settings = SnipSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        sync=sync,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

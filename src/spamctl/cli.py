"""Root CLI group for spamctl with global flags and command registration."""

from __future__ import annotations

import click

from spamctl import __version__
from spamctl.commands import register_commands
from spamctl.commands._context import AppContext
from spamctl.config.settings import SpamSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="spamctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only names and counts.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and span timings.")
@click.option("--log-json", is_flag=True, help="Write log records to stderr as JSON lines.")
@click.option("-c", "--config", "config_path", default=None, help="Use this spamctl.toml.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """spamctl: keep analytics spam filters in sync with a domain block-list."""
    settings = SpamSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

"""Root CLI group for agentsync with global flags and command registration.

Invoked without a subcommand, agentsync runs ``sync``: this is the form a
session-start hook calls, with no arguments and no output on success.
"""

from __future__ import annotations

import click
from pydantic import ValidationError

from agentsync import __version__
from agentsync.commands import register_commands
from agentsync.commands._context import AppContext
from agentsync.config.settings import SyncSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="agentsync")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Trace execution to stderr (also: DEBUG=1).")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """agentsync: publish AGENTS.md files as path-scoped rules."""
    try:
        settings = SyncSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from agentsync.commands.sync import run_sync

        run_sync(ctx.obj)


register_commands(cli)


def main() -> None:
    """Console-script entry point."""
    cli()

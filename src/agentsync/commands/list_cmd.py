"""``agentsync list``: show what a sync would publish, without writing."""

from __future__ import annotations

import click

from agentsync.commands._context import AppContext
from agentsync.services.sync import SyncService


@click.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """Show each source file, its path pattern, and its output location."""
    app.emit(SyncService(app.settings).plan())

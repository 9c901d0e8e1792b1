"""``agentsync sync``: regenerate the rules tree (also the default action)."""

from __future__ import annotations

import click

from agentsync.commands._context import AppContext
from agentsync.services.sync import SyncService


def run_sync(app: AppContext) -> None:
    """Run the pipeline and emit its result."""
    app.emit(SyncService(app.settings).sync())


@click.command()
@click.pass_obj
def sync(app: AppContext) -> None:
    """Publish every AGENTS.md as a path-scoped rule file."""
    run_sync(app)

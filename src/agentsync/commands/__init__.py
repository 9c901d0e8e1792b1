"""Subcommand modules for agentsync.

Provides register_commands() which uses deferred imports to keep
``agentsync --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from agentsync.commands.list_cmd import list_cmd
    from agentsync.commands.sync import sync

    cli.add_command(sync)
    cli.add_command(list_cmd)

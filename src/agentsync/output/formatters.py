"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (a Rich table for ``list``) or
machines (``--json``). A successful ``sync`` prints nothing in human mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from agentsync.output.console import create_console, get_output

if TYPE_CHECKING:
    from agentsync.services.result import ServiceResult


def format_rules_table(result: ServiceResult, *, no_color: bool = False) -> str:
    """Render the source/pattern/output mapping of a result as a table."""
    console = create_console(no_color=no_color)
    rules = result.data.get("rules", [])
    if not rules:
        root = escape(str(result.data.get("root", "")))
        console.print(f"No sources found under [as.path]{root}[/]")
        return get_output(console)

    table = Table(show_header=True, header_style="as.key", box=None)
    table.add_column("Source", style="as.path")
    table.add_column("Pattern", style="as.pattern")
    table.add_column("Output", style="as.path")
    for rule in rules:
        table.add_row(escape(rule["source"]), escape(rule["pattern"]), escape(rule["output"]))
    console.print(table)
    return get_output(console)


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if result.ok:
        if result.op == "plan":
            return format_rules_table(result).rstrip("\n")
        return ""
    error_msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op}: {error_msg}"

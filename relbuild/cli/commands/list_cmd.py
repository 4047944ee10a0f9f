"""List command - print matching release targets."""

from __future__ import annotations

from collections.abc import Sequence

from relbuild.cli.commands._helpers import unwrap_or_exit
from relbuild.cli.context import CLIContext
from relbuild.services.targets import filter_targets

LIST_HELP = """List all available release targets.

If filters are provided, only targets matching at least one filter are listed.
Filters can use glob patterns (* and ?).
"""


def run_list(ctx: CLIContext, filters: Sequence[str]) -> None:
    for target in unwrap_or_exit(filter_targets(ctx.targets, filters), ctx):
        ctx.console.print(target.name)

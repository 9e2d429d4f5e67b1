"""Render the dependency report locally, without GitHub."""

import asyncio
from pathlib import Path

import click

from prdeps.utils.error_handler import handle_exceptions


@click.command("report")
@handle_exceptions
@click.option("--root", "working_directory", default=".", help="Directory containing package.json")
@click.option("--elide", type=click.IntRange(min=0), default=0, help="Max rows per table (0 = all)")
@click.option("--depcheck/--no-depcheck", "run_depcheck", default=True, help="Include unused/missing dependencies")
@click.option("--timeout", "command_timeout", type=float, default=600.0, help="Seconds allowed per external command")
@click.option("--out", type=click.Path(dir_okay=False), default=None, help="Write the markdown here instead of stdout")
def report(working_directory, elide, run_depcheck, command_timeout, out):
    """Print the markdown report for the project in --root.

    Runs npm audit, npm outdated and npx depcheck exactly as the Action
    does, but skips validation, the pull request comment, and the gates.

    \b
    Examples:
      prdeps report                     # Report for the current directory
      prdeps report --root web --elide 10
      prdeps report --out report.md
    """
    from prdeps.actions import ActionOutputs
    from prdeps.config import ReportConfig
    from prdeps.pipeline import build_report
    from prdeps.utils.ui import console, print_success

    config = ReportConfig(
        working_directory=working_directory,
        elide=elide,
        run_depcheck=run_depcheck,
        command_timeout=command_timeout,
        elide_attribution=True,
    )
    outcome = asyncio.run(build_report(config, ActionOutputs()))

    if out:
        Path(out).write_text(outcome.body, encoding="utf-8")
        print_success(
            f"Report written to {out} "
            f"({outcome.vulnerability_count} vulnerabilities, {outcome.outdated_count} outdated)"
        )
    else:
        console.print(outcome.body, markup=False, emoji=False, highlight=False, soft_wrap=True)

"""prdeps CLI - main entry point and command registration."""
# ruff: noqa: E402 - commands imported after cli group definition

import click

from prdeps import __version__


@click.group()
@click.version_option(version=__version__, prog_name="prdeps")
@click.help_option("-h", "--help")
def cli():
    """prdeps - Node dependency health report for pull requests

    \b
    QUICK START:
      prdeps run                # Inside a pull_request workflow
      prdeps report             # Preview the report locally

    \b
    For detailed options: prdeps <command> --help"""
    pass


from prdeps.commands.report import report
from prdeps.commands.run import run

cli.add_command(run)
cli.add_command(report)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()

"""Rich console shared by the CLI commands.

Usage:
    from prdeps.utils.ui import console, print_success

    console.print("[success]Report written[/success]")
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

PRDEPS_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=PRDEPS_THEME,
    force_terminal=sys.stdout.isatty()
)

# Diagnostics go to stderr so stdout stays clean for the report body
err_console = Console(theme=PRDEPS_THEME, stderr=True)


def print_success(msg: str) -> None:
    """Print a success message in green."""
    err_console.print(f"[success]OK:[/success] {escape(msg)}", highlight=False)

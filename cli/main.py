#!/usr/bin/env python3
"""
sso-oracle CLI - differential checking of small-string-optimized text

Main entrypoint for the sso-oracle command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from oracle.logging_config import setup_logging
from smartstr import MODES

from cli.commands import fuzz, replay

# Initialize Typer app
app = typer.Typer(
    name="sso-oracle",
    help="Differential oracle for small-string-optimized text",
    add_completion=False,
)

# Console for rich output
console = Console()

app.command("fuzz")(fuzz.fuzz_command)
app.command("replay")(replay.replay_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Overrides SSO_ORACLE_LOG_LEVEL"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or text; overrides SSO_ORACLE_LOG_FORMAT"),
):
    """Differential oracle for small-string-optimized text."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]sso-oracle[/bold]", f"v{__version__}")
    for name in sorted(MODES):
        table.add_row(f"{name} max_inline", str(MODES[name].max_inline))

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()

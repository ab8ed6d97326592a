#!/usr/bin/env python3
"""
vaultcheck CLI - Snapshot metadata verification

Main entrypoint for the vaultcheck command-line tool.
"""

import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from vaultcheck.logging_config import setup_logging
from vaultcheck_cli.commands import snapshot

# Initialize Typer app
app = typer.Typer(
    name="vaultcheck",
    help="Verify backup snapshot signatures and chunk availability",
    add_completion=False,
)

# Console for rich output
console = Console()

# Add command groups
app.add_typer(snapshot.app, name="snapshot", help="Snapshot verification")


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR); default from VAULTCHECK_LOG_LEVEL",
    ),
):
    """Configure logging before running a command."""
    setup_logging(log_level)


@app.command()
def version():
    """Show version information."""
    from vaultcheck_cli import __version__
    from vaultcheck import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]vaultcheck CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")
    table.add_row("Signature", "Ed25519")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()

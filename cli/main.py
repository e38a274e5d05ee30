#!/usr/bin/env python3
"""
dhf CLI - Document History Time Travel

Main entrypoint for the dhf command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cli.commands import commits, search, show, validate
from timetravel.logging_config import setup_logging

app = typer.Typer(
    name="dhf",
    help="Reconstruct markdown documents at any point of their commit history",
    add_completion=False,
)

console = Console()

app.command("show")(show.show_command)
app.command("commits")(commits.commits_command)
app.command("validate")(validate.validate_command)
app.command("search")(search.search_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="text or json"),
):
    """Configure logging before any command runs."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from timetravel import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]dhf CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"timetravel v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()

"""
Commits command: list the commit ledger
"""

import json

import typer
from rich.table import Table

from timetravel.query import touch_counts

from .common import console, load_or_exit


def commits_command(
    path: str = typer.Argument(..., help="Path to DHF JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List commits oldest first, with how many segments each one touched.

    Examples:
        dhf commits README.dhf.json
        dhf commits README.dhf.json --json
    """
    document = load_or_exit(path, json_output)
    touched = touch_counts(document)

    if json_output:
        rows = []
        for i, c in enumerate(document.commits):
            row = c.to_dict()
            row["index"] = i
            row["segments_touched"] = touched.get(c.id, 0)
            rows.append(row)
        print(json.dumps({"commits": rows, "count": len(rows)}, indent=2))
        raise typer.Exit(0)

    if not document.commits:
        console.print("[yellow]Commit ledger is empty[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Commit Ledger")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Commit", style="yellow")
    table.add_column("Author", style="green")
    table.add_column("Date")
    table.add_column("Message")
    table.add_column("Segments", justify="right")

    for i, c in enumerate(document.commits):
        table.add_row(str(i), c.id, c.author, c.date, c.message, str(touched.get(c.id, 0)))

    console.print(table)
    console.print(f"\n[bold]Total commits:[/bold] {len(document.commits)}")
    raise typer.Exit(0)

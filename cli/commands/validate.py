"""
Validate command: referential and data-quality checks
"""

import json

import typer
from rich.table import Table

from timetravel.verify import validate_document

from .common import console, load_or_exit


def validate_command(
    path: str = typer.Argument(..., help="Path to DHF JSON file"),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as failures"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Validate a DHF document.

    Exit codes: 0 valid, 1 issues found, 2 unreadable file.

    Examples:
        dhf validate README.dhf.json
        dhf validate README.dhf.json --strict --json
    """
    document = load_or_exit(path, json_output)
    report = validate_document(document)
    failed = not report.valid or (strict and bool(report.warnings))

    if json_output:
        print(json.dumps(report.to_dict(), indent=2))
        raise typer.Exit(1 if failed else 0)

    if report.issues:
        table = Table(title="Validation Issues")
        table.add_column("Level")
        table.add_column("Code", style="cyan")
        table.add_column("Segment", justify="right")
        table.add_column("Commit", style="yellow")
        table.add_column("Message")
        for issue in report.issues:
            level = "[red]error[/red]" if issue.level == "error" else "[yellow]warning[/yellow]"
            table.add_row(
                level,
                issue.code,
                "" if issue.segment_index is None else str(issue.segment_index),
                issue.commit or "",
                issue.message,
            )
        console.print(table)

    if failed:
        console.print(f"[red]✗ {len(report.errors)} error(s), {len(report.warnings)} warning(s)[/red]")
    else:
        console.print(f"[green]✓ Document valid[/green] ({report.checked_segments} segments, "
                      f"{len(report.warnings)} warning(s))")
    raise typer.Exit(1 if failed else 0)

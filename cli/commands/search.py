"""
Search command: find text across all versions
"""

import json

import typer
from rich.table import Table

from timetravel.query import search_across_versions

from .common import console, load_or_exit


def search_command(
    path: str = typer.Argument(..., help="Path to DHF JSON file"),
    query: str = typer.Argument(..., help="Text to search for (case-insensitive)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Search current and historical segment text.

    Examples:
        dhf search README.dhf.json "diff"
        dhf search README.dhf.json alpha --json
    """
    document = load_or_exit(path, json_output)
    hits = search_across_versions(document, query)

    if json_output:
        print(json.dumps({"query": query, "hits": [h.to_dict() for h in hits], "count": len(hits)}, indent=2))
        raise typer.Exit(0)

    if not hits:
        console.print(f"[yellow]No matches for[/yellow] {query!r}")
        raise typer.Exit(0)

    table = Table(title=f"Matches for {query!r}")
    table.add_column("Segment", style="cyan", justify="right")
    table.add_column("Source")
    table.add_column("Commit", style="yellow")
    table.add_column("Author", style="green")
    table.add_column("Text")
    for h in hits:
        table.add_row(str(h.segment_index), h.source, h.commit or "", h.author or "", h.match_text.strip())

    console.print(table)
    console.print(f"\n[bold]Total matches:[/bold] {len(hits)}")
    raise typer.Exit(0)

"""
Show command: reconstruct a document at a commit
"""

import json
from typing import Optional

import typer
from rich.text import Text

from timetravel.core import EmptyLedgerError, SegmentType
from timetravel.logging_config import enable_trace_logging
from timetravel.query import resolve_commit_id
from timetravel.reconstruct import LoggingTracer, current_state, reconstruct_at, tracer_from_env

from .common import console, fail, load_or_exit

STYLES = {
    SegmentType.UNCHANGED: "",
    SegmentType.ADDED: "green",
    SegmentType.MODIFIED: "yellow",
    SegmentType.DELETED: "red strike",
}


def show_command(
    path: str = typer.Argument(..., help="Path to DHF JSON file"),
    at: Optional[str] = typer.Option(None, "--at", "-a", help="Commit id, unique prefix, or HEAD"),
    keys: bool = typer.Option(False, "--keys", "-k", help="Prefix each segment with its stable key"),
    plain: bool = typer.Option(False, "--plain", help="Print the reconstructed text only"),
    trace: bool = typer.Option(False, "--trace", help="Log reconstruction decisions (requires --at)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Reconstruct the document as it stood at a commit.

    Without --at, shows the current state as stored; --trace only applies to
    a reconstruction at a commit. An unknown commit falls back to the current
    state.

    Examples:
        dhf show README.dhf.json
        dhf show README.dhf.json --at h7i8j9k
        dhf show README.dhf.json --at h7i --plain
        dhf show README.dhf.json --json
    """
    document = load_or_exit(path, json_output)
    doc_name = document.info.path if document.info and document.info.path else path
    tracer = LoggingTracer(document_name=doc_name) if trace else tracer_from_env(doc_name)
    if isinstance(tracer, LoggingTracer):
        enable_trace_logging()

    resolved = None
    if at is None:
        try:
            result = current_state(document)
        except EmptyLedgerError as e:
            raise fail(str(e), json_output)
    else:
        resolved = resolve_commit_id(document, at)
        result = reconstruct_at(document, resolved or at, tracer=tracer)

    if json_output:
        out = result.to_dict()
        if keys:
            out["keys"] = [k for k, _ in result.keyed_segments()]
        print(json.dumps(out, indent=2, ensure_ascii=False))
        raise typer.Exit(0)

    if plain:
        typer.echo(result.text, nl=False)
        raise typer.Exit(0)

    if trace and at is None:
        console.print("[yellow]--trace needs --at; the current state is shown untraced[/yellow]")
    if at is not None and resolved is None:
        console.print(f"[yellow]Commit {at} not found, showing current state[/yellow]")

    label = "historical" if result.is_historical else "current"
    console.print(f"[bold]{doc_name}[/bold] at [cyan]{result.commit}[/cyan] ({label})")
    console.print(f"Segments: {len(result.segments)} of {len(document.content)}\n")

    for key, segment in result.keyed_segments():
        line = Text()
        if keys:
            line.append(f"[{key}] ", style="dim")
        line.append(segment.text, style=STYLES[segment.type])
        console.print(line)

    raise typer.Exit(0)

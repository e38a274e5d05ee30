"""
Shared helpers for dhf commands.
"""

import json

import typer
from rich.console import Console

from timetravel.core import Document, DocumentFormatError
from timetravel.load import load_document

console = Console()


def fail(message: str, json_output: bool, code: int = 2, **fields) -> typer.Exit:
    """Print an error in the requested format and return the Exit to raise."""
    if json_output:
        print(json.dumps({"error": message, **fields}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(code)


def load_or_exit(path: str, json_output: bool) -> Document:
    """
    Load a DHF document, exiting with code 2 when it cannot be read.
    """
    try:
        return load_document(path)
    except FileNotFoundError:
        raise fail("Document file not found", json_output, path=path)
    except DocumentFormatError as e:
        raise fail(f"Malformed document: {e}", json_output, path=path)

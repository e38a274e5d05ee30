"""
Document History Format loader.

Reads a DHF JSON file (top-level document, view, commits, content, summary)
into an immutable Document. Loading checks structure only; referential and
data-quality checks live in timetravel.verify.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from ..core.errors import DocumentFormatError
from ..core.models import Document
from ..logging_config import get_logger

logger = get_logger(__name__)


def document_from_dict(data: Dict[str, Any]) -> Document:
    """
    Build a Document from decoded JSON.

    Raises:
        DocumentFormatError: If required fields are missing or malformed
    """
    return Document.from_dict(data)


def document_from_json(text: Union[str, bytes]) -> Document:
    """
    Parse DHF JSON text.

    Raises:
        DocumentFormatError: If text is not valid JSON or not a DHF document
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"invalid JSON: {e}") from e
    return document_from_dict(data)


def load_document(path: Union[str, Path]) -> Document:
    """
    Load a DHF document from a JSON file.

    Args:
        path: Path to the .json file

    Returns:
        Loaded Document

    Raises:
        FileNotFoundError: If path does not exist
        DocumentFormatError: If the file is not a DHF document
    """
    with open(path, "rb") as f:
        raw = f.read()
    document = document_from_json(raw)
    logger.info(
        "loaded document",
        extra={"path": str(path), "commits": len(document.commits), "segments": len(document.content)},
    )
    return document


def dump_document(document: Document, path: Union[str, Path]) -> None:
    """Write ``document`` back to ``path`` as indented DHF JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")

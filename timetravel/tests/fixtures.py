"""
Explicit document fixtures. No random generation.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from timetravel.core import Document

SAMPLE_PATH = Path(__file__).resolve().parents[2] / "samples" / "readme.dhf.json"

C1, C2, C3, C4 = "c1", "c2", "c3", "c4"


def commit(cid: str, author: str = "alice", day: int = 1) -> Dict[str, Any]:
    return {
        "id": cid,
        "author": author,
        "date": f"2025-01-{day:02d}T12:00:00Z",
        "message": f"commit {cid}",
    }


def entry(cid: str, action: str, **fields) -> Dict[str, Any]:
    e = {"commit": cid, "author": "alice", "date": "", "message": f"commit {cid}", "action": action}
    e.update(fields)
    return e


def make_document(content: List[Dict[str, Any]], commit_ids: Optional[List[str]] = None) -> Document:
    ids = commit_ids if commit_ids is not None else [C1, C2, C3]
    return Document.from_dict({
        "commits": [commit(cid, day=i + 1) for i, cid in enumerate(ids)],
        "content": content,
    })


def scenario_document() -> Document:
    """
    Three commits, one unchanged header, one segment with history
    (added at c1, modified at c3), one added at c2, one deleted at c3.
    """
    return make_document([
        {"type": "unchanged", "text": "# Title\n"},
        {
            "type": "modified",
            "text": "B",
            "change": {"commit": C3, "before": "A"},
            "history": [
                entry(C1, "added", text="A"),
                entry(C3, "modified", before="A", after="B"),
            ],
        },
        {"type": "added", "text": "new line", "change": {"commit": C2}},
        {"type": "deleted", "text": "old line", "change": {"commit": C3}},
    ])

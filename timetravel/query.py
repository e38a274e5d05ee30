"""
Deterministic query helpers over a loaded document.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .core.models import Commit, Document, Segment


@dataclass(frozen=True)
class SearchHit:
    """
    One match of a search across versions.

    segment_index points into document.content; commit is the commit whose
    text matched (None for current text of a segment without provenance).
    """
    segment_index: int
    match_text: str
    source: str
    commit: Optional[str] = None
    commit_message: Optional[str] = None
    author: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "segment_index": self.segment_index,
            "match_text": self.match_text,
            "source": self.source,
            "commit": self.commit,
            "commit_message": self.commit_message,
            "author": self.author,
        }


def list_commit_ids(document: Document) -> List[str]:
    return [c.id for c in document.commits]


def get_commit(document: Document, commit_id: str) -> Optional[Commit]:
    for c in document.commits:
        if c.id == commit_id:
            return c
    return None


def resolve_commit_id(document: Document, commit_ref: str) -> Optional[str]:
    """
    Resolve a commit reference to a full ledger id.

    Accepts:
    - full commit id
    - unique id prefix (like git short hashes)
    - "HEAD" / "latest" for the newest commit
    """
    if not document.commits:
        return None
    if commit_ref in ("HEAD", "latest"):
        return document.commits[-1].id
    if get_commit(document, commit_ref) is not None:
        return commit_ref

    matches = sorted({c.id for c in document.commits if c.id.startswith(commit_ref)})
    if len(matches) == 1:
        return matches[0]
    return None


def segment_commits(segment: Segment) -> List[str]:
    """Commits that touched ``segment``, in stored order, without duplicates."""
    seen: List[str] = []
    if segment.history:
        for entry in segment.history:
            if entry.commit not in seen:
                seen.append(entry.commit)
    elif segment.change is not None:
        seen.append(segment.change.commit)
    return seen


def segments_touched_by(document: Document, commit_id: str) -> List[int]:
    """Indices of segments whose change or history references ``commit_id``."""
    return [i for i, seg in enumerate(document.content) if commit_id in segment_commits(seg)]


def touch_counts(document: Document) -> Dict[str, int]:
    """Number of segments each ledger commit touched (0 for none)."""
    counts = {c.id: 0 for c in document.commits}
    for seg in document.content:
        for commit_id in segment_commits(seg):
            if commit_id in counts:
                counts[commit_id] += 1
    return counts


def search_across_versions(document: Document, query: str) -> List[SearchHit]:
    """
    Case-insensitive substring search over current and historical text.

    For each segment, checks in order: current text, every history entry
    (after, else text, else before), then change.before. A segment can
    produce several hits. Blank queries return nothing.
    """
    if not query or not query.strip():
        return []

    needle = query.lower()
    commits = {c.id: c for c in document.commits}
    hits: List[SearchHit] = []

    for idx, seg in enumerate(document.content):
        change_commit = commits.get(seg.change.commit) if seg.change is not None else None

        if needle in seg.text.lower():
            hits.append(SearchHit(
                segment_index=idx,
                match_text=seg.text,
                source="current",
                commit=seg.change.commit if seg.change is not None else None,
                commit_message=change_commit.message if change_commit else None,
                author=change_commit.author if change_commit else None,
            ))

        for entry in seg.history or ():
            haystack = entry.resolved_text()
            if haystack is None:
                haystack = entry.before or ""
            if needle in haystack.lower():
                c = commits.get(entry.commit)
                hits.append(SearchHit(
                    segment_index=idx,
                    match_text=haystack,
                    source="history",
                    commit=entry.commit,
                    commit_message=c.message if c else entry.message,
                    author=c.author if c else entry.author,
                ))

        if seg.change is not None and seg.change.before and needle in seg.change.before.lower():
            hits.append(SearchHit(
                segment_index=idx,
                match_text=seg.change.before,
                source="before",
                commit=seg.change.commit,
                commit_message=change_commit.message if change_commit else None,
                author=change_commit.author if change_commit else None,
            ))

    return hits

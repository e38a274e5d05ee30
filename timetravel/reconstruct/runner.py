"""
Reconstruction runner: project a document onto a point in its commit ledger.

Projection is pure: every segment is resolved independently against the set
of commits at or before the target, and the input document is never touched.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from ..core.errors import EmptyLedgerError
from ..core.ids import segment_key
from ..core.models import Action, Change, Document, HistoryEntry, Segment, SegmentType
from .tracing import NULL_TRACER, ReconstructionTracer, SegmentDecision


@dataclass(frozen=True)
class ProjectedSegment:
    """
    Segment as it stood at the target commit.

    Fields:
        index: Position of the source segment in document.content
        key: Stable key derived from index (see core.ids.segment_key)
        segment: The projected segment (the original object when unchanged)
    """
    index: int
    key: str
    segment: Segment


@dataclass(frozen=True)
class ReconstructionResult:
    """
    Result of a reconstruction.

    Fields:
        commit: The requested commit id (echoed even when unknown)
        segments: Projected segments, original relative order preserved
        is_historical: True iff the commit is in the ledger but is not the latest
    """
    commit: str
    segments: Tuple[Segment, ...]
    is_historical: bool
    indices: Optional[Tuple[int, ...]] = field(default=None, compare=False, repr=False)

    def keyed_segments(self, namespace: Optional[str] = None) -> List[Tuple[str, Segment]]:
        """Pair each segment with the stable key of its source position."""
        indices = self.indices if self.indices is not None else range(len(self.segments))
        return [(segment_key(i, namespace), s) for i, s in zip(indices, self.segments)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commit": self.commit,
            "segments": [s.to_dict() for s in self.segments],
            "is_historical": self.is_historical,
        }

    @property
    def text(self) -> str:
        """Concatenated text of the projection."""
        return "".join(s.text for s in self.segments)


def _effective_entry(
    history: Tuple[HistoryEntry, ...],
    target_commit_id: str,
    at_or_before: FrozenSet[str],
) -> Optional[HistoryEntry]:
    """
    Latest history entry that applies at the target commit.

    An exact match on the target commit wins outright (last match if the
    commit appears more than once). Otherwise the last entry whose commit is
    in the at-or-before set. None means the segment did not exist yet.
    """
    for entry in reversed(history):
        if entry.commit == target_commit_id:
            return entry
    for entry in reversed(history):
        if entry.commit in at_or_before:
            return entry
    return None


def _project_history(
    index: int,
    segment: Segment,
    target_commit_id: str,
    at_or_before: FrozenSet[str],
    tracer: ReconstructionTracer,
) -> Optional[Segment]:
    entry = _effective_entry(segment.history, target_commit_id, at_or_before)
    if entry is None:
        tracer.on_segment(index, segment, SegmentDecision.NOT_YET_PRESENT)
        return None
    if entry.action == Action.DELETED:
        tracer.on_segment(index, segment, SegmentDecision.DELETED, entry)
        return None

    text = entry.resolved_text()
    if text is None:
        tracer.on_text_fallback(index, segment, entry)
        text = segment.text

    tracer.on_segment(index, segment, SegmentDecision.PROJECTED, entry)
    return Segment(
        type=SegmentType.ADDED if entry.action == Action.ADDED else SegmentType.MODIFIED,
        text=text,
        change=Change(commit=entry.commit, before=entry.before, modifications=entry.modifications),
    )


def _project_segment(
    index: int,
    segment: Segment,
    target_commit_id: str,
    at_or_before: FrozenSet[str],
    tracer: ReconstructionTracer,
) -> Optional[Segment]:
    if segment.type == SegmentType.UNCHANGED:
        tracer.on_segment(index, segment, SegmentDecision.UNCHANGED)
        return segment

    if segment.has_history:
        return _project_history(index, segment, target_commit_id, at_or_before, tracer)

    if segment.change is not None:
        if segment.change.commit not in at_or_before:
            tracer.on_segment(index, segment, SegmentDecision.NOT_YET_PRESENT)
            return None
        # Reaching the deleting commit removes the segment; the pre-delete
        # text is not retained without history.
        if segment.type == SegmentType.DELETED:
            tracer.on_segment(index, segment, SegmentDecision.DELETED)
            return None
        tracer.on_segment(index, segment, SegmentDecision.INCLUDED)
        return segment

    tracer.on_segment(index, segment, SegmentDecision.MALFORMED)
    return None


def project_at(
    document: Document,
    target_commit_id: str,
    tracer: Optional[ReconstructionTracer] = None,
) -> Optional[List[ProjectedSegment]]:
    """
    Project every segment of ``document`` onto ``target_commit_id``.

    Returns None when the commit is not in the ledger; callers decide what
    that means (reconstruct_at falls back to the current state).
    """
    tracer = tracer or NULL_TRACER
    commit_index = document.commit_index(target_commit_id)
    if commit_index == -1:
        tracer.on_unknown_commit(target_commit_id)
        return None

    tracer.on_start(target_commit_id, commit_index, len(document.commits))
    at_or_before = frozenset(c.id for c in document.commits[: commit_index + 1])

    projected = []
    for i, segment in enumerate(document.content):
        out = _project_segment(i, segment, target_commit_id, at_or_before, tracer)
        if out is not None:
            projected.append(ProjectedSegment(index=i, key=segment_key(i), segment=out))
    return projected


def reconstruct_at(
    document: Document,
    target_commit_id: str,
    tracer: Optional[ReconstructionTracer] = None,
) -> ReconstructionResult:
    """
    Reconstruct the document as it stood at ``target_commit_id``.

    An unknown commit id is not an error: the current (unprojected) content
    is returned with is_historical=False.

    Args:
        document: Document snapshot (not mutated)
        target_commit_id: Commit id expected to be in document.commits
        tracer: Optional tracing hooks (default: no-op)

    Returns:
        ReconstructionResult for the target commit
    """
    tracer = tracer or NULL_TRACER
    projected = project_at(document, target_commit_id, tracer)
    if projected is None:
        return ReconstructionResult(
            commit=target_commit_id,
            segments=document.content,
            is_historical=False,
        )

    is_historical = document.commit_index(target_commit_id) < len(document.commits) - 1
    tracer.on_finish(target_commit_id, len(projected), len(document.content), is_historical)
    return ReconstructionResult(
        commit=target_commit_id,
        segments=tuple(p.segment for p in projected),
        is_historical=is_historical,
        indices=tuple(p.index for p in projected),
    )


def current_state(document: Document) -> ReconstructionResult:
    """
    Latest state of the document: the content as stored.

    Raises:
        EmptyLedgerError: If the document has no commits
    """
    latest = document.latest_commit
    if latest is None:
        raise EmptyLedgerError("cannot take current state of a document with an empty commit ledger")
    return ReconstructionResult(commit=latest.id, segments=document.content, is_historical=False)

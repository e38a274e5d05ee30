"""
Load-time validation of DHF documents.

The reconstruction engine tolerates imperfect data by excluding segments or
falling back to current text. This module reports those situations so they
can be fixed at the source instead of silently degrading a historical view.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.errors import ValidationError
from ..core.models import Action, Document, SegmentType

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    level: str
    code: str
    message: str
    segment_index: Optional[int] = None
    commit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "message": self.message,
            "segment_index": self.segment_index,
            "commit": self.commit,
        }


@dataclass
class ValidationReport:
    issues: List[ValidationIssue] = field(default_factory=list)
    checked_segments: int = 0

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors

    def add(self, level: str, code: str, message: str, segment_index: Optional[int] = None,
            commit: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue(level, code, message, segment_index, commit))

    def raise_for_errors(self) -> None:
        """
        Raises:
            ValidationError: If the report holds at least one error
        """
        errors = self.errors
        if errors:
            raise ValidationError(f"document has {len(errors)} validation error(s): {errors[0].message}", errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "checked_segments": self.checked_segments,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [i.to_dict() for i in self.issues],
        }


def validate_document(document: Document) -> ValidationReport:
    """
    Check ledger and segment provenance of ``document``.

    Checks:
    - ledger is non-empty and commit ids are unique
    - every change/history commit exists in the ledger
    - unchanged segments carry no provenance; other segments do
    - history entries that would reconstruct text have after/text
    - history entries follow ledger order
    - deleted segments without history (pre-deletion text is lost)
    """
    report = ValidationReport()

    if not document.commits:
        report.add(ERROR, "empty_ledger", "commit ledger is empty")

    positions: Dict[str, int] = {}
    for i, c in enumerate(document.commits):
        if c.id in positions:
            report.add(ERROR, "duplicate_commit", f"commit {c.id} appears more than once in the ledger", commit=c.id)
            continue
        positions[c.id] = i

    for idx, seg in enumerate(document.content):
        report.checked_segments += 1

        if seg.type == SegmentType.UNCHANGED:
            if seg.change is not None or seg.history:
                report.add(ERROR, "unchanged_with_provenance",
                           "unchanged segment carries change/history", segment_index=idx)
            continue

        if seg.change is None and not seg.history:
            report.add(WARNING, "missing_provenance",
                       f"{seg.type.value} segment has neither change nor history; it is never shown",
                       segment_index=idx)
            continue

        if seg.change is not None and seg.change.commit not in positions:
            report.add(ERROR, "unknown_commit",
                       f"change references commit {seg.change.commit} which is not in the ledger",
                       segment_index=idx, commit=seg.change.commit)

        if not seg.history:
            if seg.type == SegmentType.DELETED:
                report.add(WARNING, "deleted_without_history",
                           "deleted segment has no history; its text before deletion cannot be shown",
                           segment_index=idx, commit=seg.change.commit if seg.change else None)
            continue

        last_pos = -1
        for entry in seg.history:
            pos = positions.get(entry.commit)
            if pos is None:
                report.add(ERROR, "unknown_commit",
                           f"history references commit {entry.commit} which is not in the ledger",
                           segment_index=idx, commit=entry.commit)
                continue
            if pos < last_pos:
                report.add(WARNING, "history_out_of_order",
                           f"history entry for commit {entry.commit} precedes an earlier entry in ledger order",
                           segment_index=idx, commit=entry.commit)
            last_pos = max(last_pos, pos)
            if entry.action != Action.DELETED and entry.resolved_text() is None:
                report.add(WARNING, "missing_text",
                           f"{entry.action.value} entry for commit {entry.commit} has neither 'after' nor 'text'",
                           segment_index=idx, commit=entry.commit)

    return report

"""
Core document-history primitives.

This module provides the foundational abstractions for reconstruction:
- Models: Commit, Segment, HistoryEntry, Change, Document (immutable)
- Canonical: Deterministic serialization and hashing
- IDs: Stable position-derived segment keys
- Errors: Format, ledger and validation failures
"""

from .models import (
    Action,
    AuthorStat,
    Change,
    Commit,
    Document,
    DocumentInfo,
    DocumentView,
    HistoryEntry,
    Modification,
    Segment,
    SegmentType,
    Summary,
)
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, canonical_hash
from .ids import stable_id, segment_key
from .errors import DocumentFormatError, EmptyLedgerError, ValidationError

__all__ = [
    "Action",
    "AuthorStat",
    "Change",
    "Commit",
    "Document",
    "DocumentInfo",
    "DocumentView",
    "HistoryEntry",
    "Modification",
    "Segment",
    "SegmentType",
    "Summary",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "canonical_hash",
    "stable_id",
    "segment_key",
    "DocumentFormatError",
    "EmptyLedgerError",
    "ValidationError",
]

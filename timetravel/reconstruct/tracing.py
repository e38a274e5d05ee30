"""
Tracing hooks for reconstruction.

The engine never logs on its own. Callers inject a tracer; the default one
does nothing. Enable LoggingTracer with DHF_TRACE=1 or pass one explicitly.
"""

import os
import threading
from enum import Enum
from typing import Optional

from ..core.models import HistoryEntry, Segment
from ..logging_config import get_logger

TRUTHY = {"1", "true", "yes", "on"}


class SegmentDecision(str, Enum):
    """Why a segment ended up (or not) in a projection."""
    UNCHANGED = "unchanged"
    PROJECTED = "projected"
    INCLUDED = "included"
    NOT_YET_PRESENT = "not_yet_present"
    DELETED = "deleted"
    MALFORMED = "malformed"


class ReconstructionTracer:
    """
    Base tracer. Every hook is a no-op; subclasses override what they need.

    Hooks must not raise and must not mutate their arguments.
    """

    def on_start(self, target_commit_id: str, commit_index: int, total_commits: int) -> None:
        pass

    def on_unknown_commit(self, target_commit_id: str) -> None:
        pass

    def on_segment(
        self,
        index: int,
        segment: Segment,
        decision: SegmentDecision,
        entry: Optional[HistoryEntry] = None,
    ) -> None:
        pass

    def on_text_fallback(self, index: int, segment: Segment, entry: HistoryEntry) -> None:
        pass

    def on_finish(self, target_commit_id: str, kept: int, total: int, is_historical: bool) -> None:
        pass


class NullTracer(ReconstructionTracer):
    """Tracer that records nothing."""


NULL_TRACER = NullTracer()


class LoggingTracer(ReconstructionTracer):
    """
    Emits one structured debug record per hook.

    Records carry trace_id "<document>@<commit>" so a single reconstruction
    can be filtered out of interleaved logs. The trace-bound logger is kept
    per thread, so one tracer can serve concurrent reconstructions.
    """

    def __init__(self, logger_name: str = "timetravel.trace", document_name: Optional[str] = None) -> None:
        self._logger_name = logger_name
        self._document_name = document_name or "document"
        self._default_log = get_logger(logger_name)
        self._local = threading.local()

    @property
    def _log(self):
        return getattr(self._local, "log", self._default_log)

    def _bind(self, target_commit_id: str) -> None:
        self._local.log = get_logger(self._logger_name, trace_id=f"{self._document_name}@{target_commit_id}")

    def on_start(self, target_commit_id, commit_index, total_commits):
        self._bind(target_commit_id)
        self._log.debug(
            "reconstruction started",
            extra={"commit_index": commit_index, "total_commits": total_commits},
        )

    def on_unknown_commit(self, target_commit_id):
        self._bind(target_commit_id)
        self._log.debug("target commit not in ledger, returning current state")

    def on_segment(self, index, segment, decision, entry=None):
        self._log.debug(
            "segment %s",
            decision.value,
            extra={
                "segment_index": index,
                "segment_type": segment.type.value,
                "entry_commit": entry.commit if entry is not None else None,
                "entry_action": entry.action.value if entry is not None else None,
            },
        )

    def on_text_fallback(self, index, segment, entry):
        self._log.warning(
            "history entry has neither 'after' nor 'text', using current segment text",
            extra={"segment_index": index, "entry_commit": entry.commit},
        )

    def on_finish(self, target_commit_id, kept, total, is_historical):
        self._log.debug(
            "reconstruction finished",
            extra={"kept": kept, "total": total, "is_historical": is_historical},
        )


def tracer_from_env(document_name: Optional[str] = None) -> ReconstructionTracer:
    """LoggingTracer when DHF_TRACE is truthy, otherwise the shared NullTracer."""
    if os.getenv("DHF_TRACE", "").strip().lower() in TRUTHY:
        return LoggingTracer(document_name=document_name)
    return NULL_TRACER

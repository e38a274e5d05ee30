"""
Time-travel reconstruction of document history.

Reconstruction projects each segment onto a target commit in the ledger.
Must be 100% deterministic: same document + same commit -> same segments.
"""

from .runner import ProjectedSegment, ReconstructionResult, current_state, project_at, reconstruct_at
from .cache import ReconstructionCache
from .tracing import LoggingTracer, NullTracer, ReconstructionTracer, SegmentDecision, tracer_from_env

__all__ = [
    "ProjectedSegment",
    "ReconstructionResult",
    "current_state",
    "project_at",
    "reconstruct_at",
    "ReconstructionCache",
    "LoggingTracer",
    "NullTracer",
    "ReconstructionTracer",
    "SegmentDecision",
    "tracer_from_env",
]

"""
Document History Time Travel

Reconstructs a markdown document's content as it stood at any commit of its
edit history, from a Document History Format (DHF) snapshot.
"""

__version__ = "0.1.0"

from .core import Document, DocumentFormatError, EmptyLedgerError, Segment, ValidationError
from .load import load_document
from .reconstruct import ReconstructionCache, ReconstructionResult, current_state, reconstruct_at
from .verify import validate_document

__all__ = [
    "__version__",
    "Document",
    "Segment",
    "DocumentFormatError",
    "EmptyLedgerError",
    "ValidationError",
    "load_document",
    "ReconstructionCache",
    "ReconstructionResult",
    "current_state",
    "reconstruct_at",
    "validate_document",
]

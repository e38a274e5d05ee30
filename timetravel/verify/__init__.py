"""
Verification helpers for DHF documents.
"""

from .validation import ERROR, WARNING, ValidationIssue, ValidationReport, validate_document

__all__ = [
    "ERROR",
    "WARNING",
    "ValidationIssue",
    "ValidationReport",
    "validate_document",
]

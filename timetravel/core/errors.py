"""
Exception types for the time-travel reconstruction engine.
"""


class DocumentFormatError(Exception):
    """Raised when a document does not match the Document History Format."""
    pass


class EmptyLedgerError(Exception):
    """Raised when an operation needs a commit but the ledger is empty."""
    pass


class ValidationError(Exception):
    """Raised when load-time validation finds errors and the caller asked to fail."""

    def __init__(self, message: str, issues=None) -> None:
        super().__init__(message)
        self.issues = list(issues or [])

"""Exception hierarchy for the ledger service."""


class LedgerError(Exception):
    """Base exception for all ledger service errors."""


class InvalidOperationError(LedgerError):
    """Raised when an operation would be stored in an inconsistent state."""

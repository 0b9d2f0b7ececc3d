"""
Flowfin exception hierarchy.

All flowfin exceptions inherit from FlowfinError, making it easy for callers
to catch engine-level errors while still distinguishing specific failure modes.
Model precondition violations (negative amounts, zero-length loans) raise
plain ValueError at construction time instead.
"""


class FlowfinError(Exception):
    """Base exception class for all flowfin errors."""


class ConfigurationError(FlowfinError):
    """Raised for configuration errors (missing keys, invalid values)."""


class DataProcessingError(FlowfinError):
    """Raised when stored records cannot be turned back into models."""


class StorageError(FlowfinError):
    """Raised when the ledger file cannot be read or written."""


class ReconciliationError(FlowfinError):
    """Raised when an account reconciliation could not be persisted."""

"""Domain-specific exceptions for ledger services."""


class LedgerServiceError(Exception):
    """Base exception for ledger services."""

    status_code = 500

    def __init__(self, message='', details=None):
        super().__init__(message)
        self.details = details


class LedgerValidationError(LedgerServiceError):
    """Raised when required input is missing or malformed."""
    status_code = 400


class EntityNotFoundError(LedgerServiceError):
    """Raised when a referenced record does not exist."""
    status_code = 404


class DuplicateKeyError(LedgerServiceError):
    """Raised when a unique key is already taken."""
    status_code = 400


class ReconciliationError(LedgerServiceError):
    """Raised when a balance adjustment cannot be applied."""
    pass

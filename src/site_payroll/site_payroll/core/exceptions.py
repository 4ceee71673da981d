class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class ConflictError(DomainError):
    """Raised when attendance for a locked site-day is submitted again."""

    kind = "conflict_error"


class StoreError(DomainError):
    """Raised when the record store cannot complete an operation.

    Safe to retry: submissions re-check their preconditions on every attempt.
    """

    kind = "store_error"


class ComputationError(DomainError):
    """Raised when stored money values cannot be read as numbers."""

    kind = "computation_error"

"""Custom exception types for fintrack."""

from typing import Any


class FinTrackError(Exception):
    """Base class for all fintrack errors."""


class ValidationError(FinTrackError):
    """Raised when one or more fields fail validation.

    Attributes:
        errors: Mapping of field name to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        message = "; ".join(f"{name}: {error}" for name, error in errors.items())
        super().__init__(message or "Validation failed")
        self.errors = dict(errors)


class TransactionValidationError(ValidationError):
    """Raised when transaction fields fail validation."""


class SettingsValidationError(ValidationError):
    """Raised when a settings update fails validation."""


class NotFoundError(FinTrackError):
    """Raised when a requested record does not exist."""


class MalformedImportError(FinTrackError):
    """Raised when an import payload is rejected as a whole.

    Attributes:
        details: Per-record problems, keyed by position in the payload.
    """

    def __init__(self, message: str, details: dict[int, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class InvalidPatternError(FinTrackError):
    """Raised when a search pattern is not a valid regular expression."""


class StorageError(FinTrackError):
    """Raised when the durable store cannot be read or written."""


class StoreInvariantError(FinTrackError):
    """Raised when an internal store invariant would be violated."""

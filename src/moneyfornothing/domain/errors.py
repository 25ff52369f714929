"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class ValidationError(DomainError):
    """Invalid user input for a single record field."""

    def __init__(self, reason: str, field: Optional[str] = None):
        self.field = field
        self.reason = reason
        message = f"{field}: {reason}" if field else reason
        super().__init__(message)


class NotFoundError(DomainError):
    """Requested record does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as duplicate record names."""


class ProtectedRecordError(DomainError):
    """Operation blocked because the record is a protected paycheck."""


class ImportParseFailure(DomainError):
    """CSV input could not be recognized as an export."""


class StorageError(RuntimeError):
    """Reading from or writing to the persistence backend failed."""


def record_not_found(kind: str, record_id: str) -> str:
    """Return message for a missing record."""
    return f"{kind.capitalize()} {record_id} not found"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a name already used in the collection."""
    return f"{kind.capitalize()} with name '{name.strip()}' already exists"


def paycheck_delete_blocked(name: str) -> str:
    """Return message when a protected paycheck is deleted."""
    return f"Cannot delete '{name}': the two main paychecks are protected"


def no_records_recovered() -> str:
    """Return message for a CSV file with nothing importable in it."""
    return "No income, bills or savings found in the file"

"""Domain layer for moneyfornothing application."""

from moneyfornothing.domain.entities import (
    AppData,
    AppState,
    Bill,
    Income,
    Savings,
    SavingsHistoryEntry,
)
from moneyfornothing.domain.errors import (
    ConflictError,
    DomainError,
    ImportParseFailure,
    NotFoundError,
    ProtectedRecordError,
    StorageError,
    ValidationError,
)

__all__ = [
    "AppData",
    "AppState",
    "Bill",
    "Income",
    "Savings",
    "SavingsHistoryEntry",
    "ConflictError",
    "DomainError",
    "ImportParseFailure",
    "NotFoundError",
    "ProtectedRecordError",
    "StorageError",
    "ValidationError",
]

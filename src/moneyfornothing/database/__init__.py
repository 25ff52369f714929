"""Persistence layer for moneyfornothing."""

from moneyfornothing.database.base import Database
from moneyfornothing.database.factories import (
    create_database,
    create_json_database,
    create_sqlite_database,
)

__all__ = ["Database", "create_database", "create_json_database", "create_sqlite_database"]

"""Database factory functions for creating storage backends."""

import os
from pathlib import Path
from typing import Optional

from moneyfornothing.database.base import Database
from moneyfornothing.database.json_file import JSONFileDatabase
from moneyfornothing.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "MFN_DB_PATH"
BACKEND_ENV = "MFN_STORAGE_BACKEND"
DEFAULT_BACKEND = "sqlite"
BACKENDS = ("sqlite", "json")


def _default_path(filename: str) -> str:
    data_dir = Path.home() / ".moneyfornothing"
    data_dir.mkdir(exist_ok=True)
    return str(data_dir / filename)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks MFN_DB_PATH
            environment variable, then defaults to ~/.moneyfornothing/moneyfornothing.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = _default_path("moneyfornothing.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_json_database(file_path: Optional[str] = None) -> JSONFileDatabase:
    """Create a JSON file store.

    Args:
        file_path: Path to the JSON document. If None, checks MFN_DB_PATH
            environment variable, then defaults to ~/.moneyfornothing/moneyfornothing.json
    """
    if file_path is None:
        file_path = os.environ.get(DB_PATH_ENV)

    if file_path is None:
        file_path = _default_path("moneyfornothing.json")

    return JSONFileDatabase(file_path)


def create_database(backend: Optional[str] = None, database_path: Optional[str] = None) -> Database:
    """Create the configured storage backend.

    Args:
        backend: "sqlite" or "json". If None, checks MFN_STORAGE_BACKEND,
            then defaults to "sqlite"
        database_path: Backend file path (see the specific factories)

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend is None:
        backend = os.environ.get(BACKEND_ENV, DEFAULT_BACKEND)
    backend = backend.strip().lower()

    if backend == "sqlite":
        return create_sqlite_database(database_path)
    if backend == "json":
        return create_json_database(database_path)
    raise ValueError(f"Unknown storage backend '{backend}'. Supported: {', '.join(BACKENDS)}")

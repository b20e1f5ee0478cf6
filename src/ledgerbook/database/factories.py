"""Database factory functions for creating database instances."""

import os
from typing import Optional

from ledgerbook.database.sqlalchemy_db import SQLAlchemyDatabase
from ledgerbook.settings import DB_PATH_ENV, Settings


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERBOOK_DB_PATH
            environment variable, then defaults to ~/.ledgerbook/ledgerbook.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = str(Settings.default_db_path())

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)

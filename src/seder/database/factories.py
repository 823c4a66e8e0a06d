"""Database factory functions for creating database instances."""

from typing import Optional

from seder.config import resolve_db_path
from seder.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SEDER_DB_PATH
            environment variable, then defaults to ~/.seder/seder.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    database_url = f"sqlite:///{resolve_db_path(database_path)}"
    return SQLAlchemyDatabase(database_url)

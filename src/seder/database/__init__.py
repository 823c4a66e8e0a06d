"""Database layer for seder application."""

from seder.database.base import Database
from seder.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]

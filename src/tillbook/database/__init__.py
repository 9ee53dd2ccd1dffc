"""Database layer for tillbook application."""

from tillbook.database.base import Database
from tillbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
